import logging
from typing import Callable, List

logger = logging.getLogger(__name__)


class ForegroundSignal:
	"""Broadcasts host active/inactive transitions to subscribers.

	Hosts call `emit(active)`; repeated reports of the same state are dropped so
	subscribers only ever see real transitions.
	"""

	def __init__(self, active: bool = True):
		self.active = active
		self._subscribers: List[Callable[[bool], None]] = []

	def subscribe(self, fn: Callable[[bool], None]) -> None:
		if fn not in self._subscribers:
			self._subscribers.append(fn)

	def unsubscribe(self, fn: Callable[[bool], None]) -> None:
		if fn in self._subscribers:
			self._subscribers.remove(fn)

	def emit(self, active: bool) -> None:
		active = bool(active)
		if active == self.active:
			return
		self.active = active
		logger.debug("Host is now %s", "active" if active else "inactive")
		for fn in list(self._subscribers):
			fn(active)


class QtApplicationForegroundSignal(ForegroundSignal):
	"""Maps QGuiApplication.applicationStateChanged onto ForegroundSignal."""

	def __init__(self, app):
		from PySide6.QtCore import Qt
		self._active_state = Qt.ApplicationState.ApplicationActive
		super().__init__(active=app.applicationState() == self._active_state)
		app.applicationStateChanged.connect(self._on_state_changed)

	def _on_state_changed(self, state):
		self.emit(state == self._active_state)
