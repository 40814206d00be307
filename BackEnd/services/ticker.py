import math
import logging

from PySide6.QtCore import QObject, QTimer, Signal

logger = logging.getLogger(__name__)

POLL_INTERVAL_MS = 200


class DriftCorrectedTicker(QObject):
	"""Polls the clock against a fixed target end instead of counting callbacks.

	The QTimer only sets the polling cadence. Remaining time is always derived
	from `target_end - now`, so late, throttled or skipped callbacks never
	accumulate drift.
	"""
	remaining_changed = Signal(int)  # emits remaining whole seconds
	reached_zero = Signal()

	def __init__(self, clock, interval_ms=POLL_INTERVAL_MS, parent=None):
		super().__init__(parent)
		self._clock = clock
		self.target_end = None
		self.last_tick = None
		self._last_remaining = None
		self._timer = QTimer(self)
		self._timer.setInterval(interval_ms)
		self._timer.timeout.connect(self.poll)

	@property
	def armed(self) -> bool:
		return self.target_end is not None

	def arm(self, remaining_seconds: int = None, remaining_ms: int = None):
		"""Fix the target end from now and start polling."""
		now = self._clock.now()
		if remaining_ms is None:
			remaining_ms = int(remaining_seconds) * 1000
		self.target_end = now + remaining_ms
		self.last_tick = now
		self._last_remaining = self.remaining_at(now)
		self._timer.start()
		logger.debug("Ticker armed: target_end=%s remaining=%ss", self.target_end, self._last_remaining)

	def cancel(self):
		self._timer.stop()
		self.target_end = None
		self._last_remaining = None

	def stop_polling(self):
		"""Stop callbacks but keep the target, e.g. while the process is shutting down."""
		self._timer.stop()

	def remaining_at(self, now: int) -> int:
		return max(0, math.ceil((self.target_end - now) / 1000))

	def poll(self):
		"""One polling step. Returns the remaining seconds, or None when disarmed."""
		if self.target_end is None:
			return None
		now = self._clock.now()
		self.last_tick = now
		remaining = self.remaining_at(now)
		if remaining == 0:
			# a single zero-crossing, however far past the target we woke up
			self.cancel()
			self.reached_zero.emit()
			return 0
		if remaining != self._last_remaining:
			self._last_remaining = remaining
			self.remaining_changed.emit(remaining)
		return remaining
