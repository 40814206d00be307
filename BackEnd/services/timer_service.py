import logging

from PySide6.QtCore import QObject, Signal

from BackEnd.core.clock import SystemClock
from BackEnd.core.models import Mode, TimerState
from BackEnd.services.cycle_policy import next_state
from BackEnd.services.ticker import DriftCorrectedTicker, POLL_INTERVAL_MS

logger = logging.getLogger(__name__)


class TimerService(QObject):
	"""Pomodoro cycle engine.

	Owns the TimerState. Control calls (start/pause/reset/change_mode) mutate it
	directly; the ticker and the foreground reconciler only reach it through the
	transition-locked completion path. Every visible change is persisted.
	"""
	tick = Signal(int)  # emits remaining seconds
	state_changed = Signal(str)  # emits 'running', 'paused', 'idle'
	mode_changed = Signal(object)  # emits the new Mode
	segment_completed = Signal(object)  # emits the TransitionOutcome

	def __init__(self, settings, snapshots, recorder, clock=None, foreground=None,
			poll_interval_ms=POLL_INTERVAL_MS, parent=None):
		super().__init__(parent)
		self._settings = settings
		self._snapshots = snapshots
		self._recorder = recorder
		self._clock = clock or SystemClock()
		self._foreground = foreground
		self._transitioning = False
		# elapsed minute of the last boundary snapshot
		self._saved_minute = None
		self._ticker = DriftCorrectedTicker(self._clock, poll_interval_ms, self)
		self._ticker.remaining_changed.connect(self._on_remaining_changed)
		self._ticker.reached_zero.connect(self._on_reached_zero)
		self._segment_total = settings.duration_for(Mode.WORK)
		self._state = TimerState(remaining_seconds=self._segment_total)
		self._restore()
		if foreground is not None:
			foreground.subscribe(self._on_foreground_changed)

	# ---- read-only view ----

	@property
	def state(self) -> TimerState:
		return self._state.copy()

	@property
	def settings(self):
		return self._settings

	@property
	def mode(self) -> Mode:
		return self._state.mode

	@property
	def remaining_seconds(self) -> int:
		return self._state.remaining_seconds

	@property
	def is_running(self) -> bool:
		return self._state.running

	@property
	def target_end(self):
		return self._ticker.target_end

	@property
	def status(self) -> str:
		if self._state.running:
			return "running"
		if self._state.session_start_timestamp is not None:
			return "paused"
		return "idle"

	# ---- control surface ----

	def start(self, goal=None):
		s = self._state
		if s.running:
			return
		if s.remaining_seconds == 0:
			self._segment_total = self._settings.duration_for(s.mode)
			s.remaining_seconds = self._segment_total
		s.running = True
		if s.session_start_timestamp is None:
			s.session_start_timestamp = self._clock.now()
		if goal:
			s.goal = goal
		self._ticker.arm(s.remaining_seconds)
		logger.info("Started %s: %ss remaining", s.mode.value, s.remaining_seconds)
		self._persist()
		self.state_changed.emit("running")
		self.tick.emit(s.remaining_seconds)

	def pause(self):
		self._ticker.cancel()
		s = self._state
		if not s.running:
			return
		s.running = False
		logger.info("Paused %s at %ss", s.mode.value, s.remaining_seconds)
		self._persist()
		self.state_changed.emit("paused")

	def reset(self):
		self._ticker.cancel()
		self._abandon_work_segment()
		s = self._state
		s.running = False
		self._segment_total = self._settings.duration_for(s.mode)
		s.remaining_seconds = self._segment_total
		s.clear_segment()
		logger.info("Reset %s to %ss", s.mode.value, s.remaining_seconds)
		self._persist()
		self.tick.emit(s.remaining_seconds)
		self.state_changed.emit("idle")

	def change_mode(self, new_mode: Mode):
		# a manual switch is not a completion: no transition, no completion record
		self._ticker.cancel()
		self._abandon_work_segment()
		new_mode = Mode(new_mode)
		s = self._state
		s.mode = new_mode
		s.running = False
		self._segment_total = self._settings.duration_for(new_mode)
		s.remaining_seconds = self._segment_total
		s.clear_segment()
		if new_mode == Mode.WORK:
			s.session_index = 0
		logger.info("Mode changed to %s", new_mode.value)
		self._persist()
		self.mode_changed.emit(new_mode)
		self.tick.emit(s.remaining_seconds)
		self.state_changed.emit("idle")

	def apply_settings(self, settings):
		"""Adopt new settings. A running countdown is never resized."""
		old = self._settings
		if settings == old:
			return
		self._settings = settings
		s = self._state
		s.session_index %= settings.sessions_until_long_break
		resized = (
			old.duration_for(s.mode) != settings.duration_for(s.mode)
			or old.sessions_until_long_break != settings.sessions_until_long_break
		)
		if not s.running and resized:
			self._abandon_work_segment()
			self._segment_total = settings.duration_for(s.mode)
			s.remaining_seconds = self._segment_total
			s.clear_segment()
			self.tick.emit(s.remaining_seconds)
			self.state_changed.emit("idle")
		self._persist()

	def reconcile_foreground(self):
		"""Catch up with wall-clock time after the host was suspended or throttled."""
		s = self._state
		if not s.running or self._transitioning:
			return
		now = self._clock.now()
		last_tick = self._ticker.last_tick if self._ticker.last_tick is not None else now
		elapsed_ms = max(0, now - last_tick)
		if elapsed_ms >= s.remaining_seconds * 1000:
			logger.info("Segment ran out while in background (%ss since last tick)", elapsed_ms // 1000)
			self._complete_segment("foreground")
			return
		if not self._ticker.armed:
			self._ticker.arm(remaining_ms=s.remaining_seconds * 1000 - elapsed_ms)
		self._ticker.poll()

	def shutdown(self):
		"""Persist and stop polling; a running segment resumes on next launch."""
		self._persist()
		self._ticker.stop_polling()
		if self._foreground is not None:
			self._foreground.unsubscribe(self._on_foreground_changed)

	# ---- ticker / foreground callbacks ----

	def _on_remaining_changed(self, remaining):
		s = self._state
		if not s.running:
			return
		s.remaining_seconds = remaining
		self.tick.emit(remaining)
		self._record_minute_boundary()

	def _on_reached_zero(self):
		self._complete_segment("ticker")

	def _on_foreground_changed(self, active):
		if active:
			self.reconcile_foreground()
		elif self._state.running:
			self._persist()

	# ---- internals ----

	def _record_minute_boundary(self):
		"""Snapshot once per elapsed minute in every mode; work also credits focus and records a partial."""
		s = self._state
		full_minutes = max(0, self._segment_total - s.remaining_seconds) // 60
		dirty = full_minutes != self._saved_minute
		self._saved_minute = full_minutes
		if s.mode == Mode.WORK:
			if full_minutes > s.credited_focus_minutes:
				s.total_focus_seconds_today += (full_minutes - s.credited_focus_minutes) * 60
				s.credited_focus_minutes = full_minutes
				dirty = True
			if full_minutes > s.last_recorded_full_minutes:
				watermark = self._recorder.record_partial(
					s.mode, self._segment_total, s.remaining_seconds,
					s.last_recorded_full_minutes, s.session_start_timestamp, goal=s.goal)
				if watermark != s.last_recorded_full_minutes:
					s.last_recorded_full_minutes = watermark
					dirty = True
		if dirty:
			self._persist()

	def _abandon_work_segment(self):
		s = self._state
		if s.mode != Mode.WORK or s.session_start_timestamp is None or s.last_recorded_full_minutes == 0:
			return
		elapsed = max(0, self._segment_total - s.remaining_seconds)
		self._recorder.record_abandoned(s.mode, elapsed, s.session_start_timestamp, goal=s.goal)

	def _complete_segment(self, source):
		"""Process one zero-crossing. Returns False if another one is in flight."""
		if self._transitioning:
			logger.debug("Completion from %s ignored, transition already in progress", source)
			return False
		self._transitioning = True
		try:
			self._ticker.cancel()
			s = self._state
			now = self._clock.now()
			finished = s.mode
			total = self._segment_total
			start = s.session_start_timestamp
			if start is None:
				start = now - total * 1000
			outcome = next_state(s.mode, s.session_index, s.completed_work_sessions, self._settings)
			s.remaining_seconds = 0
			if finished == Mode.WORK:
				s.total_focus_seconds_today += max(0, total - s.credited_focus_minutes * 60)
			self._recorder.record_completion(finished, total, start, completed=True, goal=s.goal)

			s.mode = outcome.next_mode
			s.session_index = outcome.next_session_index
			s.completed_work_sessions = outcome.completed_work_sessions
			s.clear_segment()
			self._segment_total = self._settings.duration_for(outcome.next_mode)
			s.remaining_seconds = self._segment_total
			s.running = outcome.auto_start
			if outcome.auto_start:
				s.session_start_timestamp = now
				self._ticker.arm(s.remaining_seconds)
			logger.info(
				"%s completed (%s): next=%s index=%s completed_work=%s auto_start=%s",
				finished.value, source, outcome.next_mode.value, outcome.next_session_index,
				outcome.completed_work_sessions, outcome.auto_start)
			self._persist()
			self.mode_changed.emit(outcome.next_mode)
			self.tick.emit(s.remaining_seconds)
			self.state_changed.emit("running" if s.running else "idle")
			self.segment_completed.emit(outcome)
		finally:
			self._transitioning = False
		return True

	def _restore(self):
		snapshot = self._snapshots.load()
		if snapshot is None:
			logger.info("No usable timer snapshot, starting fresh")
			return
		s = snapshot.state.copy()
		s.session_index %= self._settings.sessions_until_long_break
		self._segment_total = self._settings.duration_for(s.mode)
		s.remaining_seconds = min(s.remaining_seconds, self._segment_total)
		if not s.running:
			self._state = s
			logger.info("Restored paused %s with %ss remaining", s.mode.value, s.remaining_seconds)
			return
		now = self._clock.now()
		elapsed_ms = max(0, now - snapshot.saved_at)
		remaining_ms = s.remaining_seconds * 1000 - elapsed_ms
		self._state = s
		if remaining_ms > 0:
			self._ticker.arm(remaining_ms=remaining_ms)
			s.remaining_seconds = self._ticker.remaining_at(now)
			logger.info("Resumed running %s with %ss remaining", s.mode.value, s.remaining_seconds)
			self._persist()
			return
		logger.info("%s finished while the app was closed", s.mode.value)
		self._complete_segment("restore")

	def _persist(self):
		self._snapshots.save(self._state)
