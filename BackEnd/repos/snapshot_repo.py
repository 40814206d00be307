import json
import logging
from typing import NamedTuple, Optional

from BackEnd.core.models import Mode, TimerState

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "timerState"
STALE_AFTER_MS = 30 * 60 * 1000


class Snapshot(NamedTuple):
	state: TimerState
	saved_at: int


def _to_dict(state: TimerState, saved_at: int):
	return {
		"mode": state.mode.value,
		"remainingSeconds": state.remaining_seconds,
		"running": state.running,
		"sessionIndex": state.session_index,
		"completedWorkSessions": state.completed_work_sessions,
		"sessionStartTimestamp": state.session_start_timestamp,
		"totalFocusSecondsToday": state.total_focus_seconds_today,
		"goal": state.goal,
		"lastRecordedFullMinutes": state.last_recorded_full_minutes,
		"creditedFocusMinutes": state.credited_focus_minutes,
		"timestamp": saved_at,
	}


def _non_negative_int(data, key, default=None):
	value = data.get(key, default)
	if not isinstance(value, int) or isinstance(value, bool) or value < 0:
		raise ValueError(f"{key} must be a non-negative integer, got {value!r}")
	return value


def _from_dict(data) -> Snapshot:
	if not isinstance(data, dict):
		raise ValueError("snapshot must be a JSON object")
	start = data.get("sessionStartTimestamp")
	if start is not None and (not isinstance(start, int) or isinstance(start, bool)):
		raise ValueError("sessionStartTimestamp must be an integer or null")
	goal = data.get("goal")
	if goal is not None and not isinstance(goal, str):
		raise ValueError("goal must be a string or null")
	state = TimerState(
		mode=Mode(data.get("mode")),
		remaining_seconds=_non_negative_int(data, "remainingSeconds"),
		running=bool(data.get("running", False)),
		session_index=_non_negative_int(data, "sessionIndex", 0),
		completed_work_sessions=_non_negative_int(data, "completedWorkSessions", 0),
		session_start_timestamp=start,
		total_focus_seconds_today=_non_negative_int(data, "totalFocusSecondsToday", 0),
		goal=goal,
		last_recorded_full_minutes=_non_negative_int(data, "lastRecordedFullMinutes", 0),
		credited_focus_minutes=_non_negative_int(data, "creditedFocusMinutes", 0),
	)
	return Snapshot(state, _non_negative_int(data, "timestamp"))


class SnapshotRepository:
	"""Sole owner of the durable timer snapshot."""

	def __init__(self, store, clock, key=SNAPSHOT_KEY):
		self._store = store
		self._clock = clock
		self._key = key

	def save(self, state: TimerState) -> None:
		payload = json.dumps(_to_dict(state, self._clock.now()))
		try:
			self._store.set(self._key, payload)
		except OSError as e:
			logger.warning("Could not persist timer snapshot: %s", e)

	def load(self) -> Optional[Snapshot]:
		"""Return the snapshot, or None when absent, corrupt or older than 30 minutes."""
		try:
			raw = self._store.get(self._key)
		except OSError as e:
			logger.warning("Could not read timer snapshot: %s", e)
			return None
		except ValueError as e:
			# undecodable bytes on disk
			logger.warning("Discarding unreadable timer snapshot: %s", e)
			self.clear()
			return None
		if raw is None:
			return None
		try:
			snapshot = _from_dict(json.loads(raw))
		except ValueError as e:
			logger.warning("Discarding corrupt timer snapshot: %s", e)
			self.clear()
			return None
		age = self._clock.now() - snapshot.saved_at
		if age > STALE_AFTER_MS:
			logger.info("Discarding stale timer snapshot (%ss old)", age // 1000)
			self.clear()
			return None
		return snapshot

	def clear(self) -> None:
		try:
			self._store.delete(self._key)
		except OSError as e:
			logger.warning("Could not delete timer snapshot: %s", e)
