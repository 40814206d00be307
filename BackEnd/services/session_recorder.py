import logging
import sqlite3

from BackEnd.core.clock import ms_to_local_date_str, ms_to_utc_iso
from BackEnd.core.models import Mode
from BackEnd.repos import session_repo

logger = logging.getLogger(__name__)


class SessionRecorder:
	"""Emits partial and final session records to the session store.

	Store failures are logged and swallowed: analytics delivery must never stop
	the countdown. Every write is keyed by the segment's start time, so the same
	record can be delivered again without double-counting.
	"""

	def __init__(self, user_id, clock, dbfile=None):
		self.user_id = user_id
		self._clock = clock
		self._dbfile = dbfile

	def record_partial(self, mode, total_duration, remaining, last_recorded_full_minutes, start_timestamp, goal=None):
		"""Record the whole minutes elapsed in a running work segment.

		Returns the new watermark; on failure the old one, so the caller retries
		at the next tick.
		"""
		full_minutes = max(0, int(total_duration) - int(remaining)) // 60
		if mode != Mode.WORK or full_minutes <= last_recorded_full_minutes:
			return last_recorded_full_minutes
		now = self._clock.now()
		try:
			session_repo.upsert_partial(
				self.user_id,
				session_repo.session_key(mode.value, start_timestamp),
				mode.value,
				full_minutes * 60,
				ms_to_local_date_str(start_timestamp),
				ms_to_utc_iso(start_timestamp),
				ms_to_utc_iso(now),
				goal=goal,
				dbfile=self._dbfile,
			)
		except (sqlite3.Error, OSError):
			logger.exception("Failed to record partial session at %s min", full_minutes)
			return last_recorded_full_minutes
		logger.debug("Recorded partial work session: %s min", full_minutes)
		return full_minutes

	def record_completion(self, mode, total_duration, start_timestamp, completed=True, goal=None):
		"""Write the single immutable record for a finished segment. Returns True on success."""
		now = self._clock.now()
		if start_timestamp is None:
			start_timestamp = now - int(total_duration) * 1000
		try:
			written = session_repo.finalize_session(
				self.user_id,
				session_repo.session_key(mode.value, start_timestamp),
				mode.value,
				total_duration,
				completed,
				ms_to_local_date_str(start_timestamp),
				ms_to_utc_iso(start_timestamp),
				ms_to_utc_iso(now),
				goal=goal,
				dbfile=self._dbfile,
			)
		except (sqlite3.Error, OSError):
			logger.exception("Failed to record %s session", mode.value)
			return False
		if not written:
			logger.info("Session %s@%s was already recorded, ignoring", mode.value, start_timestamp)
		else:
			logger.info("Recorded %s session: %ss completed=%s", mode.value, total_duration, completed)
		return True

	def record_abandoned(self, mode, elapsed_seconds, start_timestamp, goal=None):
		"""Close the row of a work segment the user walked away from mid-way."""
		return self.record_completion(mode, elapsed_seconds, start_timestamp, completed=False, goal=goal)
