from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional


class Mode(str, Enum):
	WORK = "work"
	BREAK = "break"
	LONG_BREAK = "longBreak"


@dataclass
class TimerState:
	"""Authoritative in-memory record of the countdown.

	Timestamps are epoch milliseconds. `remaining_seconds` always lies within
	[0, duration_for(mode)] and `session_index` within [0, sessions_until_long_break).
	"""
	mode: Mode = Mode.WORK
	remaining_seconds: int = 0
	running: bool = False
	session_index: int = 0
	completed_work_sessions: int = 0
	session_start_timestamp: Optional[int] = None
	total_focus_seconds_today: int = 0
	goal: Optional[str] = None
	# recorder watermark for the current work segment
	last_recorded_full_minutes: int = 0
	# whole minutes of the current work segment already in total_focus_seconds_today
	credited_focus_minutes: int = 0

	def copy(self) -> "TimerState":
		return replace(self)

	def clear_segment(self):
		"""Forget everything tied to the current running segment."""
		self.session_start_timestamp = None
		self.goal = None
		self.last_recorded_full_minutes = 0
		self.credited_focus_minutes = 0
