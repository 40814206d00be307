from dataclasses import dataclass

from BackEnd.core.models import Mode
from BackEnd.core.settings import TimerSettings


@dataclass(frozen=True)
class TransitionOutcome:
	finished_mode: Mode
	next_mode: Mode
	next_session_index: int
	auto_start: bool
	completed_work_sessions: int


def next_state(mode: Mode, session_index: int, completed_work_sessions: int, settings: TimerSettings) -> TransitionOutcome:
	"""Map a finished segment onto the next one.

	Work advances the cycle position and always counts one completed session;
	the Nth work session of a cycle is followed by a long break. Nothing
	auto-starts after a long break, whatever the settings say.
	"""
	if mode == Mode.WORK:
		next_index = (session_index + 1) % settings.sessions_until_long_break
		return TransitionOutcome(
			finished_mode=mode,
			next_mode=Mode.LONG_BREAK if next_index == 0 else Mode.BREAK,
			next_session_index=next_index,
			auto_start=settings.auto_start_breaks,
			completed_work_sessions=completed_work_sessions + 1,
		)
	if mode == Mode.BREAK:
		return TransitionOutcome(
			finished_mode=mode,
			next_mode=Mode.WORK,
			next_session_index=session_index,
			auto_start=settings.auto_start_next_focus,
			completed_work_sessions=completed_work_sessions,
		)
	return TransitionOutcome(
		finished_mode=mode,
		next_mode=Mode.WORK,
		next_session_index=0,
		auto_start=False,
		completed_work_sessions=completed_work_sessions,
	)
