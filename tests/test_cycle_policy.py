"""Unit tests for the cycle transition policy: pure function, no Qt, no I/O."""

import pytest

from BackEnd.core.models import Mode
from BackEnd.core.settings import TimerSettings
from BackEnd.services.cycle_policy import next_state


def make_settings(**overrides):
    return TimerSettings(**overrides)


class TestWorkTransitions:
    def test_first_work_session_goes_to_short_break(self):
        outcome = next_state(Mode.WORK, 0, 0, make_settings())
        assert outcome.next_mode == Mode.BREAK
        assert outcome.next_session_index == 1
        assert outcome.completed_work_sessions == 1

    def test_cycle_of_four_ends_in_one_long_break(self):
        """sessionIndex cycles 0→1→2→3→0 and only the 4th work session earns a long break."""
        settings = make_settings(sessions_until_long_break=4)
        index, completed = 0, 0
        seen_modes, seen_indices = [], []
        for _ in range(4):
            outcome = next_state(Mode.WORK, index, completed, settings)
            index, completed = outcome.next_session_index, outcome.completed_work_sessions
            seen_modes.append(outcome.next_mode)
            seen_indices.append(index)
        assert seen_modes == [Mode.BREAK, Mode.BREAK, Mode.BREAK, Mode.LONG_BREAK]
        assert seen_indices == [1, 2, 3, 0]
        assert completed == 4

    def test_single_session_cycle_always_long_break(self):
        outcome = next_state(Mode.WORK, 0, 7, make_settings(sessions_until_long_break=1))
        assert outcome.next_mode == Mode.LONG_BREAK
        assert outcome.next_session_index == 0
        assert outcome.completed_work_sessions == 8

    @pytest.mark.parametrize("auto_start_breaks", [True, False])
    def test_auto_start_follows_break_setting(self, auto_start_breaks):
        outcome = next_state(Mode.WORK, 0, 0, make_settings(auto_start_breaks=auto_start_breaks))
        assert outcome.auto_start is auto_start_breaks


class TestBreakTransitions:
    @pytest.mark.parametrize("auto_start_next_focus", [True, False])
    def test_break_returns_to_work_keeping_index(self, auto_start_next_focus):
        settings = make_settings(auto_start_next_focus=auto_start_next_focus)
        outcome = next_state(Mode.BREAK, 2, 2, settings)
        assert outcome.next_mode == Mode.WORK
        assert outcome.next_session_index == 2
        assert outcome.auto_start is auto_start_next_focus

    def test_break_does_not_count_a_work_session(self):
        assert next_state(Mode.BREAK, 1, 5, make_settings()).completed_work_sessions == 5
        assert next_state(Mode.LONG_BREAK, 0, 5, make_settings()).completed_work_sessions == 5

    @pytest.mark.parametrize("auto_start_breaks", [True, False])
    @pytest.mark.parametrize("auto_start_next_focus", [True, False])
    def test_long_break_never_auto_starts(self, auto_start_breaks, auto_start_next_focus):
        settings = make_settings(auto_start_breaks=auto_start_breaks, auto_start_next_focus=auto_start_next_focus)
        outcome = next_state(Mode.LONG_BREAK, 0, 4, settings)
        assert outcome.next_mode == Mode.WORK
        assert outcome.next_session_index == 0
        assert outcome.auto_start is False

    def test_outcome_names_the_finished_mode(self):
        assert next_state(Mode.LONG_BREAK, 0, 4, make_settings()).finished_mode == Mode.LONG_BREAK
