"""Unit tests for DriftCorrectedTicker, polled by hand against a fake clock."""

from BackEnd.services.ticker import DriftCorrectedTicker
from tests.test_support.doubles import FakeClock


def make_ticker():
    clock = FakeClock()
    ticker = DriftCorrectedTicker(clock)
    changes, zeros = [], []
    ticker.remaining_changed.connect(changes.append)
    ticker.reached_zero.connect(lambda: zeros.append(clock.now()))
    return ticker, clock, changes, zeros


class TestPolling:
    def test_arm_sets_target_end_from_now(self):
        ticker, clock, _, _ = make_ticker()
        ticker.arm(25)
        assert ticker.target_end == clock.now() + 25_000
        assert ticker.armed
        ticker.cancel()

    def test_sub_second_polls_do_not_emit(self):
        ticker, clock, changes, _ = make_ticker()
        ticker.arm(5)
        for _ in range(4):
            clock.advance(ms=200)
            assert ticker.poll() == 5
        assert changes == []
        ticker.cancel()

    def test_remaining_is_derived_from_wall_clock_not_callback_count(self):
        """A late callback jumps straight to the right value instead of decrementing by one."""
        ticker, clock, changes, _ = make_ticker()
        ticker.arm(10)
        clock.advance(seconds=1)
        ticker.poll()
        clock.advance(ms=5700)
        ticker.poll()
        assert changes == [9, 4]
        ticker.cancel()

    def test_remaining_rounds_up_partial_seconds(self):
        ticker, clock, _, _ = make_ticker()
        ticker.arm(remaining_ms=2500)
        assert ticker.remaining_at(clock.now()) == 3
        clock.advance(ms=600)
        assert ticker.poll() == 2
        ticker.cancel()


class TestZeroCrossing:
    def test_reaching_zero_fires_once_and_disarms(self):
        ticker, clock, _, zeros = make_ticker()
        ticker.arm(3)
        clock.advance(seconds=3)
        assert ticker.poll() == 0
        assert ticker.poll() is None
        assert len(zeros) == 1
        assert not ticker.armed

    def test_first_poll_long_after_target_fires_single_completion(self):
        """Resuming from deep suspension several durations late must not catch up."""
        ticker, clock, changes, zeros = make_ticker()
        ticker.arm(60)
        clock.advance(seconds=60 * 5)
        ticker.poll()
        ticker.poll()
        assert len(zeros) == 1
        assert changes == []

    def test_cancel_prevents_stale_callback(self):
        ticker, clock, changes, zeros = make_ticker()
        ticker.arm(2)
        ticker.cancel()
        clock.advance(seconds=5)
        assert ticker.poll() is None
        assert zeros == [] and changes == []

    def test_poll_records_last_tick(self):
        ticker, clock, _, _ = make_ticker()
        ticker.arm(30)
        clock.advance(seconds=4)
        ticker.poll()
        assert ticker.last_tick == clock.now()
        ticker.cancel()
