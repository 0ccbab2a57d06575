"""
Tests for the turn clock.

Tests:
- Arming and ticking
- Expiry at zero
- Stop and epoch-based cancellation
"""

from ..engine_core.clock import ClockStatus, TurnClock


class TestArm:
    """Tests for IDLE -> RUNNING."""

    def test_arm_resets_to_budget(self):
        """Arming starts from the full budget."""
        clock = TurnClock(budget=10, remaining=3).arm()

        assert clock.status == ClockStatus.RUNNING
        assert clock.remaining == 10
        assert clock.epoch == 1

    def test_arm_while_running_is_noop(self):
        """Focusing again doesn't restart a running countdown."""
        clock = TurnClock(budget=10).arm().tick().tick()
        again = clock.arm()

        assert again is clock
        assert again.remaining == 8


class TestTick:
    """Tests for RUNNING -> RUNNING / EXPIRED."""

    def test_tick_decrements(self):
        clock = TurnClock(budget=10).arm().tick()
        assert clock.remaining == 9
        assert clock.is_running

    def test_tick_while_idle_ignored(self):
        """Ticks only count while running."""
        clock = TurnClock(budget=10)
        assert clock.tick() is clock

    def test_expires_at_zero(self):
        """The tick that reaches zero expires the clock."""
        clock = TurnClock(budget=3).arm()
        clock = clock.tick().tick()
        assert clock.is_running
        clock = clock.tick()

        assert clock.remaining == 0
        assert clock.status == ClockStatus.EXPIRED
        assert not clock.is_running

    def test_expired_clock_ignores_ticks(self):
        clock = TurnClock(budget=1).arm().tick()
        assert clock.is_expired
        assert clock.tick() is clock

    def test_tick_with_current_epoch_counts(self):
        clock = TurnClock(budget=10).arm()
        assert clock.tick(epoch=clock.epoch).remaining == 9

    def test_stale_epoch_ignored(self):
        """A tick from a cancelled sequence has no effect."""
        first = TurnClock(budget=10).arm()
        rearmed = first.stop().arm()

        assert rearmed.tick(epoch=first.epoch) is rearmed
        assert rearmed.remaining == 10


class TestStop:
    """Tests for RUNNING/IDLE -> IDLE."""

    def test_stop_resets_budget(self):
        clock = TurnClock(budget=10).arm().tick().tick().stop()

        assert clock.status == ClockStatus.IDLE
        assert clock.remaining == 10

    def test_stop_bumps_epoch(self):
        """Every stop invalidates in-flight ticks."""
        clock = TurnClock(budget=10).arm()
        stopped = clock.stop()
        assert stopped.epoch == clock.epoch + 1
        assert stopped.tick(epoch=clock.epoch) is stopped
