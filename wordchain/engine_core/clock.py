"""
Turn Clock - Countdown for the active player's turn.

States:
    IDLE     waiting for the player to focus the input
    RUNNING  counting down one second per tick
    EXPIRED  reached zero; the controller ends the round and resets

The clock never sleeps. Ticks are explicit events fed in by whoever
schedules them, so the engine stays deterministic.

Every arm or stop bumps `epoch`. A scheduler remembers the epoch it
was started under and passes it back with each tick; ticks from an
older epoch are stale and ignored.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from enum import Enum

DEFAULT_TURN_SECONDS = 10


class ClockStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


@dataclass(frozen=True)
class TurnClock:
    """Immutable countdown value. Transitions return a new clock."""
    budget: int = DEFAULT_TURN_SECONDS
    remaining: int = DEFAULT_TURN_SECONDS
    status: ClockStatus = ClockStatus.IDLE
    epoch: int = 0

    @property
    def is_running(self) -> bool:
        return self.status == ClockStatus.RUNNING

    @property
    def is_expired(self) -> bool:
        return self.status == ClockStatus.EXPIRED

    def arm(self) -> TurnClock:
        """Start counting from the full budget. No-op if already running."""
        if self.is_running:
            return self
        return replace(
            self,
            remaining=self.budget,
            status=ClockStatus.RUNNING,
            epoch=self.epoch + 1,
        )

    def tick(self, epoch: int | None = None) -> TurnClock:
        """
        Advance one second.

        Ignored unless running, or when `epoch` names a cancelled
        tick sequence. Reaching zero moves the clock to EXPIRED.
        """
        if not self.is_running:
            return self
        if epoch is not None and epoch != self.epoch:
            return self
        remaining = max(self.remaining - 1, 0)
        status = ClockStatus.EXPIRED if remaining == 0 else ClockStatus.RUNNING
        return replace(self, remaining=remaining, status=status)

    def stop(self) -> TurnClock:
        """Cancel any countdown and reset to the full budget."""
        return replace(
            self,
            remaining=self.budget,
            status=ClockStatus.IDLE,
            epoch=self.epoch + 1,
        )
