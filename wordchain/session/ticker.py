"""
Turn Ticker - Drives one-second clock ticks into a controller.

The engine never sleeps; this is the scheduling primitive that turns
wall-clock time into TICK events for sessions served over the API.

Each tick sequence remembers the clock epoch it was started under.
Any submission or player switch bumps the epoch inside the engine,
so even a tick that was already in flight when the task was
cancelled cannot expire a round that has moved on.
"""

from __future__ import annotations
import asyncio
from typing import Awaitable, Callable

from ..config import TICK_INTERVAL
from ..engine_core import GameController, GameSnapshot
from ..logging_config import get_logger

logger = get_logger(__name__)

TickCallback = Callable[[GameSnapshot], Awaitable[None]]


class TurnTicker:
    """
    Usage:
        ticker = TurnTicker(controller, on_tick=broadcast)

        controller.focus_input()
        ticker.start()          # inside a running event loop

        controller.submit_word("Apple")
        ticker.cancel()
    """

    def __init__(
        self,
        controller: GameController,
        interval: float = TICK_INTERVAL,
        on_tick: TickCallback | None = None,
    ):
        self.controller = controller
        self.interval = interval
        self.on_tick = on_tick
        self._task: asyncio.Task | None = None
        self._epoch: int | None = None

    @property
    def is_active(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """
        Start ticking for the current turn.

        Must be called from a running event loop. Does nothing unless
        the clock is running; restarts if the clock was re-armed under
        a new epoch. Returns True if a new tick sequence was started.
        """
        clock = self.controller.state.clock
        if not clock.is_running:
            return False
        if self.is_active and self._epoch == clock.epoch:
            return False

        self.cancel()
        self._epoch = clock.epoch
        self._task = asyncio.get_running_loop().create_task(self._run(clock.epoch))
        logger.debug(f"Ticker started (epoch {clock.epoch}, every {self.interval}s)")
        return True

    def cancel(self):
        """Stop the current tick sequence immediately."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
            logger.debug(f"Ticker cancelled (epoch {self._epoch})")
        self._task = None
        self._epoch = None

    async def _run(self, epoch: int):
        while True:
            await asyncio.sleep(self.interval)

            if self.controller.state.clock.epoch != epoch:
                break
            snapshot = self.controller.tick(epoch=epoch)

            if self.on_tick is not None:
                try:
                    await self.on_tick(snapshot)
                except Exception:
                    logger.exception(f"Tick callback failed (epoch {epoch})")
            if not snapshot.timer_running or snapshot.clock_epoch != epoch:
                break
