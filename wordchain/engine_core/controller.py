"""
Game Controller - Owns one game's state and serializes its events.

The controller is the only writer of GameState. Every inbound event
(word submission, input focus, clock tick) is applied through the
reducer while holding a lock, so a tick and a submission that arrive
together are processed one strictly after the other.

Usage:
    controller = GameController(turn_seconds=10)

    controller.focus_input()
    snapshot = controller.submit_word("Apple")

    # A scheduler feeds ticks, passing the epoch it was armed under
    snapshot = controller.tick(epoch=snapshot.clock_epoch)
"""

from __future__ import annotations
from threading import RLock
from typing import Callable

from ..logging_config import get_logger
from .action import Action, ActionResult
from .clock import DEFAULT_TURN_SECONDS
from .reducer import Reducer
from .snapshot import GameSnapshot, take_snapshot
from .state import GameState

logger = get_logger(__name__)

SnapshotListener = Callable[[GameSnapshot, ActionResult], None]


class GameController:
    """
    Orchestrates validator, scoring, round engine and clock for one game.

    Listeners registered with subscribe() are called after each applied
    event, still in event order.
    """

    def __init__(self, turn_seconds: int = DEFAULT_TURN_SECONDS):
        if turn_seconds < 1:
            raise ValueError("turn_seconds must be >= 1")
        self._reducer = Reducer()
        self._state = GameState.create(turn_seconds=turn_seconds)
        self._lock = RLock()
        self._listeners: list[SnapshotListener] = []

    @property
    def state(self) -> GameState:
        """Current canonical state. Treat as read-only."""
        return self._state

    def snapshot(self) -> GameSnapshot:
        with self._lock:
            return take_snapshot(self._state)

    def subscribe(self, listener: SnapshotListener):
        self._listeners.append(listener)

    def unsubscribe(self, listener: SnapshotListener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def apply(self, action: Action) -> tuple[GameSnapshot, ActionResult]:
        """
        Apply one action; return the resulting snapshot and the result.

        Raises:
            ValueError: if the action is malformed
        """
        with self._lock:
            result = self._reducer.apply(self._state, action)
            if not result.success:
                raise ValueError(result.error)

            self._state = result.new_state
            snapshot = take_snapshot(self._state)

            for listener in list(self._listeners):
                listener(snapshot, result)
            return snapshot, result

    def dispatch(self, action: Action) -> GameSnapshot:
        """Apply one action and return the resulting snapshot."""
        snapshot, _ = self.apply(action)
        return snapshot

    # =========================================================================
    # Inbound events
    # =========================================================================

    def submit_word(self, text: str) -> GameSnapshot:
        """Submit a word for the current player."""
        return self.dispatch(Action.submit_word(text))

    def focus_input(self) -> GameSnapshot:
        """The current player focused the input; arms the clock."""
        return self.dispatch(Action.focus_input())

    def tick(self, epoch: int | None = None) -> GameSnapshot:
        """
        One second elapsed.

        Pass the epoch the tick sequence was started under; ticks from a
        cancelled sequence are ignored.
        """
        return self.dispatch(Action.tick(epoch))
