"""
Action System - Inbound events, payloads, and results.

Actions represent everything the presentation layer can do to a game:
1. Submit a word
2. Focus the input (arms the turn clock)
3. Tick (one elapsed second, fed in by a scheduler)

All state changes flow through actions.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import ErrorKind


class ActionType(Enum):
    """Types of inbound events."""
    SUBMIT_WORD = "submit_word"
    FOCUS_INPUT = "focus_input"
    TICK = "tick"


@dataclass
class ActionPayload:
    """
    Payload for an action - contains the action parameters.

    Different action types use different fields; unused ones stay None.
    """
    # For SUBMIT_WORD: raw text as typed, before trimming
    text: str | None = None

    # For TICK: epoch of the tick sequence that produced it
    epoch: int | None = None


@dataclass
class Action:
    """A complete event to be applied to the game state."""
    action_type: ActionType
    payload: ActionPayload = field(default_factory=ActionPayload)

    @classmethod
    def submit_word(cls, text: str) -> Action:
        """Factory for a word submission."""
        return cls(
            action_type=ActionType.SUBMIT_WORD,
            payload=ActionPayload(text=text),
        )

    @classmethod
    def focus_input(cls) -> Action:
        """Factory for the input-focus event."""
        return cls(action_type=ActionType.FOCUS_INPUT)

    @classmethod
    def tick(cls, epoch: int | None = None) -> Action:
        """Factory for a one-second clock tick."""
        return cls(
            action_type=ActionType.TICK,
            payload=ActionPayload(epoch=epoch),
        )


@dataclass
class ActionResult:
    """
    Result of applying an action.

    User-facing errors (duplicate word, broken chain, ...) are not
    failures: the event still produced a well-defined new state, and
    the error is carried alongside it. `success` is False only when
    the action could not be applied at all.
    """
    success: bool
    new_state: Any | None = None  # GameState
    error: str | None = None
    error_kind: ErrorKind | None = None

    # Set when this event sealed a round
    sealed_round: Any | None = None  # Round

    # For UI/presentation
    state_changes: list[str] = field(default_factory=list)

    @property
    def ended_round(self) -> bool:
        return self.sealed_round is not None

    @classmethod
    def failure(cls, error: str) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error)

    @classmethod
    def with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
        error: str | None = None,
        error_kind: ErrorKind | None = None,
        sealed_round: Any | None = None,
    ) -> ActionResult:
        """Create a result carrying the new state."""
        return cls(
            success=True,
            new_state=state,
            error=error,
            error_kind=error_kind,
            sealed_round=sealed_round,
            state_changes=changes or [],
        )
