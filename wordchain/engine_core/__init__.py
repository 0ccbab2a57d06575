"""
Engine Core - Deterministic word-chain rules and turn/round state.

The engine is the runtime that:
1. Holds GameState (rounds, scores, clock)
2. Validates words against the active chain
3. Applies events via the reducer
4. Seals rounds on a broken chain or an expired clock
5. Publishes immutable snapshots for rendering
"""

from .state import GameState, Player, Round, RoundStatus, LastError
from .clock import TurnClock, ClockStatus, DEFAULT_TURN_SECONDS
from .errors import ErrorKind, InvalidEngineState
from .action import Action, ActionType, ActionPayload, ActionResult
from .validator import Verdict, check_word, is_valid, required_letter
from .reducer import Reducer, apply_action
from .snapshot import GameSnapshot, RoundView, ChainView, take_snapshot
from .controller import GameController

__all__ = [
    "GameState",
    "Player",
    "Round",
    "RoundStatus",
    "LastError",
    "TurnClock",
    "ClockStatus",
    "DEFAULT_TURN_SECONDS",
    "ErrorKind",
    "InvalidEngineState",
    "Action",
    "ActionType",
    "ActionPayload",
    "ActionResult",
    "Verdict",
    "check_word",
    "is_valid",
    "required_letter",
    "Reducer",
    "apply_action",
    "GameSnapshot",
    "RoundView",
    "ChainView",
    "take_snapshot",
    "GameController",
]
