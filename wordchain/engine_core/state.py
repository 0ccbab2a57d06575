"""
Game State - Value types for rounds, players and the whole game.

Design principles:
- Immutable-friendly: all mutations return new state
- Snapshot-safe: chains are tuples, used words a frozenset
- Single writer: only the reducer produces new GameState values
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum, IntEnum

from .clock import TurnClock
from .errors import ErrorKind


class Player(IntEnum):
    """The two seats at the table."""
    ONE = 1
    TWO = 2

    @property
    def other(self) -> Player:
        return Player.TWO if self is Player.ONE else Player.ONE


class RoundStatus(Enum):
    """A round is open until it is sealed; there is no other state."""
    OPEN = "open"
    SEALED = "sealed"


@dataclass(frozen=True)
class Round:
    """
    One round of play.

    active_chain is the interleaving of both player chains in
    submission order; used_words is their lower-cased union.
    """
    player1_chain: tuple[str, ...] = ()
    player2_chain: tuple[str, ...] = ()
    active_chain: tuple[str, ...] = ()
    used_words: frozenset[str] = frozenset()
    winner: Player | None = None
    status: RoundStatus = RoundStatus.OPEN

    @property
    def is_sealed(self) -> bool:
        return self.status == RoundStatus.SEALED

    @property
    def is_empty(self) -> bool:
        return len(self.active_chain) == 0

    @property
    def last_word(self) -> str | None:
        """The most recently accepted word, if any."""
        return self.active_chain[-1] if self.active_chain else None

    def chain_for(self, player: Player) -> tuple[str, ...]:
        """Get the words a single player contributed to this round."""
        return self.player1_chain if player == Player.ONE else self.player2_chain


@dataclass(frozen=True)
class LastError:
    """The user-facing error produced by the most recent event."""
    kind: ErrorKind
    message: str


@dataclass
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical state that the engine operates on.
    All state changes go through the reducer.
    """
    rounds: tuple[Round, ...] = ()
    current_round: Round = field(default_factory=Round)
    current_player: Player = Player.ONE

    player1_score: int = 0
    player2_score: int = 0
    largest_word: str = ""

    clock: TurnClock = field(default_factory=TurnClock)
    last_error: LastError | None = None

    # Number of events applied, useful for ordering snapshots
    event_count: int = 0

    @property
    def round_number(self) -> int:
        """1-based number of the round in progress."""
        return len(self.rounds) + 1

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return GameState(
            rounds=kwargs.get("rounds", self.rounds),
            current_round=kwargs.get("current_round", self.current_round),
            current_player=kwargs.get("current_player", self.current_player),
            player1_score=kwargs.get("player1_score", self.player1_score),
            player2_score=kwargs.get("player2_score", self.player2_score),
            largest_word=kwargs.get("largest_word", self.largest_word),
            clock=kwargs.get("clock", self.clock),
            last_error=kwargs.get("last_error", self.last_error),
            event_count=kwargs.get("event_count", self.event_count),
        )

    @classmethod
    def create(cls, turn_seconds: int = 10) -> GameState:
        """Fresh game: empty round, player one to move, idle clock."""
        return cls(clock=TurnClock(budget=turn_seconds, remaining=turn_seconds))
