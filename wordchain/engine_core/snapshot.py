"""
Snapshots - Read-only views of a game for the presentation layer.

A snapshot is taken after every event. It carries everything a UI
needs to draw the board and nothing it could use to mutate the game.
"""

from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any

from .round_engine import letter_total
from .scoring import leader
from .state import GameState, Player, Round
from .validator import required_letter


@dataclass(frozen=True)
class ChainView:
    """One player's chain within a round."""
    player: int
    words: tuple[str, ...]
    chain_length: int
    total_letters: int


@dataclass(frozen=True)
class RoundView:
    """A round as shown on screen: current or historical."""
    round_number: int
    player1: ChainView
    player2: ChainView
    active_chain: tuple[str, ...]
    sealed: bool
    winner: int | None = None


@dataclass(frozen=True)
class GameSnapshot:
    """Everything the presentation layer renders after an event."""
    current_player: int
    player1_score: int
    player2_score: int
    leader: int | None
    largest_word: str

    round_number: int
    current_round: RoundView
    rounds: tuple[RoundView, ...]
    active_chain: tuple[str, ...]
    required_letter: str | None

    timer: int
    timer_budget: int
    timer_running: bool
    clock_status: str
    clock_epoch: int

    last_error: str | None = None
    last_error_kind: str | None = None
    event_count: int = 0

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-friendly dict."""
        return asdict(self)


def _chain_view(round_: Round, player: Player) -> ChainView:
    chain = round_.chain_for(player)
    return ChainView(
        player=int(player),
        words=chain,
        chain_length=len(chain),
        total_letters=letter_total(chain),
    )


def round_view(round_: Round, round_number: int) -> RoundView:
    return RoundView(
        round_number=round_number,
        player1=_chain_view(round_, Player.ONE),
        player2=_chain_view(round_, Player.TWO),
        active_chain=round_.active_chain,
        sealed=round_.is_sealed,
        winner=int(round_.winner) if round_.winner is not None else None,
    )


def take_snapshot(state: GameState) -> GameSnapshot:
    """Build an immutable snapshot from the canonical state."""
    current_leader = leader(state.player1_score, state.player2_score)
    return GameSnapshot(
        current_player=int(state.current_player),
        player1_score=state.player1_score,
        player2_score=state.player2_score,
        leader=int(current_leader) if current_leader is not None else None,
        largest_word=state.largest_word,
        round_number=state.round_number,
        current_round=round_view(state.current_round, state.round_number),
        rounds=tuple(
            round_view(r, index + 1) for index, r in enumerate(state.rounds)
        ),
        active_chain=state.current_round.active_chain,
        required_letter=required_letter(state.current_round),
        timer=state.clock.remaining,
        timer_budget=state.clock.budget,
        timer_running=state.clock.is_running,
        clock_status=state.clock.status.value,
        clock_epoch=state.clock.epoch,
        last_error=state.last_error.message if state.last_error else None,
        last_error_kind=state.last_error.kind.value if state.last_error else None,
        event_count=state.event_count,
    )
