"""
Score Keeper - Cumulative scores, the longest word, and the leader.

Scores are one point per letter of every accepted word. The leader is
derived, never stored.
"""

from __future__ import annotations

from .state import GameState, Player


def award(state: GameState, player: Player, word: str) -> GameState:
    """Return new state with len(word) added to the player's score."""
    if player == Player.ONE:
        return state._copy_with(player1_score=state.player1_score + len(word))
    return state._copy_with(player2_score=state.player2_score + len(word))


def track_largest(largest: str, word: str) -> str:
    # Strictly longer only: the first word of a given length keeps the title
    if len(word) > len(largest):
        return word
    return largest


def leader(player1_score: int, player2_score: int) -> Player | None:
    """Player with the strictly higher score, or None on a tie."""
    if player1_score > player2_score:
        return Player.ONE
    if player2_score > player1_score:
        return Player.TWO
    return None
