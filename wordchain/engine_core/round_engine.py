"""
Round Engine - Builds up a round and seals it.

accept() trusts its caller: words must already have passed the
validator. seal() decides the round winner by letters contributed to
each player's own chain, never the merged chain.
"""

from __future__ import annotations
from dataclasses import replace

from .errors import InvalidEngineState
from .state import Player, Round, RoundStatus


def letter_total(chain: tuple[str, ...]) -> int:
    """Total letters across a chain of words."""
    return sum(len(word) for word in chain)


def accept(round_: Round, player: Player, word: str) -> Round:
    """Return new round with the word appended for the given player."""
    if round_.is_sealed:
        raise InvalidEngineState("Cannot add words to a sealed round")

    player1_chain = round_.player1_chain
    player2_chain = round_.player2_chain
    if player == Player.ONE:
        player1_chain = player1_chain + (word,)
    else:
        player2_chain = player2_chain + (word,)

    return replace(
        round_,
        player1_chain=player1_chain,
        player2_chain=player2_chain,
        active_chain=round_.active_chain + (word,),
        used_words=round_.used_words | {word.lower()},
    )


def round_winner(round_: Round) -> Player | None:
    """Player with strictly more letters this round, or None on a tie."""
    player1_letters = letter_total(round_.player1_chain)
    player2_letters = letter_total(round_.player2_chain)
    if player1_letters > player2_letters:
        return Player.ONE
    if player2_letters > player1_letters:
        return Player.TWO
    return None


def seal(round_: Round) -> Round:
    """
    Close the round and fix its winner.

    Raises:
        InvalidEngineState: if the round was already sealed
    """
    if round_.is_sealed:
        raise InvalidEngineState("Round has already been sealed")
    return replace(round_, winner=round_winner(round_), status=RoundStatus.SEALED)
