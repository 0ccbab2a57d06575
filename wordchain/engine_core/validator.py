"""
Word Validator - Decides whether a word may extend the current round.

Pure functions over a Round. Empty input never reaches here; the
reducer rejects it first.
"""

from __future__ import annotations
from enum import Enum

from .state import Round


class Verdict(Enum):
    ACCEPTED = "accepted"
    DUPLICATE_WORD = "duplicate_word"
    BROKEN_CHAIN = "broken_chain"


def required_letter(round_: Round) -> str | None:
    """The letter the next word must start with, or None at chain start."""
    last_word = round_.last_word
    if not last_word:
        return None
    return last_word.lower()[-1]


def check_word(word: str, round_: Round) -> Verdict:
    """
    Classify a candidate word against the round.

    A word already used this round is a duplicate even if it would
    also break the chain.
    """
    lowered = word.lower()
    if lowered in round_.used_words:
        return Verdict.DUPLICATE_WORD

    letter = required_letter(round_)
    if letter is None:
        return Verdict.ACCEPTED

    if lowered[:1] != letter:
        return Verdict.BROKEN_CHAIN
    return Verdict.ACCEPTED


def is_valid(word: str, round_: Round) -> bool:
    return check_word(word, round_) == Verdict.ACCEPTED
