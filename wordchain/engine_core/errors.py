"""
Engine errors.

User-facing problems are not exceptions: they are reported as an
ErrorKind plus message on the ActionResult and recovered locally.
InvalidEngineState is reserved for broken call contracts.
"""

from __future__ import annotations
from enum import Enum


class ErrorKind(str, Enum):
    """User-facing error kinds, each with a defined state transition."""
    EMPTY_INPUT = "EMPTY_INPUT"
    DUPLICATE_WORD = "DUPLICATE_WORD"
    BROKEN_CHAIN = "BROKEN_CHAIN"
    TIME_EXPIRED = "TIME_EXPIRED"


class InvalidEngineState(Exception):
    """Raised when an engine component is driven outside its contract."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


def empty_input_message() -> str:
    return "Please enter a word"


def duplicate_word_message(word: str) -> str:
    return f'"{word}" has already been used in this round. Try a different word!'


def broken_chain_message(required_letter: str | None) -> str:
    letter = required_letter if required_letter else "any letter"
    return f"Invalid word. It must start with '{letter}'. Round ends!"


def time_expired_message(player: int) -> str:
    return f"Time's up! Player {player} loses this round."
