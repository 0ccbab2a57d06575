"""
Session Module - Manages ephemeral game sessions.

A session represents one game between two players:
- Created when the players start a game
- Holds the game controller
- Runs the turn clock's ticks on the event loop
- Destroyed when the game ends

Sessions are EPHEMERAL: nothing is written to disk or a database.
"""

from .manager import SessionManager, Session, SessionState
from .ticker import TurnTicker

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "TurnTicker",
]
