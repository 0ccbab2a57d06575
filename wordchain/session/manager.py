"""
Session Manager - Creates and manages game sessions.

A session is one game between two players sharing a screen:
- Created when the players start a game
- Holds the GameController and its turn ticker
- Destroyed when the players leave

Sessions are EPHEMERAL:
- No persistence to database
- Nothing survives a restart
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import time
import uuid

from ..config import SESSION_MAX_AGE, TICK_INTERVAL, TURN_SECONDS
from ..engine_core import GameController
from ..logging_config import get_logger
from .ticker import TurnTicker

logger = get_logger(__name__)


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Game in progress
    ENDED = "ended"  # Players finished
    ABANDONED = "abandoned"  # Cleaned up as stale


@dataclass
class Session:
    """
    An ephemeral game session.

    Contains:
    - The controller owning the game state
    - The ticker driving the turn clock
    - Its lifecycle state

    The session is destroyed when the game ends.
    State is NOT persisted.
    """
    session_id: str
    controller: GameController
    ticker: TurnTicker
    created_at: float
    last_activity: float = 0.0

    state: SessionState = SessionState.ACTIVE

    def is_active(self) -> bool:
        """Check if session is still active."""
        return self.state == SessionState.ACTIVE

    def touch(self):
        self.last_activity = time.time()


class SessionManager:
    """
    Manages game sessions.

    Responsibilities:
    - Create sessions
    - Track active sessions
    - Clean up ended and stale sessions

    No persistence - sessions are in-memory only.
    """

    def __init__(
        self,
        turn_seconds: int = TURN_SECONDS,
        tick_interval: float = TICK_INTERVAL,
    ):
        self.turn_seconds = turn_seconds
        self.tick_interval = tick_interval
        self._sessions: dict[str, Session] = {}

    def create_session(self, turn_seconds: int | None = None) -> Session:
        """
        Create a new game session.

        Args:
            turn_seconds: Per-turn budget; defaults to the manager's

        Returns:
            New Session with player 1 to move
        """
        session_id = str(uuid.uuid4())
        controller = GameController(turn_seconds=turn_seconds or self.turn_seconds)
        ticker = TurnTicker(controller, interval=self.tick_interval)

        now = time.time()
        session = Session(
            session_id=session_id,
            controller=controller,
            ticker=ticker,
            created_at=now,
            last_activity=now,
        )
        self._sessions[session_id] = session
        logger.info(
            f"Session {session_id} created "
            f"({controller.state.clock.budget}s per turn)"
        )
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str, reason: str = "completed") -> bool:
        """
        End a session and clean up.

        The ticker is cancelled and the session removed from memory.
        Returns False if no such session existed.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        session.ticker.cancel()
        if reason == "stale":
            session.state = SessionState.ABANDONED
        else:
            session.state = SessionState.ENDED
        logger.info(f"Session {session_id} ended ({reason})")
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of active sessions."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: int = SESSION_MAX_AGE) -> int:
        """
        End sessions idle for longer than max_age.

        Called periodically to free memory. Returns how many were removed.
        """
        current_time = time.time()
        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.last_activity > max_age_seconds
        ]

        for session_id in to_remove:
            self.end_session(session_id, reason="stale")
        return len(to_remove)
