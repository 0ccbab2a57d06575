"""
API Module - Client interface.

Exposes the engine via REST and WebSocket for any presentation layer.
A client:
1. Creates a game session
2. Focuses the input to arm the current player's clock
3. Submits words
4. Renders the snapshot returned after every event

All state is session-scoped. No persistent user accounts required.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    SubmitWordRequest,
    TickRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    EventResponse,
    ErrorResponse,
    # Shared
    ChainInfo,
    RoundInfo,
    # Enums
    ErrorCode,
    GameErrorKind,
    SessionStatus,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "CreateSessionRequest",
    "SubmitWordRequest",
    "TickRequest",
    # Responses
    "SessionResponse",
    "GameStateResponse",
    "EventResponse",
    "ErrorResponse",
    # Shared
    "ChainInfo",
    "RoundInfo",
    # Enums
    "ErrorCode",
    "GameErrorKind",
    "SessionStatus",
    # Service
    "APIService",
    "create_app",
]
