"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a presentation client and the
engine. Every game response embeds the full snapshot so a client can
redraw from any single message.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- VALIDATION_ERROR: Request body failed validation
- SERVER_TICKING: Manual tick sent while the server drives the clock
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    ENDED = "ended"
    ABANDONED = "abandoned"


class GameErrorKind(str, Enum):
    """User-facing game errors; mirrors the engine's ErrorKind."""
    EMPTY_INPUT = "EMPTY_INPUT"
    DUPLICATE_WORD = "DUPLICATE_WORD"
    BROKEN_CHAIN = "BROKEN_CHAIN"
    TIME_EXPIRED = "TIME_EXPIRED"


class ClockStatus(str, Enum):
    """Turn clock states."""
    IDLE = "idle"
    RUNNING = "running"
    EXPIRED = "expired"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    SERVER_TICKING = "SERVER_TICKING"


# =============================================================================
# Shared Models
# =============================================================================

class ChainInfo(BaseModel):
    """One player's chain within a round."""
    player: int = Field(..., ge=1, le=2)
    words: list[str] = Field(default_factory=list)
    chain_length: int = 0
    total_letters: int = 0

    model_config = {"from_attributes": True}


class RoundInfo(BaseModel):
    """A round, current or completed."""
    round_number: int
    player1: ChainInfo
    player2: ChainInfo
    active_chain: list[str] = Field(default_factory=list)
    sealed: bool = False
    winner: Optional[int] = Field(None, description="1, 2, or null for a tie / open round")

    model_config = {"from_attributes": True}


class GameStateResponse(BaseModel):
    """Complete game snapshot for rendering."""
    session_id: str
    current_player: int
    player1_score: int = 0
    player2_score: int = 0
    leader: Optional[int] = Field(None, description="Player with the higher score, null on a tie")
    largest_word: str = ""

    round_number: int = 1
    current_round: RoundInfo
    rounds: list[RoundInfo] = Field(default_factory=list, description="Completed rounds, oldest first")
    active_chain: list[str] = Field(default_factory=list)
    required_letter: Optional[str] = Field(None, description="Letter the next word must start with")

    timer: int
    timer_budget: int
    timer_running: bool = False
    clock_status: ClockStatus = ClockStatus.IDLE
    clock_epoch: int = 0

    last_error: Optional[str] = None
    last_error_kind: Optional[GameErrorKind] = None
    event_count: int = 0
    api_version: str = "v1"


# =============================================================================
# Request Models
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Request to create a new game session."""
    turn_seconds: Optional[int] = Field(
        None, ge=1, le=300, description="Seconds per turn (server default if omitted)"
    )


class SubmitWordRequest(BaseModel):
    """A word typed by the current player."""
    word: str = Field(..., max_length=256, description="Word as typed; surrounding whitespace is ignored")


class TickRequest(BaseModel):
    """A clock tick sent by a client that runs its own timer."""
    epoch: Optional[int] = Field(
        None, description="clock_epoch the tick sequence started under; stale ticks are ignored"
    )


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class SessionResponse(BaseModel):
    """Response containing session information."""
    session_id: str
    status: SessionStatus
    created_at: float = 0.0
    turn_seconds: int
    game_state: Optional[GameStateResponse] = None
    api_version: str = "v1"


class EventResponse(BaseModel):
    """Outcome of one inbound event (word, focus, tick)."""
    session_id: str
    event: str = Field(..., description="submit_word, focus_input, tick")
    accepted: bool = Field(False, description="True when a submitted word joined the chain")
    error: Optional[str] = None
    error_kind: Optional[GameErrorKind] = None
    round_ended: bool = False
    sealed_round: Optional[RoundInfo] = None
    changes: list[str] = Field(default_factory=list)
    game_state: GameStateResponse
    api_version: str = "v1"


class SessionListResponse(BaseModel):
    """Response listing active sessions."""
    sessions: list[str]
    count: int


class EndSessionResponse(BaseModel):
    """Response after ending a session."""
    success: bool
    session_id: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
