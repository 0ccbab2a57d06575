"""
FastAPI Application - REST API for a word-chain client.

Endpoints:
    POST   /api/v1/sessions                 Create game session
    GET    /api/v1/sessions                 List active sessions
    GET    /api/v1/sessions/{id}            Get session status
    DELETE /api/v1/sessions/{id}            End session
    GET    /api/v1/sessions/{id}/state      Get game snapshot
    POST   /api/v1/sessions/{id}/words      Submit a word
    POST   /api/v1/sessions/{id}/focus      Focus the input (arms the clock)
    POST   /api/v1/sessions/{id}/tick       Manual clock tick
    WS     /api/v1/sessions/{id}/ws         WebSocket for real-time updates

Clock Flow:
    1. POST /focus arms the current player's clock
    2. The server ticks once per second and pushes `state_update`
       messages over the WebSocket
    3. POST /words stops the clock; the next player focuses to re-arm
    4. When the clock reaches zero the round is sealed and the turn passes

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import json

from ..config import ALLOWED_ORIGINS, WORDCHAIN_ENV
from ..logging_config import get_logger

logger = get_logger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    from fastapi import FastAPI, WebSocket, WebSocketDisconnect, Body, Query
    from fastapi.encoders import jsonable_encoder
    from fastapi.exceptions import RequestValidationError
    from fastapi.middleware.cors import CORSMiddleware
    from fastapi.responses import JSONResponse

    from .service import APIService
    from .schemas import (
        # Request models
        CreateSessionRequest,
        SubmitWordRequest,
        TickRequest,
        # Response models
        SessionResponse,
        GameStateResponse,
        EventResponse,
        ErrorResponse,
        SessionListResponse,
        EndSessionResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Wordchain Engine API",
        description="""
Two-player word-chain game. Each word must start with the last letter
of the previous one; a word may be used once per round.

## Round Endings

| Event | Result |
|-------|--------|
| `BROKEN_CHAIN` | Round sealed, turn passes |
| `TIME_EXPIRED` | Round sealed, turn passes |
| `DUPLICATE_WORD` | Round continues, same player |
| `EMPTY_INPUT` | Nothing changes |

## Error Codes

| Code | Description |
|------|-------------|
| `SESSION_NOT_FOUND` | Session does not exist |
| `VALIDATION_ERROR` | Request body is invalid |
| `SERVER_TICKING` | Manual tick while the server drives the clock |
        """,
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Service instance
    api_service = service or APIService()

    # WebSocket connections
    ws_connections: dict[str, list[WebSocket]] = {}

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: dict | None = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def not_found(response: ErrorResponse) -> JSONResponse:
        return make_error_response(
            ErrorCode.SESSION_NOT_FOUND,
            response.error,
            status_code=404,
        )

    async def broadcast_to_session(session_id: str, message: dict):
        """Broadcast a message to all WebSocket connections for a session."""
        if session_id in ws_connections:
            dead_connections = []
            for ws in ws_connections[session_id]:
                try:
                    await ws.send_json(message)
                except (WebSocketDisconnect, RuntimeError) as e:
                    logger.debug(f"Dropping websocket for {session_id}: {e}")
                    dead_connections.append(ws)
            for ws in dead_connections:
                ws_connections[session_id].remove(ws)

    async def broadcast_state(session_id: str, state: GameStateResponse):
        await broadcast_to_session(session_id, {
            "type": "state_update",
            "payload": state.model_dump(mode="json"),
        })

    if api_service.broadcast is None:
        api_service.broadcast = broadcast_state

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            status_code=422,
            details={"errors": jsonable_encoder(exc.errors())},
        )

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/sessions",
        response_model=SessionResponse,
        responses={422: {"model": ErrorResponse, "description": "Invalid turn_seconds"}},
        tags=["Sessions"],
        summary="Create a new game session",
    )
    async def create_session(
        body: Annotated[Optional[CreateSessionRequest], Body()] = None,
    ) -> SessionResponse:
        """
        Create a new game session. Player 1 moves first with an idle clock.
        """
        return api_service.create_session(body or CreateSessionRequest())

    @app.get(
        "/api/v1/sessions",
        response_model=SessionListResponse,
        tags=["Sessions"],
        summary="List active sessions",
    )
    async def list_sessions() -> SessionListResponse:
        """List all active session IDs."""
        sessions = api_service.list_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    @app.get(
        "/api/v1/sessions/{session_id}",
        response_model=SessionResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Sessions"],
        summary="Get session status",
    )
    async def get_session(session_id: str) -> Union[SessionResponse, JSONResponse]:
        """Get the current status of a game session."""
        response = api_service.get_session(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.delete(
        "/api/v1/sessions/{session_id}",
        response_model=EndSessionResponse,
        tags=["Sessions"],
        summary="End a game session",
    )
    async def end_session(
        session_id: str,
        reason: Annotated[str, Query(description="Reason for ending")] = "user_ended",
    ) -> EndSessionResponse:
        """End a game session and release resources."""
        success = api_service.end_session(session_id, reason)
        await broadcast_to_session(session_id, {"type": "session_ended"})
        ws_connections.pop(session_id, None)
        return EndSessionResponse(success=success, session_id=session_id)

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/sessions/{session_id}/state",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Get current game state",
    )
    async def get_game_state(session_id: str) -> Union[GameStateResponse, JSONResponse]:
        """Get the complete current snapshot for display."""
        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/words",
        response_model=EventResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Submit a word for the current player",
    )
    async def submit_word(
        session_id: str,
        body: SubmitWordRequest,
    ) -> Union[EventResponse, JSONResponse]:
        """
        Submit a word.

        Game rule violations are not HTTP errors: the response carries
        `error_kind` and the state after the rule was applied.

        **Request Body:**
        ```json
        {"word": "Apple"}
        ```
        """
        response = api_service.submit_word(session_id, body.word)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        await broadcast_state(session_id, response.game_state)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/focus",
        response_model=EventResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Game"],
        summary="Focus the input and arm the turn clock",
    )
    async def focus_input(session_id: str) -> Union[EventResponse, JSONResponse]:
        """Arm the current player's clock if it is not already running."""
        response = api_service.focus_input(session_id)
        if isinstance(response, ErrorResponse):
            return not_found(response)
        await broadcast_state(session_id, response.game_state)
        return response

    @app.post(
        "/api/v1/sessions/{session_id}/tick",
        response_model=EventResponse,
        responses={
            404: {"model": ErrorResponse},
            409: {"model": ErrorResponse, "description": "Server drives the clock"},
        },
        tags=["Game"],
        summary="Apply one clock tick",
    )
    async def tick(
        session_id: str,
        body: Annotated[Optional[TickRequest], Body()] = None,
    ) -> Union[EventResponse, JSONResponse]:
        """
        Advance the clock by one second.

        For clients that drive their own timer, on servers started with
        WORDCHAIN_AUTO_TICK off. Ticks are ignored while the clock is idle
        or when `epoch` belongs to a cancelled countdown.
        """
        epoch = body.epoch if body else None
        response = api_service.tick(session_id, epoch)
        if isinstance(response, ErrorResponse):
            if response.error_code == ErrorCode.SERVER_TICKING:
                return make_error_response(
                    ErrorCode.SERVER_TICKING, response.error, status_code=409
                )
            return not_found(response)
        await broadcast_state(session_id, response.game_state)
        return response

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/api/v1/sessions/{session_id}/ws")
    async def websocket_endpoint(websocket: WebSocket, session_id: str):
        """
        WebSocket for real-time updates.

        Messages from server:
        - state_update: Game state changed (includes every clock tick)
        - session_ended: Session was closed
        - error: Error occurred

        Messages from client:
        - ping: Keep-alive
        - submit_word: {"type": "submit_word", "word": "..."}
        - focus_input: {"type": "focus_input"}
        """
        await websocket.accept()

        response = api_service.get_game_state(session_id)
        if isinstance(response, ErrorResponse):
            await websocket.send_json({
                "type": "error",
                "payload": response.model_dump(mode="json"),
            })
            await websocket.close()
            return

        ws_connections.setdefault(session_id, []).append(websocket)

        try:
            await websocket.send_json({
                "type": "state_update",
                "payload": response.model_dump(mode="json"),
            })

            while True:
                data = await websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": "Invalid JSON"},
                    })
                    continue

                message_type = message.get("type")
                if message_type == "ping":
                    await websocket.send_json({"type": "pong"})
                elif message_type == "submit_word":
                    event = api_service.submit_word(session_id, str(message.get("word", "")))
                    if isinstance(event, ErrorResponse):
                        break
                    await broadcast_state(session_id, event.game_state)
                elif message_type == "focus_input":
                    event = api_service.focus_input(session_id)
                    if isinstance(event, ErrorResponse):
                        break
                    await broadcast_state(session_id, event.game_state)
                else:
                    await websocket.send_json({
                        "type": "error",
                        "payload": {"message": f"Unknown message type: {message_type}"},
                    })

        except WebSocketDisconnect:
            logger.debug(f"Websocket for {session_id} disconnected")
        finally:
            if session_id in ws_connections:
                if websocket in ws_connections[session_id]:
                    ws_connections[session_id].remove(websocket)

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(
            status="healthy",
            service="wordchain-engine",
            version="1.0.0",
        )

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Wordchain Engine API",
            "version": "1.0.0",
            "environment": WORDCHAIN_ENV,
            "docs": "/api/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn wordchain.api.app:app
app = create_app()
