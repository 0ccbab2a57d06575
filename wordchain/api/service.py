"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine events
2. Manages sessions and their turn tickers
3. Formats snapshots as responses

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Awaitable, Callable

from ..config import AUTO_TICK
from ..engine_core import Action, ActionResult, GameSnapshot, RoundView
from ..logging_config import get_logger
from ..session import Session, SessionManager
from .schemas import (
    # Requests
    CreateSessionRequest,
    # Responses
    SessionResponse,
    GameStateResponse,
    EventResponse,
    ErrorResponse,
    # Shared
    RoundInfo,
    ChainInfo,
    # Enums
    ErrorCode,
    SessionStatus,
)

logger = get_logger(__name__)

SnapshotBroadcast = Callable[[str, GameStateResponse], Awaitable[None]]


@dataclass
class APIService:
    """
    Main API service.

    Usage:
        service = APIService()

        session_response = service.create_session(CreateSessionRequest())
        session_id = session_response.session_id

        service.focus_input(session_id)
        event = service.submit_word(session_id, "Apple")

    With auto_tick enabled, focus_input() must run inside an event loop:
    it starts the session's ticker, which feeds one tick per interval
    and hands each resulting state to `broadcast`.
    """
    session_manager: SessionManager = field(default_factory=SessionManager)
    auto_tick: bool = AUTO_TICK
    broadcast: SnapshotBroadcast | None = None

    def create_session(self, request: CreateSessionRequest) -> SessionResponse:
        """
        Create a new game session.
        """
        session = self.session_manager.create_session(turn_seconds=request.turn_seconds)
        session.ticker.on_tick = self._tick_callback(session.session_id)
        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """
        Get session status.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def get_game_state(self, session_id: str) -> GameStateResponse | ErrorResponse:
        """
        Get current game state.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self.snapshot_to_response(session_id, session.controller.snapshot())

    def submit_word(self, session_id: str, word: str) -> EventResponse | ErrorResponse:
        """
        Submit a word for the player whose turn it is.

        Any processed word stops the clock, so the ticker is cancelled
        unless the clock is still running (empty input).
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        snapshot, result = session.controller.apply(Action.submit_word(word))
        session.touch()
        if not snapshot.timer_running:
            session.ticker.cancel()
        return self._event_response(session_id, "submit_word", snapshot, result)

    def focus_input(self, session_id: str) -> EventResponse | ErrorResponse:
        """
        The current player focused the input field; arms the clock.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        snapshot, result = session.controller.apply(Action.focus_input())
        session.touch()
        if self.auto_tick and snapshot.timer_running:
            session.ticker.start()
        return self._event_response(session_id, "focus_input", snapshot, result)

    def tick(self, session_id: str, epoch: int | None = None) -> EventResponse | ErrorResponse:
        """
        Apply one clock tick sent by the client.

        Rejected with SERVER_TICKING while auto_tick is on: the
        session's ticker is then the only source of ticks.
        """
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        if self.auto_tick:
            return ErrorResponse(
                error="The server drives the turn clock; manual ticks are disabled",
                error_code=ErrorCode.SERVER_TICKING,
            )

        snapshot, result = session.controller.apply(Action.tick(epoch))
        if not snapshot.timer_running:
            session.ticker.cancel()
        return self._event_response(session_id, "tick", snapshot, result)

    def end_session(self, session_id: str, reason: str = "user_ended") -> bool:
        """
        End a game session.
        """
        return self.session_manager.end_session(session_id, reason)

    def list_sessions(self) -> list[str]:
        """
        List active session IDs.
        """
        return self.session_manager.list_active_sessions()

    # =========================================================================
    # Helper methods
    # =========================================================================

    def _tick_callback(self, session_id: str):
        async def on_tick(snapshot: GameSnapshot):
            if self.broadcast is not None:
                await self.broadcast(
                    session_id, self.snapshot_to_response(session_id, snapshot)
                )
        return on_tick

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _session_to_response(self, session: Session) -> SessionResponse:
        """Convert Session to SessionResponse."""
        return SessionResponse(
            session_id=session.session_id,
            status=SessionStatus(session.state.value),
            created_at=session.created_at,
            turn_seconds=session.controller.state.clock.budget,
            game_state=self.snapshot_to_response(
                session.session_id, session.controller.snapshot()
            ),
        )

    def _event_response(
        self,
        session_id: str,
        event: str,
        snapshot: GameSnapshot,
        result: ActionResult,
    ) -> EventResponse:
        accepted = event == "submit_word" and result.error_kind is None
        sealed = None
        if result.sealed_round is not None:
            sealed = snapshot.rounds[-1]
        return EventResponse(
            session_id=session_id,
            event=event,
            accepted=accepted,
            error=result.error,
            error_kind=result.error_kind.value if result.error_kind else None,
            round_ended=result.ended_round,
            sealed_round=_round_info(sealed) if sealed else None,
            changes=result.state_changes,
            game_state=self.snapshot_to_response(session_id, snapshot),
        )

    def snapshot_to_response(self, session_id: str, snapshot: GameSnapshot) -> GameStateResponse:
        """Convert an engine snapshot to its API model."""
        return GameStateResponse(
            session_id=session_id,
            current_player=snapshot.current_player,
            player1_score=snapshot.player1_score,
            player2_score=snapshot.player2_score,
            leader=snapshot.leader,
            largest_word=snapshot.largest_word,
            round_number=snapshot.round_number,
            current_round=_round_info(snapshot.current_round),
            rounds=[_round_info(r) for r in snapshot.rounds],
            active_chain=list(snapshot.active_chain),
            required_letter=snapshot.required_letter,
            timer=snapshot.timer,
            timer_budget=snapshot.timer_budget,
            timer_running=snapshot.timer_running,
            clock_status=snapshot.clock_status,
            clock_epoch=snapshot.clock_epoch,
            last_error=snapshot.last_error,
            last_error_kind=snapshot.last_error_kind,
            event_count=snapshot.event_count,
        )


def _round_info(view: RoundView) -> RoundInfo:
    return RoundInfo(
        round_number=view.round_number,
        player1=ChainInfo.model_validate(view.player1),
        player2=ChainInfo.model_validate(view.player2),
        active_chain=list(view.active_chain),
        sealed=view.sealed,
        winner=view.winner,
    )
