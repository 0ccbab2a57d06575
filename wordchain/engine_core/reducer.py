"""
Reducer - Applies actions to game state.

The reducer is the single point of state mutation.
All state changes must go through apply_action().

Design principles:
- Pure function: (state, action) -> new_state
- Validates before applying
- Returns ActionResult with the new state and any user-facing error
- Delegates rules to the validator, scoring and round engine modules
"""

from __future__ import annotations
from dataclasses import dataclass

from ..logging_config import get_logger
from . import round_engine, scoring
from .action import Action, ActionType, ActionResult
from .errors import (
    ErrorKind,
    broken_chain_message,
    duplicate_word_message,
    empty_input_message,
    time_expired_message,
)
from .state import GameState, LastError, Round
from .validator import Verdict, check_word, required_letter

logger = get_logger(__name__)


@dataclass
class Reducer:
    """
    Reducer applies actions to game state.

    Stateless - all state is in GameState.
    """

    def apply(self, state: GameState, action: Action) -> ActionResult:
        """
        Apply an action to the game state.

        Returns ActionResult with new state or error.
        """
        validation_error = self._validate_action(state, action)
        if validation_error:
            return ActionResult.failure(validation_error)

        handler = self._get_handler(action.action_type)
        if not handler:
            return ActionResult.failure(
                f"No handler for action type: {action.action_type}"
            )

        result = handler(state, action)
        if result.success and result.new_state is not None:
            result.new_state = result.new_state._copy_with(
                event_count=state.event_count + 1
            )
        return result

    def _validate_action(self, state: GameState, action: Action) -> str | None:
        """
        Validate that an action is well-formed.

        Returns error message if invalid, None if valid.
        """
        if action.action_type == ActionType.SUBMIT_WORD and action.payload.text is None:
            return "Word submission carries no text"
        if state.current_round.is_sealed:
            return "Current round is sealed"
        return None

    def _get_handler(self, action_type: ActionType):
        """Get the handler function for an action type."""
        handlers = {
            ActionType.SUBMIT_WORD: self._handle_submit_word,
            ActionType.FOCUS_INPUT: self._handle_focus_input,
            ActionType.TICK: self._handle_tick,
        }
        return handlers.get(action_type)

    def _handle_submit_word(self, state: GameState, action: Action) -> ActionResult:
        """Handle a word submission."""
        word = action.payload.text.strip()
        player = state.current_player

        # Empty input leaves the clock and turn alone
        if not word:
            message = empty_input_message()
            new_state = state._copy_with(
                last_error=LastError(ErrorKind.EMPTY_INPUT, message),
            )
            return ActionResult.with_state(
                new_state,
                error=message,
                error_kind=ErrorKind.EMPTY_INPUT,
            )

        verdict = check_word(word, state.current_round)

        if verdict == Verdict.ACCEPTED:
            new_round = round_engine.accept(state.current_round, player, word)
            new_state = scoring.award(state, player, word)
            new_state = new_state._copy_with(
                current_round=new_round,
                largest_word=scoring.track_largest(state.largest_word, word),
                current_player=player.other,
                clock=state.clock.stop(),
                last_error=None,
            )
            logger.debug(f"Player {int(player)} played {word!r} (+{len(word)})")
            return ActionResult.with_state(
                new_state,
                changes=[f"Player {int(player)} played {word}"],
            )

        if verdict == Verdict.DUPLICATE_WORD:
            message = duplicate_word_message(word)
            new_state = state._copy_with(
                clock=state.clock.stop(),
                last_error=LastError(ErrorKind.DUPLICATE_WORD, message),
            )
            logger.debug(f"Player {int(player)} repeated {word!r}")
            return ActionResult.with_state(
                new_state,
                error=message,
                error_kind=ErrorKind.DUPLICATE_WORD,
            )

        message = broken_chain_message(required_letter(state.current_round))
        return self._end_round(state, ErrorKind.BROKEN_CHAIN, message)

    def _handle_focus_input(self, state: GameState, action: Action) -> ActionResult:
        """Handle input focus: arm the clock unless it is already running."""
        if state.clock.is_running:
            return ActionResult.with_state(state)
        new_state = state._copy_with(clock=state.clock.arm())
        logger.debug(
            f"Clock armed for player {int(state.current_player)} "
            f"({new_state.clock.remaining}s)"
        )
        return ActionResult.with_state(
            new_state,
            changes=[f"Player {int(state.current_player)}'s clock started"],
        )

    def _handle_tick(self, state: GameState, action: Action) -> ActionResult:
        """Handle one elapsed second."""
        clock = state.clock.tick(action.payload.epoch)
        if clock is state.clock:
            return ActionResult.with_state(state)

        if clock.is_expired:
            message = time_expired_message(int(state.current_player))
            return self._end_round(
                state._copy_with(clock=clock), ErrorKind.TIME_EXPIRED, message
            )
        return ActionResult.with_state(state._copy_with(clock=clock))

    def _end_round(self, state: GameState, kind: ErrorKind, message: str) -> ActionResult:
        """
        Seal the current round, open a fresh one and pass the turn.

        Shared by the broken-chain and time-expired paths.
        """
        sealed = round_engine.seal(state.current_round)
        new_state = state._copy_with(
            rounds=state.rounds + (sealed,),
            current_round=Round(),
            current_player=state.current_player.other,
            clock=state.clock.stop(),
            last_error=LastError(kind, message),
        )
        winner = f"player {int(sealed.winner)}" if sealed.winner else "nobody (tie)"
        logger.info(
            f"Round {state.round_number} sealed by {kind.value}; winner: {winner}"
        )
        return ActionResult.with_state(
            new_state,
            changes=[f"Round {state.round_number} ended"],
            error=message,
            error_kind=kind,
            sealed_round=sealed,
        )


def apply_action(state: GameState, action: Action) -> ActionResult:
    """
    Convenience function to apply an action.

    Creates a Reducer and applies the action.
    """
    return Reducer().apply(state, action)
