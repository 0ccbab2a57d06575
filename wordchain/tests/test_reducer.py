"""
Tests for the reducer (state transitions).

Tests:
- Word submission outcomes
- Focus and tick handling
- Round sealing paths
- Validation of malformed actions
"""

from ..engine_core.action import Action, ActionPayload, ActionType
from ..engine_core.clock import ClockStatus
from ..engine_core.errors import ErrorKind
from ..engine_core.reducer import apply_action
from ..engine_core.state import Player


def play(state, *words):
    """Submit words in turn, returning the final state."""
    for word in words:
        result = apply_action(state, Action.submit_word(word))
        assert result.success
        state = result.new_state
    return state


class TestSubmitWord:
    """Tests for word submissions."""

    def test_valid_word_accepted(self, empty_state):
        """Scenario: empty chain, player 1 plays "Apple"."""
        result = apply_action(empty_state, Action.submit_word("Apple"))

        assert result.success
        assert result.error_kind is None
        state = result.new_state
        assert state.current_round.active_chain == ("Apple",)
        assert state.player1_score == 5
        assert state.current_player == Player.TWO
        assert state.largest_word == "Apple"

    def test_word_is_trimmed(self, empty_state):
        """Surrounding whitespace is not part of the word."""
        state = play(empty_state, "  Apple \n")
        assert state.current_round.active_chain == ("Apple",)
        assert state.player1_score == 5

    def test_empty_input(self, empty_state):
        """Blank input only sets an error."""
        armed = apply_action(empty_state, Action.focus_input()).new_state
        result = apply_action(armed, Action.submit_word("   "))

        assert result.error_kind == ErrorKind.EMPTY_INPUT
        state = result.new_state
        assert state.last_error.kind == ErrorKind.EMPTY_INPUT
        assert state.current_player == Player.ONE
        assert state.current_round == armed.current_round
        # Clock keeps running
        assert state.clock == armed.clock

    def test_duplicate_keeps_turn(self, empty_state):
        """Scenario: "apple" after "Apple" is a duplicate; player 2 keeps the turn."""
        state = play(empty_state, "Apple")
        state = apply_action(state, Action.focus_input()).new_state
        result = apply_action(state, Action.submit_word("apple"))

        assert result.error_kind == ErrorKind.DUPLICATE_WORD
        assert not result.ended_round
        new_state = result.new_state
        assert new_state.current_player == Player.TWO
        assert new_state.current_round == state.current_round
        assert new_state.player2_score == 0
        assert new_state.clock.status == ClockStatus.IDLE
        assert '"apple" has already been used' in new_state.last_error.message

    def test_broken_chain_seals_round(self, empty_state):
        """Scenario: "banana" after "tiger" ends the round; turn passes to player 1."""
        state = play(empty_state, "Apple", "Elephant", "tiger")
        assert state.current_player == Player.TWO

        result = apply_action(state, Action.submit_word("banana"))

        assert result.error_kind == ErrorKind.BROKEN_CHAIN
        assert result.ended_round
        assert result.sealed_round.winner == Player.ONE
        new_state = result.new_state
        assert len(new_state.rounds) == 1
        assert new_state.rounds[0].active_chain == ("Apple", "Elephant", "tiger")
        assert new_state.current_round.is_empty
        assert new_state.current_player == Player.ONE
        assert "must start with 'r'" in new_state.last_error.message

    def test_broken_chain_keeps_scores(self, empty_state):
        """Ending a round doesn't touch cumulative scores."""
        state = play(empty_state, "Apple", "Elephant", "tiger", "banana")
        assert state.player1_score == 10
        assert state.player2_score == 8
        assert state.largest_word == "Elephant"

    def test_success_clears_error(self, empty_state):
        """An accepted word clears the previous error."""
        state = play(empty_state, "Apple", "apple")
        assert state.last_error is not None
        state = play(state, "egg")
        assert state.last_error is None

    def test_new_round_allows_old_words(self, empty_state):
        """Used words are per round."""
        state = play(empty_state, "Apple", "banana")
        assert len(state.rounds) == 1
        state = play(state, "Apple")
        assert state.current_round.active_chain == ("Apple",)

    def test_largest_word_tie_keeps_first(self, empty_state):
        """Equal-length later words don't take the title."""
        state = play(empty_state, "tiger", "rhino")
        assert state.largest_word == "tiger"


class TestClockEvents:
    """Tests for focus and tick events."""

    def test_focus_arms_clock(self, empty_state):
        result = apply_action(empty_state, Action.focus_input())
        assert result.new_state.clock.is_running
        assert result.new_state.clock.remaining == 10

    def test_tick_ignored_while_idle(self, empty_state):
        result = apply_action(empty_state, Action.tick())
        assert result.success
        assert result.new_state.clock == empty_state.clock

    def test_submission_stops_clock(self, empty_state):
        state = apply_action(empty_state, Action.focus_input()).new_state
        state = apply_action(state, Action.tick()).new_state
        state = play(state, "Apple")

        assert state.clock.status == ClockStatus.IDLE
        assert state.clock.remaining == 10

    def test_expiry_seals_round(self, empty_state):
        """Scenario: clock runs out on player 2's turn."""
        state = play(empty_state, "Apple")
        state = apply_action(state, Action.focus_input()).new_state
        for _ in range(9):
            state = apply_action(state, Action.tick()).new_state
        assert state.clock.remaining == 1

        result = apply_action(state, Action.tick())

        assert result.error_kind == ErrorKind.TIME_EXPIRED
        assert result.sealed_round.winner == Player.ONE
        new_state = result.new_state
        assert new_state.last_error.message == "Time's up! Player 2 loses this round."
        assert new_state.current_player == Player.ONE
        assert new_state.current_round.is_empty
        assert new_state.clock.status == ClockStatus.IDLE
        assert new_state.clock.remaining == 10

    def test_stale_tick_after_submission(self, empty_state):
        """A tick from before a submission can't expire the next turn."""
        state = apply_action(empty_state, Action.focus_input()).new_state
        old_epoch = state.clock.epoch
        state = play(state, "Apple")
        state = apply_action(state, Action.focus_input()).new_state

        result = apply_action(state, Action.tick(epoch=old_epoch))
        assert result.new_state.clock.remaining == 10


class TestValidation:
    """Tests for malformed actions."""

    def test_submission_without_text_fails(self, empty_state):
        action = Action(action_type=ActionType.SUBMIT_WORD, payload=ActionPayload())
        result = apply_action(empty_state, action)

        assert not result.success
        assert "no text" in result.error

    def test_event_count_increments(self, empty_state):
        state = play(empty_state, "Apple", "egg")
        assert state.event_count == 2
