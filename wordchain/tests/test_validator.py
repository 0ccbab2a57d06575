"""
Tests for word validation.

Tests:
- Chain start accepts any word
- Chain-letter rule, case-insensitive
- Duplicates take precedence over the chain rule
"""

import pytest

from ..engine_core.state import Player, Round
from ..engine_core.round_engine import accept
from ..engine_core.validator import Verdict, check_word, is_valid, required_letter


class TestChainStart:
    """Tests for an empty active chain."""

    def test_any_word_starts_chain(self):
        """Any non-empty word is valid when the chain is empty."""
        assert is_valid("Zebra", Round())
        assert check_word("x", Round()) == Verdict.ACCEPTED

    def test_no_required_letter(self):
        """An empty chain has no required letter."""
        assert required_letter(Round()) is None


class TestChainRule:
    """Tests for the last-letter rule."""

    def test_matching_letter_is_valid(self, apple_round):
        """'Elephant' follows 'Apple'."""
        assert is_valid("Elephant", apple_round)

    def test_comparison_ignores_case(self, apple_round):
        """Case differences don't break the chain."""
        assert is_valid("EGG", apple_round)
        assert is_valid("egg", apple_round)

    @pytest.mark.parametrize("word", ["banana", "Orange", "tiger", "apple pie"])
    def test_wrong_letter_breaks_chain(self, apple_round, word):
        """Words not starting with 'e' are rejected after 'Apple'."""
        assert check_word(word, apple_round) == Verdict.BROKEN_CHAIN
        assert not is_valid(word, apple_round)

    def test_required_letter_is_lowercased(self):
        """Required letter is the lower-cased last letter."""
        round_ = accept(Round(), Player.ONE, "ZOO")
        assert required_letter(round_) == "o"

    def test_required_letter_follows_last_word(self, tiger_round):
        """Only the most recent word matters."""
        assert required_letter(tiger_round) == "r"
        assert is_valid("rabbit", tiger_round)
        assert not is_valid("banana", tiger_round)


class TestDuplicates:
    """Tests for words already used this round."""

    def test_duplicate_rejected(self, tiger_round):
        """A word used earlier in the round is invalid."""
        assert check_word("Elephant", tiger_round) == Verdict.DUPLICATE_WORD

    def test_duplicate_is_case_insensitive(self, apple_round):
        """'apple' duplicates 'Apple'."""
        assert check_word("apple", apple_round) == Verdict.DUPLICATE_WORD
        assert check_word("APPLE", apple_round) == Verdict.DUPLICATE_WORD

    def test_duplicate_with_matching_letter(self):
        """A used word matching the chain letter is still a duplicate."""
        round_ = accept(Round(), Player.ONE, "eye")
        # "eye" ends in 'e' and starts with 'e'
        assert check_word("Eye", round_) == Verdict.DUPLICATE_WORD

    def test_duplicate_takes_precedence(self, tiger_round):
        """A used word that also breaks the chain is reported as a duplicate."""
        assert required_letter(tiger_round) == "r"
        assert check_word("apple", tiger_round) == Verdict.DUPLICATE_WORD

    def test_validation_has_no_side_effects(self, apple_round):
        """Checking a word never changes the round."""
        before = apple_round
        check_word("Elephant", apple_round)
        check_word("apple", apple_round)
        assert apple_round == before
        assert apple_round.used_words == frozenset({"apple"})
