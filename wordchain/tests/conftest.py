"""
Pytest fixtures for Wordchain tests.
"""

import pytest

from ..engine_core import GameController, GameState, Player, Round
from ..engine_core.round_engine import accept


@pytest.fixture
def empty_state() -> GameState:
    """Fresh game with a 10 second turn budget."""
    return GameState.create(turn_seconds=10)


@pytest.fixture
def controller() -> GameController:
    """Controller for a fresh game."""
    return GameController(turn_seconds=10)


@pytest.fixture
def apple_round() -> Round:
    """Round where player 1 opened with "Apple"."""
    return accept(Round(), Player.ONE, "Apple")


@pytest.fixture
def tiger_round() -> Round:
    """Round with chain Apple -> Elephant -> tiger."""
    round_ = accept(Round(), Player.ONE, "Apple")
    round_ = accept(round_, Player.TWO, "Elephant")
    return accept(round_, Player.ONE, "tiger")


@pytest.fixture
def tiger_controller(controller: GameController) -> GameController:
    """Controller after Apple, Elephant, tiger; player 2 to move."""
    for word in ("Apple", "Elephant", "tiger"):
        controller.focus_input()
        controller.submit_word(word)
    return controller
