"""
Pytest fixtures for Stratagem tests.
"""

import shutil

import pytest

from ..config import BUNDLED_DATA_DIR
from ..definitions import ActionSpec, BoardDefinition, RuleDefinition
from ..loader import DefinitionLoader, LoadedGame


@pytest.fixture
def data_dir():
    """The bundled sample data directory (read-only)."""
    return BUNDLED_DATA_DIR


@pytest.fixture
def game_dir(tmp_path):
    """A writable copy of the bundled sample data."""
    target = tmp_path / "games"
    shutil.copytree(BUNDLED_DATA_DIR, target)
    return target


@pytest.fixture
def teg_game(data_dir) -> LoadedGame:
    """The bundled TEG sample, fully loaded."""
    return DefinitionLoader(data_dir).load_game("teg")


@pytest.fixture
def teg_board(teg_game) -> BoardDefinition:
    return teg_game.board


@pytest.fixture
def encounter_rule() -> RuleDefinition:
    """A small rule with a self-looping encounter phase and an absorbing end."""
    return RuleDefinition(
        default_phase="encounter",
        phases={
            "encounter": {
                "encounter": ActionSpec(
                    result={"continue": "encounter", "won": "change_ownership"},
                    constraints={"min_origin_figures": 2, "adjacency_required": True},
                ),
                "retreat": ActionSpec(result={"done": "end"}),
            },
            "change_ownership": {
                "move_in": ActionSpec(
                    result={"moved": "encounter", "game_won": "end"},
                    constraints={"max_move": 3},
                ),
            },
            "end": {},
        },
    )
