"""Shared fixtures for dropfour tests."""

import sys
from pathlib import Path

import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from dropfour.config import GameConfig
from dropfour.game.board import Board
from dropfour.utils import Player


@pytest.fixture
def config():
    """Default 6x7 configuration with a fixed seed."""
    return GameConfig(seed=1234)


@pytest.fixture
def board(config):
    """Empty 6x7 board."""
    return Board(config)


@pytest.fixture
def make_board():
    """
    Factory building a board from {(row, col): token} placements.

    Cells are written directly, without gravity, so tests can set up any
    position.
    """
    def _make(cells=None, rows=6, cols=7, current_player=Player.ONE, config=None):
        grid = np.zeros((rows, cols), dtype=int)
        for (row, col), token in (cells or {}).items():
            grid[row, col] = token
        return Board.from_grid(grid, current_player, config)

    return _make


@pytest.fixture
def stalemate_grid():
    """Full 4x4 grid with no four in a row and every line blocked for both players."""
    return np.array([
        [1, 2, 1, 2],
        [1, 2, 1, 2],
        [2, 1, 2, 1],
        [2, 1, 2, 1],
    ])
