"""
utils.py - Constants, enumerations and helpers shared across dropfour

This module provides the token and outcome enumerations, the eight compass
directions used by every scanner, the sentinels returned by the board and the
strategies, and a few small board helpers (bounds checks, rendering, a fast
four-in-a-row test).
"""

from enum import Enum, IntEnum, auto
from typing import List, Optional, Tuple

import numpy as np

# Board defaults (overridable through GameConfig)
DEFAULT_ROWS = 6
DEFAULT_COLS = 7
CONNECT_N = 4  # Number of tokens in a row to win

# Sentinels
FULL_COLUMN = -1  # drop() into a column whose top row is occupied
NO_MOVE = -1      # search leaf / unimplemented tier

Cell = Tuple[int, int]


class Player(IntEnum):
    """Enumeration representing players and cell states."""
    EMPTY = 0
    ONE = 1    # First player
    TWO = 2    # Second player

    def other(self) -> 'Player':
        """Get the other player."""
        if self == Player.ONE:
            return Player.TWO
        elif self == Player.TWO:
            return Player.ONE
        return Player.EMPTY

    def __str__(self):
        if self == Player.EMPTY:
            return " "
        elif self == Player.ONE:
            return "X"
        else:
            return "O"


def opponent_of(token: int) -> int:
    """Token of the other player for a two-player assignment."""
    return 3 - token


class GameOutcome(Enum):
    """Enumeration representing the game outcome."""
    IN_PROGRESS = auto()
    WON = auto()
    STALEMATE = auto()

    def is_game_over(self) -> bool:
        """Check if the game is over."""
        return self != GameOutcome.IN_PROGRESS


class Direction(Enum):
    """
    The eight compass directions as (dx, dy) unit steps.

    dx moves along columns, dy moves along rows. Row 0 is the top of the
    board, so NORTH decreases the row index.
    """
    NORTH = (0, -1)
    NORTHEAST = (1, -1)
    EAST = (1, 0)
    SOUTHEAST = (1, 1)
    SOUTH = (0, 1)
    SOUTHWEST = (-1, 1)
    WEST = (-1, 0)
    NORTHWEST = (-1, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]

    def opposite(self) -> 'Direction':
        """The direction pointing the other way along the same axis."""
        return Direction((-self.dx, -self.dy))


# One representative per axis (horizontal, vertical, both diagonals)
AXES = (Direction.EAST, Direction.SOUTH, Direction.NORTHEAST, Direction.SOUTHEAST)


class PlayStyle(Enum):
    """Evaluation styles selectable for the search engine."""
    CENTER_CONTROL = auto()
    EDGE_CONTROL = auto()
    CORNER_CONTROL = auto()
    OPEN_LINES = auto()
    BLOCK_OPPONENT_MOVES = auto()
    CREATE_WINNING_COMBINATIONS = auto()
    BALANCE_OFFENSIVE_DEFENSIVE = auto()


class Difficulty(Enum):
    """AI strength tiers, weakest first."""
    EASY = auto()
    MEDIUM = auto()
    HARD = auto()
    EXPERT = auto()
    MASTER = auto()


def is_valid_position(row: int, col: int, rows: int = DEFAULT_ROWS,
                      cols: int = DEFAULT_COLS) -> bool:
    """
    Check if a position is within the board boundaries.

    Args:
        row: Row index
        col: Column index
        rows: Number of rows on the board
        cols: Number of columns on the board

    Returns:
        True if position is valid, False otherwise
    """
    return 0 <= row < rows and 0 <= col < cols


def has_connected_four(grid: np.ndarray, token: int) -> bool:
    """
    Vectorized test for CONNECT_N consecutive `token` cells on any axis.

    Used by the evaluator, where it runs once per search node.
    """
    mask = np.asarray(grid) == token
    rows, cols = mask.shape
    n = CONNECT_N

    if cols >= n:
        horizontal = mask[:, :cols - n + 1].copy()
        for i in range(1, n):
            horizontal &= mask[:, i:cols - n + 1 + i]
        if horizontal.any():
            return True

    if rows >= n:
        vertical = mask[:rows - n + 1, :].copy()
        for i in range(1, n):
            vertical &= mask[i:rows - n + 1 + i, :]
        if vertical.any():
            return True

    if rows >= n and cols >= n:
        down = mask[:rows - n + 1, :cols - n + 1].copy()
        up = mask[n - 1:, :cols - n + 1].copy()
        for i in range(1, n):
            down &= mask[i:rows - n + 1 + i, i:cols - n + 1 + i]
            up &= mask[n - 1 - i:rows - i, i:cols - n + 1 + i]
        if down.any() or up.any():
            return True

    return False


def parse_position(text: str, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS) -> np.ndarray:
    """
    Parse a comma-separated, row-major position string into a grid.

    Raises:
        ValueError: if the string has the wrong length or holds values other than 0, 1, 2
    """
    values = [int(c) for c in text.split(',')]
    if len(values) != rows * cols:
        raise ValueError(f"Position string must have {rows * cols} values, got {len(values)}")
    if any(v not in (0, 1, 2) for v in values):
        raise ValueError("Position values must be 0, 1 or 2")
    return np.array(values, dtype=int).reshape(rows, cols)


def render_board_ascii(board: np.ndarray, highlight: Optional[List[Cell]] = None) -> str:
    """
    Render the board as ASCII art.

    Args:
        board: The game board
        highlight: Cells to draw as "*" (e.g. a winning line)

    Returns:
        ASCII representation of the board
    """
    rows, cols = board.shape
    marked = set(highlight or [])
    result = ["|" + "-" * (cols * 2 - 1) + "|"]

    for row in range(rows):
        cells = []
        for col in range(cols):
            symbol = str(Player(int(board[row, col])))
            if (row, col) in marked:
                symbol = "*"
            cells.append(symbol)
        result.append("|" + " ".join(cells) + "|")

    result.append("|" + "-" * (cols * 2 - 1) + "|")
    result.append("|" + " ".join(str(i % 10) for i in range(cols)) + "|")

    return "\n".join(result)
