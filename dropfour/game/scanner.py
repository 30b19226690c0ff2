"""
scanner.py - Directional line scanning shared by the board, evaluator and strategies

Pure functions that walk from a start cell along one of the eight compass
directions. Nothing here holds state, so every component can share them.
"""

from typing import Iterable, List, Optional, Sequence

from dropfour.utils import CONNECT_N, Cell, Direction, is_valid_position


def walk(row: int, col: int, direction: Direction, steps: int, start: int = 0) -> List[Cell]:
    """
    Offsets from (row, col) along `direction` for step indices start..steps-1.

    Cells are not bounds-checked.
    """
    return [(row + i * direction.dy, col + i * direction.dx) for i in range(start, steps)]


def line_cells(row: int, col: int, direction: Direction, length: int,
               rows: int, cols: int) -> List[Cell]:
    """
    The first `length` cells from (row, col) along `direction`, dropping any that
    fall off the board.
    """
    return [(r, c) for r, c in walk(row, col, direction, length)
            if is_valid_position(r, c, rows, cols)]


def full_line(row: int, col: int, direction: Direction, rows: int, cols: int,
              length: int = CONNECT_N) -> Optional[List[Cell]]:
    """
    The `length` cells from (row, col) along `direction`, or None when the line
    would leave the board.
    """
    end_row = row + (length - 1) * direction.dy
    end_col = col + (length - 1) * direction.dx
    if not (is_valid_position(row, col, rows, cols) and is_valid_position(end_row, end_col, rows, cols)):
        return None
    return walk(row, col, direction, length)


def axis_cells(row: int, col: int, direction: Direction, reach: int,
               rows: int, cols: int) -> List[Cell]:
    """
    In-bounds cells from -reach..reach steps through (row, col) along the axis
    of `direction`, in walking order.
    """
    return [(r, c) for r, c in walk(row, col, direction, reach + 1, start=-reach)
            if is_valid_position(r, c, rows, cols)]


def longest_run(values: Iterable[int], token: int) -> int:
    """Length of the longest run of consecutive `token` values."""
    best = current = 0
    for value in values:
        if value == token:
            current += 1
            best = max(best, current)
        else:
            current = 0
    return best


def values_at(grid, cells: Sequence[Cell]) -> List[int]:
    """Cell values for a sequence of in-bounds cells."""
    return [int(grid[r][c]) for r, c in cells]
