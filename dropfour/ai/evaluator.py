"""
evaluator.py - Heuristic position scoring for the search engine

The CenterControlEvaluator scores a grid from the AI's point of view as a weighted
sum of sub-scores taken around the board's center cell:

- presence of tokens along the eight rays through the center (adjacency,
  connectivity, mobility and center blocking all weight this same balance)
- two-in-a-row and diagonal control bonuses
- a threat-sensitive blocking term whose weight rises with the opponent's
  longest run near the center
- a penalty for opponent tokens near the center
- windowed four-cell counts along the center row, center column and the two
  diagonals leaving the center

A position where either side already has four in a row scores exactly
AI_WIN_SCORE or OPPONENT_WIN_SCORE; every other position scores strictly
between them, so the search can treat those two values as terminal.
"""

from typing import List, Sequence

import numpy as np

from dropfour.game import scanner
from dropfour.utils import CONNECT_N, Direction, PlayStyle, has_connected_four

AI_WIN_SCORE = 1000
OPPONENT_WIN_SCORE = -1000
THREE_IN_A_ROW = 100
TWO_IN_A_ROW = 10

# Score for play styles without an evaluator
UNSUPPORTED_STYLE_SCORE = -1

ADJACENT_WEIGHT = 50
TWO_IN_A_ROW_WEIGHT = 30
CONTROLLED_DIAGONAL_WEIGHT = 40
BLOCK_OPPONENT_CENTER_WEIGHT = 20
CONNECTIVITY_WEIGHT = 20
MOBILITY_WEIGHT = 10
OPPONENT_ADJACENT_WEIGHT = 25
DEFENSIVE_BLOCK_WEIGHT = 100
AGGRESSIVE_BLOCK_WEIGHT = 20

REQUIRED_TOKENS_FOR_CONTROL = 2

MAIN_DIAGONAL = (Direction.NORTHEAST, Direction.SOUTHWEST)
ANTI_DIAGONAL = (Direction.NORTHWEST, Direction.SOUTHEAST)


def window_score(matching: int) -> int:
    """Map the number of AI tokens in a four-cell window to a score."""
    if matching == CONNECT_N:
        return AI_WIN_SCORE
    if matching == CONNECT_N - 1:
        return THREE_IN_A_ROW
    if matching == CONNECT_N - 2:
        return TWO_IN_A_ROW
    return 0


def best_window(values: Sequence[int], token: int) -> int:
    """Best window_score over every CONNECT_N-long window of `values`."""
    best = 0
    for start in range(len(values) - CONNECT_N + 1):
        matching = sum(1 for v in values[start:start + CONNECT_N] if v == token)
        best = max(best, window_score(matching))
    return best


def search_steps(depth: int, rows: int, cols: int) -> int:
    """How far from center the evaluator looks: deeper searches look further, never past the edge."""
    return min(depth, min(rows, cols) // 2)


class CenterControlEvaluator:
    """
    Evaluates center control for one AI token against one opponent token.

    Args:
        rows: Board height
        cols: Board width
        ai_token: Token the score favours
        opponent_token: The other token
        depth: Search depth; bounds the radius examined around the center
    """

    def __init__(self, rows: int, cols: int, ai_token: int, opponent_token: int, depth: int):
        self.rows = rows
        self.cols = cols
        self.ai_token = ai_token
        self.opponent_token = opponent_token
        self.steps = search_steps(depth, rows, cols)
        self.center_row = rows // 2
        self.center_col = cols // 2

        # Cells along each ray, -steps..steps through the center
        self._rays = {
            direction: scanner.axis_cells(self.center_row, self.center_col, direction,
                                          self.steps, rows, cols)
            for direction in Direction
        }
        # Cells 1..steps out from the center, for threat runs
        self._outward = {
            direction: scanner.line_cells(self.center_row, self.center_col, direction,
                                          self.steps + 1, rows, cols)[1:]
            for direction in Direction
        }

    def evaluate(self, grid) -> int:
        """
        Score `grid` for the AI token.

        Returns:
            AI_WIN_SCORE / OPPONENT_WIN_SCORE for decided positions, otherwise a
            heuristic strictly between them
        """
        if has_connected_four(grid, self.ai_token):
            return AI_WIN_SCORE
        if has_connected_four(grid, self.opponent_token):
            return OPPONENT_WIN_SCORE

        cells = grid.tolist() if isinstance(grid, np.ndarray) else grid
        score = self._heuristic(cells)
        return max(OPPONENT_WIN_SCORE + 1, min(AI_WIN_SCORE - 1, score))

    def _heuristic(self, cells: List[List[int]]) -> int:
        balance = self._balance(cells, Direction)
        threat = self.opponent_threat_level(cells)

        if threat >= 3:
            blocking_weight = DEFENSIVE_BLOCK_WEIGHT
        elif threat == 2:
            blocking_weight = DEFENSIVE_BLOCK_WEIGHT // 2
        else:
            blocking_weight = AGGRESSIVE_BLOCK_WEIGHT

        return sum((
            ADJACENT_WEIGHT * balance,
            TWO_IN_A_ROW_WEIGHT if balance == REQUIRED_TOKENS_FOR_CONTROL else 0,
            self._diagonal_control(cells),
            blocking_weight * balance,
            BLOCK_OPPONENT_CENTER_WEIGHT * balance,
            CONNECTIVITY_WEIGHT * balance,
            MOBILITY_WEIGHT * balance,
            -OPPONENT_ADJACENT_WEIGHT * self._opponent_presence(cells),
            self._row_and_column_score(cells),
            self._diagonal_score(cells),
        ))

    def _value(self, cells, row: int, col: int) -> int:
        """+1 for an AI token, -1 for an opponent token, 0 for empty."""
        token = cells[row][col]
        if token == self.ai_token:
            return 1
        if token == self.opponent_token:
            return -1
        return 0

    def _balance(self, cells, directions) -> int:
        """Sum of signed cell values along the rays of `directions`."""
        return sum(self._value(cells, r, c)
                   for direction in directions
                   for r, c in self._rays[direction])

    def _opponent_presence(self, cells) -> int:
        return sum(1 for direction in Direction
                   for r, c in self._rays[direction]
                   if cells[r][c] == self.opponent_token)

    def _diagonal_control(self, cells) -> int:
        main = self._balance(cells, MAIN_DIAGONAL)
        anti = self._balance(cells, ANTI_DIAGONAL)
        if REQUIRED_TOKENS_FOR_CONTROL in (main, anti):
            return CONTROLLED_DIAGONAL_WEIGHT
        return 0

    def opponent_threat_level(self, cells) -> int:
        """Longest opponent run within `steps` of the center, in any direction."""
        return max(
            (scanner.longest_run(scanner.values_at(cells, self._outward[direction]),
                                 self.opponent_token)
             for direction in Direction),
            default=0,
        )

    def _row_and_column_score(self, cells) -> int:
        row_values = cells[self.center_row]
        col_values = [cells[r][self.center_col] for r in range(self.rows)]
        return best_window(row_values, self.ai_token) + best_window(col_values, self.ai_token)

    def _diagonal_score(self, cells) -> int:
        total = 0
        for direction in (Direction.SOUTHEAST, Direction.NORTHEAST):
            line = scanner.line_cells(self.center_row, self.center_col, direction,
                                      CONNECT_N, self.rows, self.cols)
            matching = sum(1 for r, c in line if cells[r][c] == self.ai_token)
            total += window_score(matching)
        return total


def evaluate(grid, ai_token: int, opponent_token: int, depth: int = 0,
             play_style: PlayStyle = PlayStyle.CENTER_CONTROL) -> int:
    """
    Score a grid for `ai_token`; higher is better for the AI.

    Only CENTER_CONTROL has an evaluator; every other style scores
    UNSUPPORTED_STYLE_SCORE.
    """
    if play_style != PlayStyle.CENTER_CONTROL:
        return UNSUPPORTED_STYLE_SCORE
    rows, cols = np.shape(grid)
    return CenterControlEvaluator(rows, cols, ai_token, opponent_token, depth).evaluate(grid)
