"""Tests for the center-control heuristic."""

import numpy as np
import pytest

from dropfour.ai.evaluator import (AI_WIN_SCORE, OPPONENT_WIN_SCORE, THREE_IN_A_ROW,
                                   TWO_IN_A_ROW, UNSUPPORTED_STYLE_SCORE,
                                   CenterControlEvaluator, best_window, evaluate,
                                   search_steps, window_score)
from dropfour.utils import PlayStyle


def empty_grid(rows=6, cols=7):
    return np.zeros((rows, cols), dtype=int)


class TestWindowScores:
    """Test four-cell window scoring."""

    @pytest.mark.parametrize("matching,expected", [
        (4, AI_WIN_SCORE), (3, THREE_IN_A_ROW), (2, TWO_IN_A_ROW), (1, 0), (0, 0),
    ])
    def test_window_score(self, matching, expected):
        assert window_score(matching) == expected

    def test_best_window_picks_strongest(self):
        assert best_window([1, 1, 1, 0, 0, 0, 0], 1) == THREE_IN_A_ROW
        assert best_window([1, 0, 1, 0], 1) == TWO_IN_A_ROW
        assert best_window([2, 2, 2], 2) == 0

    def test_search_steps_bounded_by_board(self):
        assert search_steps(7, 6, 7) == 3
        assert search_steps(1, 6, 7) == 1
        assert search_steps(0, 6, 7) == 0


class TestEvaluate:
    """Test whole-position scores."""

    def test_empty_board_is_neutral(self):
        assert evaluate(empty_grid(), 2, 1, depth=4) == 0

    def test_ai_win_is_exact(self):
        grid = empty_grid()
        grid[5, 0:4] = 2
        assert evaluate(grid, 2, 1, depth=4) == AI_WIN_SCORE

    def test_opponent_win_is_exact(self):
        grid = empty_grid()
        grid[2:6, 0] = 1
        assert evaluate(grid, 2, 1, depth=4) == OPPONENT_WIN_SCORE

    def test_heuristic_stays_inside_win_scores(self):
        """Undecided positions never reach the terminal values."""
        grid = empty_grid()
        grid[5, 2:5] = 2
        grid[4, 2:5] = 2
        grid[3, 3] = 2
        grid[5, 0] = 1
        grid[5, 6] = 1
        score = evaluate(grid, 2, 1, depth=4)
        assert OPPONENT_WIN_SCORE < score < AI_WIN_SCORE

    def test_center_token_favours_owner(self):
        grid = empty_grid()
        grid[3, 3] = 2
        assert evaluate(grid, 2, 1, depth=4) > 0
        assert evaluate(grid, 1, 2, depth=4) < 0

    def test_unsupported_style(self):
        grid = empty_grid()
        grid[5, 0:4] = 2
        assert evaluate(grid, 2, 1, play_style=PlayStyle.EDGE_CONTROL) == UNSUPPORTED_STYLE_SCORE

    def test_accepts_nested_lists(self):
        grid = empty_grid()
        grid[3, 3] = 2
        evaluator = CenterControlEvaluator(6, 7, 2, 1, depth=2)
        assert evaluator.evaluate(grid.tolist()) == evaluator.evaluate(grid)


class TestThreatLevel:
    """Test the blocking term's threat measure."""

    def test_opponent_run_north_of_center(self):
        grid = empty_grid()
        grid[2, 3] = 1
        grid[1, 3] = 1
        evaluator = CenterControlEvaluator(6, 7, 2, 1, depth=4)
        assert evaluator.opponent_threat_level(grid.tolist()) == 2

    def test_scattered_tokens_count_as_runs_of_one(self):
        grid = empty_grid()
        grid[3, 2] = 1
        grid[1, 3] = 1
        evaluator = CenterControlEvaluator(6, 7, 2, 1, depth=4)
        assert evaluator.opponent_threat_level(grid.tolist()) == 1

    def test_radius_follows_depth(self):
        """Tokens beyond the search radius are not seen."""
        grid = empty_grid()
        grid[1, 3] = 1
        grid[0, 3] = 1
        near = CenterControlEvaluator(6, 7, 2, 1, depth=1)
        far = CenterControlEvaluator(6, 7, 2, 1, depth=3)
        assert near.opponent_threat_level(grid.tolist()) == 0
        assert far.opponent_threat_level(grid.tolist()) == 2
