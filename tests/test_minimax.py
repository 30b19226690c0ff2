"""Tests for the minimax search engine."""

import random

import numpy as np
import pytest

from dropfour.ai.evaluator import AI_WIN_SCORE
from dropfour.ai.minimax import MAX_SCORE, MIN_SCORE, AlphaBeta, MinimaxSearch, Move
from dropfour.errors import SearchInvariantError
from dropfour.game.board import Board
from dropfour.utils import NO_MOVE, Player


@pytest.fixture
def winning_4x4(make_board):
    """AI (2) has three on the bottom row with column 3 open; opponent (1) sits above."""
    cells = {(3, 0): 2, (3, 1): 2, (3, 2): 2, (2, 0): 1, (2, 1): 1, (2, 2): 1}
    return make_board(cells, rows=4, cols=4, current_player=Player.TWO)


@pytest.fixture
def midgame(make_board):
    cells = {(5, 3): 1, (4, 3): 1, (5, 2): 2, (5, 4): 2, (3, 3): 2, (5, 1): 1}
    return make_board(cells, current_player=Player.ONE)


class TestRecords:
    """Test the Move and AlphaBeta value types."""

    def test_moves_order_by_score(self):
        assert Move(0, 5) < Move(6, 10)
        assert Move(6, 10) > Move(0, 5)
        assert max([Move(1, -3), Move(2, 7), Move(3, 0)]).column == 2

    def test_window_update(self):
        window = AlphaBeta()
        assert (window.alpha, window.beta) == (MIN_SCORE, MAX_SCORE)

        window = window.update(40, maximizing=True).update(30, maximizing=False)
        assert (window.alpha, window.beta) == (40, 30)
        assert window.is_cutoff()

    def test_window_update_keeps_better_bound(self):
        window = AlphaBeta(10, 50)
        assert window.update(5, maximizing=True).alpha == 10
        assert window.update(60, maximizing=False).beta == 50
        assert not window.is_cutoff()


class TestSearch:
    """Test move selection."""

    def test_takes_immediate_win(self, winning_4x4):
        search = MinimaxSearch(winning_4x4, 2, 1, max_depth=3)
        move = search.search()
        assert move.column == 3
        assert move.score == AI_WIN_SCORE

    def test_blocks_opponent_win(self, make_board):
        cells = {(3, 0): 1, (3, 1): 1, (3, 2): 1, (2, 0): 2, (2, 1): 2}
        board = make_board(cells, rows=4, cols=4, current_player=Player.TWO)
        move = MinimaxSearch(board, 2, 1, max_depth=2).search()
        assert move.column == 3

    def test_depth_zero_returns_evaluation(self, board):
        move = MinimaxSearch(board, 1, 2, max_depth=4).search(depth=0)
        assert move == Move(NO_MOVE, 0)

    def test_decided_position_is_terminal(self, make_board):
        board = make_board({(5, c): 2 for c in range(4)})
        move = MinimaxSearch(board, 2, 1, max_depth=3).search()
        assert move.column == NO_MOVE
        assert move.score == AI_WIN_SCORE

    def test_full_board_raises(self, stalemate_grid):
        board = Board.from_grid(stalemate_grid)
        with pytest.raises(SearchInvariantError):
            MinimaxSearch(board, 1, 2, max_depth=2).search()

    def test_caller_board_untouched(self, midgame):
        before = midgame.get_state()
        search = MinimaxSearch(midgame, 1, 2, max_depth=3)
        search.search()

        assert np.array_equal(midgame.grid, before)
        assert search.workspace is not midgame
        assert np.array_equal(search.workspace.grid, before)

    def test_ties_go_to_lowest_column(self, board):
        """On an empty 6x7 board at depth 1 the symmetric columns tie; the lower one wins."""
        move = MinimaxSearch(board, 1, 2, max_depth=1).search()
        scores = {}
        for column in board.available_columns():
            row = board.place(column, 1)
            scores[column] = MinimaxSearch(board, 1, 2, max_depth=1).evaluate(board)
            board.undo(row, column)
        best = max(scores.values())
        assert move.column == min(c for c, s in scores.items() if s == best)


class TestRestoration:
    """Test that every speculative placement is reversed at every depth."""

    def test_every_place_is_undone_in_order(self, midgame, monkeypatch):
        original_place, original_undo = Board.place, Board.undo
        pending = []

        def place(board, column, player_id):
            before = board.get_state()
            row = original_place(board, column, player_id)
            pending.append((row, column, before))
            return row

        def undo(board, row, column):
            expected_row, expected_column, before = pending.pop()
            assert (row, column) == (expected_row, expected_column)
            original_undo(board, row, column)
            assert np.array_equal(board.grid, before)

        monkeypatch.setattr(Board, "place", place)
        monkeypatch.setattr(Board, "undo", undo)

        search = MinimaxSearch(midgame, 1, 2, max_depth=3, prune=False)
        search.search()

        assert pending == []
        assert np.array_equal(search.workspace.grid, midgame.grid)

    def test_failure_mid_tree_unwinds_workspace(self, midgame, monkeypatch):
        original_place = Board.place
        calls = []

        def place(board, column, player_id):
            calls.append(column)
            if len(calls) == 5:
                raise SearchInvariantError("placement failed")
            return original_place(board, column, player_id)

        monkeypatch.setattr(Board, "place", place)
        search = MinimaxSearch(midgame, 1, 2, max_depth=3)
        with pytest.raises(SearchInvariantError):
            search.search()

        assert np.array_equal(search.workspace.grid, midgame.grid)


class TestPruning:
    """Test that alpha-beta cutoffs never change the answer."""

    @pytest.mark.parametrize("depth", [1, 2, 3, 4])
    def test_same_move_with_and_without_pruning(self, midgame, depth):
        pruned = MinimaxSearch(midgame, 1, 2, max_depth=depth, prune=True)
        full = MinimaxSearch(midgame, 1, 2, max_depth=depth, prune=False)

        assert pruned.search() == full.search()
        assert pruned.nodes_evaluated <= full.nodes_evaluated

    def test_pruning_saves_work(self, midgame):
        pruned = MinimaxSearch(midgame, 1, 2, max_depth=4, prune=True)
        full = MinimaxSearch(midgame, 1, 2, max_depth=4, prune=False)
        pruned.search()
        full.search()
        assert pruned.nodes_evaluated < full.nodes_evaluated


class TestErrorFactor:
    """Test the random-move substitution."""

    def test_random_move_is_reproducible(self, midgame):
        first = MinimaxSearch(midgame, 1, 2, 3, error_factor=1.0, rng=random.Random(5)).search()
        second = MinimaxSearch(midgame, 1, 2, 3, error_factor=1.0, rng=random.Random(5)).search()
        assert first == second
        assert first.column in midgame.available_columns()

    def test_random_move_skips_search(self, midgame):
        search = MinimaxSearch(midgame, 1, 2, 3, error_factor=1.0, rng=random.Random(0))
        search.search()
        assert search.nodes_evaluated == 0

    def test_minimizing_root_never_randomizes(self, midgame):
        search = MinimaxSearch(midgame, 1, 2, 3, error_factor=1.0, rng=random.Random(0))
        search.search(depth=1, maximizing=False)
        assert search.nodes_evaluated > 1

    def test_zero_error_factor_is_deterministic(self, midgame):
        moves = {MinimaxSearch(midgame, 1, 2, 3, rng=random.Random(seed)).search()
                 for seed in range(5)}
        assert len(moves) == 1
