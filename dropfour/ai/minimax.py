"""
minimax.py - Depth-limited minimax with alpha-beta pruning

This module provides the MinimaxSearch engine used by the Hard and Expert tiers.

The search never touches the caller's board: each search() call copies it once
and explores that copy with paired place()/undo() calls. An error factor lets the
AI occasionally play a random column instead of searching, to imitate a human
opponent.
"""

import random
from dataclasses import dataclass
from typing import Optional

from dropfour.ai.evaluator import (AI_WIN_SCORE, OPPONENT_WIN_SCORE,
                                   CenterControlEvaluator, UNSUPPORTED_STYLE_SCORE)
from dropfour.debug import debug
from dropfour.errors import SearchInvariantError
from dropfour.game.board import Board
from dropfour.utils import NO_MOVE, PlayStyle

# Widest window; no bounds are passed in from outside
MIN_SCORE = -(2 ** 31)
MAX_SCORE = 2 ** 31 - 1


@dataclass(frozen=True)
class Move:
    """A candidate column and its evaluated score. Moves order by score only."""
    column: int
    score: int

    def __lt__(self, other: 'Move') -> bool:
        return self.score < other.score

    def __gt__(self, other: 'Move') -> bool:
        return self.score > other.score

    def __le__(self, other: 'Move') -> bool:
        return self.score <= other.score

    def __ge__(self, other: 'Move') -> bool:
        return self.score >= other.score


@dataclass(frozen=True)
class AlphaBeta:
    """
    Search window.

    alpha: best score the maximizing side can guarantee
    beta: best score the minimizing side can guarantee
    """
    alpha: int = MIN_SCORE
    beta: int = MAX_SCORE

    def update(self, score: int, maximizing: bool) -> 'AlphaBeta':
        if maximizing:
            return AlphaBeta(max(self.alpha, score), self.beta)
        return AlphaBeta(self.alpha, min(self.beta, score))

    def is_cutoff(self) -> bool:
        return self.alpha >= self.beta


class MinimaxSearch:
    """
    Minimax search over a private copy of the caller's board.

    Columns are tried in ascending order and a child only replaces the best move
    with a strictly better score, so ties go to the lowest column. Alpha-beta
    cutoffs (`prune`) only skip work; they never change the chosen column.
    """

    def __init__(self, board: Board, ai_token: int, opponent_token: int,
                 max_depth: int, error_factor: float = 0.0,
                 play_style: PlayStyle = PlayStyle.CENTER_CONTROL,
                 prune: bool = True, rng: Optional[random.Random] = None):
        """
        Initialize the search.

        Args:
            board: The caller's live board (read only)
            ai_token: Token of the maximizing side
            opponent_token: Token of the minimizing side
            max_depth: Default depth; also sets the evaluator's radius
            error_factor: Probability (0..1) of playing a random column instead
            play_style: Evaluation style
            prune: Apply alpha-beta cutoffs
            rng: Random source for the error factor
        """
        self.board = board
        self.ai_token = ai_token
        self.opponent_token = opponent_token
        self.max_depth = max_depth
        self.error_factor = error_factor
        self.play_style = play_style
        self.prune = prune
        self.rng = rng or random.Random()
        self.evaluator = CenterControlEvaluator(board.rows, board.cols, ai_token,
                                                opponent_token, max_depth)
        self.nodes_evaluated = 0
        self.workspace: Optional[Board] = None

    def search(self, depth: Optional[int] = None, maximizing: bool = True) -> Move:
        """
        Find the best move for the side to move.

        Args:
            depth: Plies to search (defaults to max_depth)
            maximizing: True when the AI is to move

        Returns:
            The best Move; its column is NO_MOVE when the position is already
            decided or depth is 0

        Raises:
            SearchInvariantError: if the board has no available column
        """
        depth = self.max_depth if depth is None else depth
        self.nodes_evaluated = 0
        self.workspace = self.board.copy()

        if not self.workspace.available_columns():
            raise SearchInvariantError("Search requested on a board with no legal move")

        if maximizing and self.rng.random() < self.error_factor:
            move = self._random_move(self.workspace)
            debug.info(f"Human error: random column {move.column} (score {move.score})", "search")
            return move

        debug.start_timer("minimax")
        move = self._minimax(self.workspace, depth, maximizing, AlphaBeta())
        elapsed = debug.end_timer("minimax", "search")
        debug.debug(f"depth={depth} best={move} nodes={self.nodes_evaluated} "
                    f"time={elapsed:.3f}s", "search")
        return move

    def evaluate(self, board: Board) -> int:
        if self.play_style != PlayStyle.CENTER_CONTROL:
            return UNSUPPORTED_STYLE_SCORE
        return self.evaluator.evaluate(board.grid)

    def _minimax(self, board: Board, depth: int, maximizing: bool, window: AlphaBeta) -> Move:
        self.nodes_evaluated += 1

        score = self.evaluate(board)
        columns = board.available_columns()
        if score in (AI_WIN_SCORE, OPPONENT_WIN_SCORE) or depth == 0 or not columns:
            return Move(NO_MOVE, score)

        token = self.ai_token if maximizing else self.opponent_token
        best = Move(NO_MOVE, MIN_SCORE if maximizing else MAX_SCORE)

        for column in columns:
            row = board.place(column, token)
            try:
                child = self._minimax(board, depth - 1, not maximizing, window)
            finally:
                board.undo(row, column)

            if (maximizing and child.score > best.score) or (not maximizing and child.score < best.score):
                best = Move(column, child.score)

            window = window.update(child.score, maximizing)
            if self.prune and window.is_cutoff():
                break

        return best

    def _random_move(self, board: Board) -> Move:
        """Score a uniformly random available column for the AI."""
        column = self.rng.choice(board.available_columns())
        row = board.place(column, self.ai_token)
        try:
            score = self.evaluate(board)
        finally:
            board.undo(row, column)
        return Move(column, score)
