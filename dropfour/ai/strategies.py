"""
strategies.py - The five difficulty tiers behind one decide_move() capability

- Easy: win now if possible, otherwise a random column
- Medium: complete or block three- and two-token lines with a gap, with a
  configurable chance of overlooking each find; falls back to Easy
- Hard / Expert: minimax search at depth 4 / 7 with a small error factor
- Master: not implemented; always answers NO_MOVE

Strategies read the caller's board (column availability and a grid snapshot)
and never modify it.
"""

import random
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from dropfour.ai.minimax import MinimaxSearch
from dropfour.config import GameConfig
from dropfour.debug import debug
from dropfour.errors import InvalidDifficultyError, SearchInvariantError
from dropfour.game import scanner
from dropfour.game.board import Board
from dropfour.utils import (AXES, CONNECT_N, FULL_COLUMN, NO_MOVE, Difficulty,
                            Direction, Player, opponent_of)

# Easy looks this many steps either side of the landing cell
DIRECTION_RANGE = CONNECT_N - 1

THREE_TOKENS = 3
TWO_TOKENS = 2


class Strategy(ABC):
    """A move-selection policy for one AI token."""

    difficulty: Difficulty
    implemented = True

    def __init__(self, board: Board, ai_token: int):
        self.board = board
        self.ai_token = ai_token
        self.opponent_token = opponent_of(ai_token)

    @abstractmethod
    def decide_move(self) -> int:
        """Column to play now."""

    def make_move(self) -> int:
        return self.decide_move()


class EasyStrategy(Strategy):
    """Takes an immediate win when one exists, otherwise plays a random column."""

    difficulty = Difficulty.EASY

    def __init__(self, board: Board, ai_token: int, rng: Optional[random.Random] = None):
        super().__init__(board, ai_token)
        self.rng = rng or random.Random()

    def decide_move(self) -> int:
        column = self.find_winning_column(self.ai_token)
        if column is not None:
            debug.debug(f"Easy: winning column {column}", "strategy")
            return column
        return self.random_move()

    def find_winning_column(self, token: int) -> Optional[int]:
        """First available column (ascending) where dropping `token` makes four in a row."""
        grid = self.board.get_state()
        for column in self.board.available_columns():
            if self._wins_after_drop(grid, column, token):
                return column
        return None

    def random_move(self) -> int:
        columns = self.board.available_columns()
        if not columns:
            raise SearchInvariantError("No available column for a random move")
        return self.rng.choice(columns)

    def _wins_after_drop(self, grid, column: int, token: int) -> bool:
        row = _landing_row(grid, column)
        if row == FULL_COLUMN:
            return False

        grid[row, column] = token
        try:
            return any(
                scanner.longest_run(
                    scanner.values_at(grid, scanner.axis_cells(row, column, axis, DIRECTION_RANGE,
                                                               self.board.rows, self.board.cols)),
                    token) >= CONNECT_N
                for axis in AXES
            )
        finally:
            grid[row, column] = Player.EMPTY


class MediumStrategy(Strategy):
    """
    Pattern-matching tier.

    Tries, in order: complete its own three, block the opponent's three, extend
    its own two, block the opponent's two. Each find is overlooked with
    probability `error_rate`, in which case the next check runs. Easy is the
    final fallback.
    """

    difficulty = Difficulty.MEDIUM

    def __init__(self, board: Board, ai_token: int, error_rate: float = 0.3,
                 rng: Optional[random.Random] = None):
        super().__init__(board, ai_token)
        self.error_rate = error_rate
        self.rng = rng or random.Random()
        self.easy = EasyStrategy(board, ai_token, self.rng)

    def decide_move(self) -> int:
        checks: List[Tuple[int, int]] = [
            (self.ai_token, THREE_TOKENS),
            (self.opponent_token, THREE_TOKENS),
            (self.ai_token, TWO_TOKENS),
            (self.opponent_token, TWO_TOKENS),
        ]
        for token, count in checks:
            column = self.check_for_winning_move(token, count)
            if column is not None:
                return column
        return self.easy.decide_move()

    def check_for_winning_move(self, token: int, token_count: int) -> Optional[int]:
        """
        Column that fills a gap in a `token_count`-token line of `token`.

        Every cell is scanned in every direction for a window of token_count + 1
        cells holding token_count of `token` and at least one empty cell that can
        be played now. Among all such columns the one nearest the center wins
        (first found on a tie).

        Returns:
            The column, or None if nothing matched or the find was overlooked
        """
        column = self.find_gap_column(token, token_count)
        if column is None:
            return None

        if self.rng.random() < self.error_rate:
            debug.info(f"Human error: missed {token_count}-token move in column {column}", "strategy")
            return None

        debug.info(f"Found a sequence of {token_count} tokens with gap. Next move column: {column}",
                   "strategy")
        return column

    def find_gap_column(self, token: int, token_count: int) -> Optional[int]:
        grid = self.board.get_state()
        rows, cols = self.board.rows, self.board.cols
        length = token_count + 1
        candidates: List[int] = []

        for row in range(rows):
            for col in range(cols):
                for direction in Direction:
                    cells = scanner.line_cells(row, col, direction, length, rows, cols)
                    values = scanner.values_at(grid, cells)
                    if values.count(token) < token_count or values.count(Player.EMPTY) == 0:
                        continue
                    playable = next((c for r, c in cells if _is_playable(grid, r, c)), None)
                    if playable is not None and playable not in candidates:
                        candidates.append(playable)

        if not candidates:
            return None
        center = cols // 2
        return min(candidates, key=lambda c: abs(c - center))


class SearchStrategy(Strategy):
    """Minimax-backed tier."""

    def __init__(self, board: Board, ai_token: int, depth: int, error_factor: float,
                 config: Optional[GameConfig] = None, rng: Optional[random.Random] = None):
        super().__init__(board, ai_token)
        config = config or board.config
        self.depth = depth
        self.minimax = MinimaxSearch(board, ai_token, self.opponent_token, depth, error_factor,
                                     play_style=config.play_style, prune=config.prune, rng=rng)

    def decide_move(self) -> int:
        return self.minimax.search(self.depth, True).column


class HardStrategy(SearchStrategy):
    difficulty = Difficulty.HARD


class ExpertStrategy(SearchStrategy):
    difficulty = Difficulty.EXPERT


class MasterStrategy(Strategy):
    """
    Reserved top tier.

    No algorithm exists yet; decide_move() returns NO_MOVE and `implemented` is
    False so callers can tell this tier apart from a real column.
    """

    difficulty = Difficulty.MASTER
    implemented = False

    def __init__(self, board: Board, ai_token: int, simulations: int = 10000):
        super().__init__(board, ai_token)
        self.simulations = simulations

    def decide_move(self) -> int:
        debug.warning("Master difficulty is not implemented; returning NO_MOVE", "strategy")
        return NO_MOVE


def _landing_row(grid, column: int) -> int:
    for row in range(len(grid) - 1, -1, -1):
        if grid[row][column] == Player.EMPTY:
            return row
    return FULL_COLUMN


def _is_playable(grid, row: int, col: int) -> bool:
    """Empty and either on the bottom row or resting on a token."""
    if grid[row][col] != Player.EMPTY:
        return False
    return row == len(grid) - 1 or grid[row + 1][col] != Player.EMPTY


def create_strategy(difficulty: Difficulty, board: Board, ai_token: int,
                    config: Optional[GameConfig] = None,
                    rng: Optional[random.Random] = None) -> Strategy:
    """
    Build the strategy for `difficulty`.

    Args:
        difficulty: Tier to build
        board: The caller's board
        ai_token: Token the strategy plays (the opponent is 3 - ai_token)
        config: Tuning constants (defaults to the board's config)
        rng: Random source (defaults to one seeded from config.seed)

    Raises:
        InvalidDifficultyError: for anything that is not a known Difficulty
    """
    config = config or board.config
    rng = rng or config.rng()

    if difficulty == Difficulty.EASY:
        return EasyStrategy(board, ai_token, rng)
    if difficulty == Difficulty.MEDIUM:
        return MediumStrategy(board, ai_token, config.medium_error_rate, rng)
    if difficulty == Difficulty.HARD:
        return HardStrategy(board, ai_token, config.hard_depth, config.hard_error_factor, config, rng)
    if difficulty == Difficulty.EXPERT:
        return ExpertStrategy(board, ai_token, config.expert_depth, config.expert_error_factor, config, rng)
    if difficulty == Difficulty.MASTER:
        return MasterStrategy(board, ai_token, config.master_simulations)
    raise InvalidDifficultyError(difficulty)
