"""
board.py - Board representation and core game mechanics

This module implements the Board class which owns the grid, applies gravity drops,
tracks whose turn it is and detects wins and stalemates.

Row 0 is the top of the board; tokens settle into the highest-numbered empty row
of their column. Cell values: 0 empty, 1 player one, 2 player two.
"""

from typing import List, Optional

import numpy as np

from dropfour.config import GameConfig
from dropfour.debug import debug
from dropfour.errors import SearchInvariantError
from dropfour.game import scanner
from dropfour.utils import (FULL_COLUMN, Cell, Direction, GameOutcome,
                            Player, render_board_ascii)


class Board:
    """
    Represents a gravity-constrained connect-four board.

    The board does not refuse drops after the game has ended; callers check
    `outcome` before playing.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize an empty board.

        Args:
            config: Dimensions come from here (default 6x7)
        """
        self.config = config or GameConfig()
        self.rows = self.config.rows
        self.cols = self.config.cols
        debug.debug(f"Initializing new {self.rows}x{self.cols} Board", "board")
        self.reset()

    def reset(self):
        """Reset the board to an empty state with player one to move."""
        self.grid = np.zeros((self.rows, self.cols), dtype=int)
        self.current_player = Player.ONE
        self.outcome = GameOutcome.IN_PROGRESS
        self.winner: Optional[Player] = None
        self.last_move: Optional[Cell] = None
        self._winning_line: List[Cell] = []

    @classmethod
    def from_grid(cls, grid, current_player: int = Player.ONE,
                  config: Optional[GameConfig] = None) -> 'Board':
        """
        Build a board holding an existing position.

        The grid's shape overrides the dimensions in `config`.
        """
        grid = np.array(grid, dtype=int)
        rows, cols = grid.shape
        base = config or GameConfig()
        if (base.rows, base.cols) != (rows, cols):
            base = GameConfig.from_dict({**base.to_dict(), "rows": rows, "cols": cols})
        board = cls(base)
        board.grid = grid
        board.current_player = Player(current_player)
        return board

    def copy(self) -> 'Board':
        """
        Create a deep copy of the current board.

        Returns:
            A new Board instance with the same state
        """
        debug.trace("Creating board copy", "board")
        new_board = Board.__new__(Board)
        new_board.config = self.config
        new_board.rows = self.rows
        new_board.cols = self.cols
        new_board.grid = self.grid.copy()
        new_board.current_player = self.current_player
        new_board.outcome = self.outcome
        new_board.winner = self.winner
        new_board.last_move = self.last_move
        new_board._winning_line = list(self._winning_line)
        return new_board

    # Queries

    def is_column_available(self, column: int) -> bool:
        """True iff the top cell of `column` is empty."""
        return self.grid[0, column] == Player.EMPTY

    def available_columns(self) -> List[int]:
        """Columns that can still take a token, ascending."""
        return [col for col in range(self.cols) if self.grid[0, col] == Player.EMPTY]

    def lowest_empty_row(self, column: int) -> int:
        """Row a token dropped in `column` would land in, or FULL_COLUMN."""
        for row in range(self.rows - 1, -1, -1):
            if self.grid[row, column] == Player.EMPTY:
                return row
        return FULL_COLUMN

    def is_full(self) -> bool:
        return not np.any(self.grid[0] == Player.EMPTY)

    def get_state(self) -> np.ndarray:
        """
        Get a snapshot of the grid.

        Returns:
            2D numpy array the caller may modify freely
        """
        return self.grid.copy()

    # Mutation

    def drop(self, column: int, player_id: int) -> int:
        """
        Place a token in the lowest empty row of `column`.

        Args:
            column: Column index; an out-of-range index is a caller error
            player_id: Token to place (1 or 2)

        Returns:
            The row the token landed in, or FULL_COLUMN if the column is full
        """
        row = self.lowest_empty_row(column)
        if row == FULL_COLUMN:
            debug.debug(f"Column {column} is full", "board")
            return FULL_COLUMN

        self.grid[row, column] = player_id
        self.last_move = (row, column)
        debug.debug(f"Player {player_id} dropped into ({row}, {column})", "board")
        return row

    def place(self, column: int, player_id: int) -> int:
        """
        Speculative drop used by the search; must be paired with undo().

        Raises:
            SearchInvariantError: if the column is already full
        """
        row = self.lowest_empty_row(column)
        if row == FULL_COLUMN:
            raise SearchInvariantError(f"Attempted to place into full column {column}")
        self.grid[row, column] = player_id
        return row

    def undo(self, row: int, column: int):
        """Clear a cell filled by place()."""
        self.grid[row, column] = Player.EMPTY

    # Game state

    def check_win(self) -> bool:
        """
        Look for CONNECT_N consecutive tokens of the current player.

        Every occupied cell is scanned in all eight directions. Sets the outcome
        to WON when a line is found.

        Returns:
            True if the current player has a winning line
        """
        token = int(self.current_player)
        for row in range(self.rows):
            for col in range(self.cols):
                if self.grid[row, col] != token:
                    continue
                for direction in Direction:
                    line = scanner.full_line(row, col, direction, self.rows, self.cols)
                    if line and all(self.grid[r, c] == token for r, c in line):
                        self.outcome = GameOutcome.WON
                        self.winner = Player(token)
                        self._winning_line = line
                        debug.info(f"Player {self.winner.name} wins with line {line}", "board")
                        return True
        return False

    def check_stalemate(self) -> bool:
        """
        Approximate "no win possible" test.

        A line of CONNECT_N cells is still completable for a player when it holds
        no token of the other player. The board is a stalemate when no such line
        exists for either player. This is a heuristic, not a proof of a forced draw.

        Returns:
            True if the outcome was set to STALEMATE
        """
        if self.outcome == GameOutcome.WON:
            return False

        for row in range(self.rows):
            for col in range(self.cols):
                for player in (Player.ONE, Player.TWO):
                    blocker = int(player.other())
                    for direction in Direction:
                        line = scanner.full_line(row, col, direction, self.rows, self.cols)
                        if line and all(self.grid[r, c] != blocker for r, c in line):
                            return False

        self.outcome = GameOutcome.STALEMATE
        debug.info("No completable line remains for either player: stalemate", "board")
        return True

    def switch_player(self) -> GameOutcome:
        """
        Re-evaluate the outcome, then hand the turn to the other player if the
        game is still in progress.

        Returns:
            The outcome after the check
        """
        if not self.outcome.is_game_over():
            if not self.check_win():
                self.check_stalemate()

        if not self.outcome.is_game_over():
            self.current_player = self.current_player.other()
            debug.trace(f"Switching to player {self.current_player.name}", "board")

        return self.outcome

    def winning_line(self) -> List[Cell]:
        """
        Get the cells of the winning line if the game is won.

        Returns:
            List of (row, col) positions, or an empty list if nobody has won
        """
        return list(self._winning_line)

    def count(self, player_id: int) -> int:
        """Number of tokens of `player_id` on the board."""
        return int(np.count_nonzero(self.grid == player_id))

    def render(self) -> str:
        """
        Render the board as a string.

        Returns:
            String representation of the board
        """
        return render_board_ascii(self.grid, self._winning_line)

    def __str__(self) -> str:
        """String representation of the board."""
        return self.render()
