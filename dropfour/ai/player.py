"""
player.py - AI player bound to a board, a token and a difficulty
"""

import random
from typing import Optional

from dropfour.ai.strategies import Strategy, create_strategy
from dropfour.config import GameConfig
from dropfour.debug import debug
from dropfour.game.board import Board
from dropfour.utils import Difficulty


class AIPlayer:
    """Selects the strategy for a difficulty once and asks it for columns."""

    def __init__(self, difficulty: Difficulty, board: Board, ai_token: int,
                 config: Optional[GameConfig] = None):
        self.difficulty = difficulty
        self.board = board
        self.ai_token = ai_token
        self.config = config or board.config
        self.strategy: Strategy = create_strategy(difficulty, board, ai_token, self.config)
        debug.debug(f"AIPlayer {ai_token} using {type(self.strategy).__name__}", "strategy")

    @property
    def implemented(self) -> bool:
        return self.strategy.implemented

    def reseed(self, seed: int):
        """Rebuild the strategy with a random source seeded from `seed`."""
        self.strategy = create_strategy(self.difficulty, self.board, self.ai_token,
                                        self.config, random.Random(seed))

    def make_move(self) -> int:
        debug.start_timer(f"decide_{self.ai_token}")
        column = self.strategy.decide_move()
        debug.end_timer(f"decide_{self.ai_token}", "strategy")
        debug.debug(f"{self.difficulty.name} AI ({self.ai_token}) chose column {column}", "strategy")
        return column
