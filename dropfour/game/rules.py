"""
rules.py - Turn management and a Gymnasium environment

This module provides:
1. ConnectFourGame, the caller that owns a Board and the turn flag
2. ConnectFourEnv, a gymnasium environment where an agent plays against one of
   the difficulty strategies
"""

from typing import Dict, List, Optional, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from dropfour.ai.player import AIPlayer
from dropfour.config import GameConfig
from dropfour.debug import debug
from dropfour.errors import (ConfigError, GameOverError, InvalidMoveError,
                             UnimplementedTierError)
from dropfour.game.board import Board
from dropfour.utils import FULL_COLUMN, NO_MOVE, Difficulty, GameOutcome, Player


class ConnectFourGame:
    """
    High-level game manager.

    Applies a column to the board, runs the win/stalemate check and hands the
    turn over. Only the current game's move list is kept.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """Initialize a new game."""
        debug.debug("Initializing ConnectFourGame", "game")
        self.config = config or GameConfig()
        self.board = Board(self.config)
        self.moves: List[int] = []

    def reset(self) -> None:
        """Reset the game to initial state."""
        debug.debug("Resetting game", "game")
        self.board.reset()
        self.moves = []

    def play(self, column: int) -> Tuple[int, GameOutcome]:
        """
        Drop the current player's token into `column`.

        Args:
            column: Column to play (0-indexed)

        Returns:
            (row, outcome); row is FULL_COLUMN and the turn does not change when
            the column is full

        Raises:
            GameOverError: if the game has already ended
            InvalidMoveError: if `column` is not a column of the board (e.g. NO_MOVE)
        """
        if self.is_game_over():
            raise GameOverError(f"Game is over ({self.board.outcome.name}); cannot play column {column}")
        if not 0 <= column < self.board.cols:
            raise InvalidMoveError(f"Column {column} is outside the board (0-{self.board.cols - 1})")

        player = self.board.current_player
        row = self.board.drop(column, player)
        if row == FULL_COLUMN:
            return FULL_COLUMN, self.board.outcome

        self.moves.append(column)
        outcome = self.board.switch_player()
        debug.debug(f"Game: {player.name} played column {column} -> row {row}, {outcome.name}", "game")
        return row, outcome

    def play_ai_turn(self, ai_player: AIPlayer) -> Tuple[int, int, GameOutcome]:
        """
        Ask `ai_player` for a column and play it.

        Returns:
            (column, row, outcome)

        Raises:
            UnimplementedTierError: if the player's tier has no algorithm or
                it answered NO_MOVE
        """
        if not ai_player.implemented:
            raise UnimplementedTierError(f"{ai_player.difficulty.name} difficulty cannot play a move")

        column = ai_player.make_move()
        if column == NO_MOVE:
            raise UnimplementedTierError(f"{ai_player.difficulty.name} AI returned no move")
        row, outcome = self.play(column)
        return column, row, outcome

    def is_game_over(self) -> bool:
        return self.board.outcome.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or stalemate
        """
        return self.board.winner

    def get_current_player(self) -> Player:
        return self.board.current_player

    def get_valid_moves(self) -> List[int]:
        if self.is_game_over():
            return []
        return self.board.available_columns()

    def render(self) -> str:
        return self.board.render()


class ConnectFourEnv(gym.Env):
    """
    Single-agent environment: the agent plays player ONE, a difficulty strategy
    plays player TWO and replies inside each step.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, config: Optional[GameConfig] = None,
                 opponent: Optional[Difficulty] = None,
                 render_mode: Optional[str] = None):
        """
        Initialize the environment.

        Args:
            config: Board dimensions and AI tuning
            opponent: Opponent tier (defaults to config.difficulty)
            render_mode: 'ascii', 'human' or None
        """
        debug.debug("Initializing ConnectFourEnv", "env")
        self.config = config or GameConfig()
        self.opponent_difficulty = opponent or self.config.difficulty
        self.render_mode = render_mode

        self.game = ConnectFourGame(self.config)
        self.opponent = AIPlayer(self.opponent_difficulty, self.game.board, Player.TWO, self.config)
        if not self.opponent.implemented:
            raise ConfigError(f"{self.opponent_difficulty.name} cannot be used as an opponent")

        self.action_space = spaces.Discrete(self.config.cols)
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(self.config.rows, self.config.cols), dtype=np.int8
        )

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_stalemate = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        A seed also reseeds the opponent's random source.
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)
        if seed is not None:
            self.opponent.reseed(seed)

        self.game.reset()

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's column, then the opponent's reply.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        if not (0 <= action < self.config.cols) or not self.game.board.is_column_available(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        _, outcome = self.game.play(action)
        reward = self._reward(outcome)

        if not outcome.is_game_over():
            _, _, outcome = self.game.play_ai_turn(self.opponent)
            reward = self._reward(outcome)

        terminated = outcome.is_game_over()
        if terminated:
            debug.info(f"Game over: {outcome.name} (winner: {self.game.get_winner()!r})", "env")

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def _reward(self, outcome: GameOutcome) -> float:
        if outcome == GameOutcome.WON:
            return self.reward_win if self.game.get_winner() == Player.ONE else self.reward_lose
        if outcome == GameOutcome.STALEMATE:
            return self.reward_stalemate
        return self.reward_step

    def render(self) -> Optional[str]:
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state().astype(np.int8)

    def _get_info(self) -> Dict:
        board = self.game.board
        return {
            'valid_moves': self.game.get_valid_moves(),
            'current_player': int(board.current_player),
            'outcome': board.outcome.name,
            'moves_made': len(self.game.moves),
            'winning_line': board.winning_line(),
            'last_move': board.last_move,
        }
