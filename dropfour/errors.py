"""
errors.py - Exception types raised by dropfour

A full column is not an error: drop() returns the FULL_COLUMN sentinel.
Everything here is a contract violation that is surfaced to the caller
immediately and never retried.
"""


class DropFourError(Exception):
    """Base class for all dropfour errors."""


class ConfigError(DropFourError, ValueError):
    """A GameConfig value is out of range or cannot be parsed."""


class InvalidDifficultyError(DropFourError, ValueError):
    """Unknown difficulty level requested at strategy construction."""

    def __init__(self, difficulty):
        super().__init__(f"Invalid difficulty level: {difficulty!r}")
        self.difficulty = difficulty


class SearchInvariantError(DropFourError, RuntimeError):
    """The search tried to play into a full column or found no legal move."""


class GameOverError(DropFourError):
    """A move was requested after the game left the in-progress state."""


class InvalidMoveError(DropFourError, ValueError):
    """A column outside the board (including NO_MOVE) was played."""


class UnimplementedTierError(DropFourError):
    """An AI tier had no move to play: the tier is unimplemented or it answered NO_MOVE."""
