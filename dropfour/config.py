"""
config.py - Explicit game and AI configuration

A GameConfig value is built once by the caller and handed to the Board and to
strategy construction. There is no process-wide configuration state.
"""

import random
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional

from dropfour.debug import DebugLevel
from dropfour.errors import ConfigError, InvalidDifficultyError
from dropfour.utils import CONNECT_N, DEFAULT_COLS, DEFAULT_ROWS, Difficulty, PlayStyle


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions and AI tuning constants."""

    # Board
    rows: int = DEFAULT_ROWS
    cols: int = DEFAULT_COLS

    # AI selection
    difficulty: Difficulty = Difficulty.MEDIUM
    play_style: PlayStyle = PlayStyle.CENTER_CONTROL

    # Tier tuning
    medium_error_rate: float = 0.3
    hard_depth: int = 4
    hard_error_factor: float = 0.05
    expert_depth: int = 7
    expert_error_factor: float = 0.01
    master_simulations: int = 10000

    # Search behaviour
    prune: bool = True  # alpha-beta cutoffs; never changes the chosen column

    # Reproducibility / diagnostics
    seed: Optional[int] = None
    debug_level: str = "error"

    def __post_init__(self):
        if self.rows < CONNECT_N or self.cols < CONNECT_N:
            raise ConfigError(
                f"Board must be at least {CONNECT_N}x{CONNECT_N}, got {self.rows}x{self.cols}")
        for name in ("medium_error_rate", "hard_error_factor", "expert_error_factor"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ConfigError(f"{name} must be between 0 and 1, got {value}")
        for name in ("hard_depth", "expert_depth"):
            if getattr(self, name) < 1:
                raise ConfigError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.master_simulations < 0:
            raise ConfigError("master_simulations must not be negative")
        if self.debug_level.upper() not in DebugLevel.__members__:
            raise ConfigError(f"Unknown debug_level: {self.debug_level}")
        if not isinstance(self.difficulty, Difficulty):
            raise InvalidDifficultyError(self.difficulty)
        if not isinstance(self.play_style, PlayStyle):
            raise ConfigError(f"play_style must be a PlayStyle, got {self.play_style!r}")

    def rng(self) -> random.Random:
        """A random source seeded from `seed` (unseeded when seed is None)."""
        return random.Random(self.seed)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["difficulty"] = self.difficulty.name
        data["play_style"] = self.play_style.name
        return data

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> 'GameConfig':
        """
        Build a config from plain values, e.g. parsed command-line settings.

        Enum fields accept either the enum member or its (case-insensitive) name.
        Unknown keys are rejected.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        kwargs = dict(values)
        for key, enum_type in (("difficulty", Difficulty), ("play_style", PlayStyle)):
            value = kwargs.get(key)
            if isinstance(value, str):
                try:
                    kwargs[key] = enum_type[value.upper()]
                except KeyError:
                    if enum_type is Difficulty:
                        raise InvalidDifficultyError(value) from None
                    raise ConfigError(f"Unknown {key}: {value}") from None
        return cls(**kwargs)
