"""
dropfour.game - Core game mechanics

This package contains the board representation, the directional line scanner
and turn management (dropfour.game.rules, imported on demand because it
depends on dropfour.ai).
"""

from dropfour.game import scanner
from dropfour.game.board import Board

__all__ = ['Board', 'scanner']
