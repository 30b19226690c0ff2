"""
dropfour - Connect-four decision engine

This package provides a gravity-drop board with win and stalemate detection,
a center-control evaluator, a minimax search with alpha-beta pruning and five
difficulty tiers that pick a column to play.
"""

# Version number
__version__ = '0.1.0'
