"""
dropfour.ai - Move selection for dropfour

This package provides the heuristic evaluator (evaluator), the minimax search
engine (minimax), the difficulty strategies (strategies) and the AIPlayer
wrapper (player).
"""

# Import submodules directly; dropfour.game.rules imports this package, so
# nothing is imported eagerly here.
__all__ = []
