"""
dropfour.interfaces - User interfaces for dropfour

This package contains the command-line interface for playing against the AI,
running AI-vs-AI matches and analyzing positions.
"""

# Don't import anything here to avoid circular imports
__all__ = []
