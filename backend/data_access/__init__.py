"""
Data access layer for NeonSnake.

This module provides the high score store used by the session controller.
"""

from .high_scores import HighScoreStore

__all__ = [
    'HighScoreStore',
]
