"""
Player implementations for NeonSnake.

Players are autopilots: they pick directions for headless sessions.
"""

from .base import Player
from .random_player import RandomPlayer

__all__ = [
    'Player',
    'RandomPlayer',
]
