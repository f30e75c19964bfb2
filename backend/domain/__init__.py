"""
Domain entities for the NeonSnake game engine.

This module contains the core game entities that are independent of
infrastructure concerns (database, API calls, timers, etc.).
"""

from .constants import (
    UP, DOWN, LEFT, RIGHT, VALID_MOVES, OPPOSITES,
    BOARD_SIZE, MIN_SPEED, FOOD_REWARD, MILESTONE_INTERVAL,
    INITIAL_SNAKE, INITIAL_DIRECTION,
    GameStatus, Difficulty, DIFFICULTY_CONFIG, DEFAULT_DIFFICULTY,
    EVENT_START, EVENT_EAT, EVENT_DIE, EVENT_HIGHSCORE,
    HIGH_SCORE_KEY, difficulty_config, direction_for_key,
)
from .board import in_bounds, coords_equal, place_food
from .snake import Snake
from .turn_arbiter import TurnArbiter
from .game_state import GameState, speed_progress
from .engine import LifecycleEvent, SimulationEngine

__all__ = [
    'UP', 'DOWN', 'LEFT', 'RIGHT', 'VALID_MOVES', 'OPPOSITES',
    'BOARD_SIZE', 'MIN_SPEED', 'FOOD_REWARD', 'MILESTONE_INTERVAL',
    'INITIAL_SNAKE', 'INITIAL_DIRECTION',
    'GameStatus', 'Difficulty', 'DIFFICULTY_CONFIG', 'DEFAULT_DIFFICULTY',
    'EVENT_START', 'EVENT_EAT', 'EVENT_DIE', 'EVENT_HIGHSCORE',
    'HIGH_SCORE_KEY', 'difficulty_config', 'direction_for_key',
    'in_bounds', 'coords_equal', 'place_food',
    'Snake',
    'TurnArbiter',
    'GameState', 'speed_progress',
    'LifecycleEvent', 'SimulationEngine',
]
