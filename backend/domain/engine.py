"""
Fixed-tick simulation of a single-player snake game.

The engine owns the mutable game record (snake, food, score, speed,
status) and advances it one cell per call to step(). It performs no I/O;
lifecycle events are returned to the caller, which decides who hears
about them.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import coords_equal, in_bounds, place_food
from .constants import (
    BOARD_SIZE,
    DEFAULT_DIFFICULTY,
    EVENT_DIE,
    EVENT_EAT,
    EVENT_HIGHSCORE,
    EVENT_START,
    FOOD_REWARD,
    INITIAL_DIRECTION,
    INITIAL_SNAKE,
    MILESTONE_INTERVAL,
    MIN_SPEED,
    GameStatus,
    difficulty_config,
)
from .game_state import speed_progress
from .snake import Snake
from .turn_arbiter import TurnArbiter


@dataclass(frozen=True)
class LifecycleEvent:
    """A notable moment in a game: start, eat milestone, death or new high score."""

    type: str
    score: int
    high_score: int


class SimulationEngine:
    """
    Manages:
      - Snake and food on a square board
      - Score and tick speed for the active difficulty
      - Game status (IDLE / PLAYING / PAUSED / GAME_OVER)
      - The turn arbiter fed by direction input
    """

    def __init__(
        self,
        board_size: int = BOARD_SIZE,
        high_score: int = 0,
        difficulty: str = DEFAULT_DIFFICULTY,
        rng: Optional[random.Random] = None,
        initial_snake: List[Tuple[int, int]] = None,
        initial_direction: str = INITIAL_DIRECTION,
        min_speed: int = MIN_SPEED,
    ):
        self.board_size = board_size
        self.rng = rng or random.Random()
        self.initial_snake = list(initial_snake or INITIAL_SNAKE)
        self.initial_direction = initial_direction
        self.min_speed = min_speed

        self.arbiter = TurnArbiter(initial_direction)
        self.snake = Snake(self.initial_snake)
        self.food: Optional[Tuple[int, int]] = None
        self.status = GameStatus.IDLE
        self.score = 0
        self.high_score = high_score
        self.difficulty = difficulty
        self.speed = difficulty_config(difficulty)["initial_speed"]
        self.ticks = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def can_start(self) -> bool:
        return self.status in (GameStatus.IDLE, GameStatus.GAME_OVER)

    def reset(self, difficulty: Optional[str] = None) -> LifecycleEvent:
        """
        Put a fresh game on the board and mark it PLAYING.

        Returns the start event carrying the current high score.
        """
        if difficulty is not None:
            self.difficulty = difficulty
        config = difficulty_config(self.difficulty)

        self.snake = Snake(self.initial_snake)
        self.arbiter.reset(self.initial_direction)
        self.score = 0
        self.speed = config["initial_speed"]
        self.food = place_food(self.snake.positions, self.board_size, self.rng)
        self.ticks = 0
        self.status = GameStatus.PLAYING
        return LifecycleEvent(EVENT_START, 0, self.high_score)

    def toggle_pause(self) -> bool:
        """Flip PLAYING <-> PAUSED. Returns False when the status allows neither."""
        if self.status == GameStatus.PLAYING:
            self.status = GameStatus.PAUSED
        elif self.status == GameStatus.PAUSED:
            self.status = GameStatus.PLAYING
        else:
            return False
        return True

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    def step(self) -> List[LifecycleEvent]:
        """
        Advance the game by one tick:
          1) Commit the pending direction
          2) Compute the new head
          3) Wall collision -> game over, snake untouched
          4) Self collision against the full current body -> game over
          5) Move; on food grow, score and speed up, then re-place food
             or end the game when the snake fills the board
        """
        if self.status != GameStatus.PLAYING:
            raise RuntimeError(f"step() called while {self.status}")

        direction = self.arbiter.commit_for_step()
        new_head = self.snake.next_head(direction)
        self.ticks += 1

        if not in_bounds(new_head, self.board_size):
            return [self._game_over()]

        # The tail cell still counts as occupied even though it is about to move.
        if self.snake.occupies(new_head):
            return [self._game_over()]

        events: List[LifecycleEvent] = []
        ate = self.food is not None and coords_equal(new_head, self.food)
        self.snake.advance(new_head, grow=ate)

        if ate:
            self.score += FOOD_REWARD
            decrement = difficulty_config(self.difficulty)["speed_decrement"]
            self.speed = max(self.min_speed, self.speed - decrement)

            if self.score > 0 and self.score % MILESTONE_INTERVAL == 0:
                events.append(LifecycleEvent(EVENT_EAT, self.score, self.high_score))

            # A snake covering every cell leaves nowhere to put food.
            if len(self.snake) >= self.board_size ** 2:
                self.food = None
                events.append(self._game_over())
            else:
                self.food = place_food(self.snake.positions, self.board_size, self.rng)

        return events

    def _game_over(self) -> LifecycleEvent:
        self.status = GameStatus.GAME_OVER
        if self.score > self.high_score:
            self.high_score = self.score
            return LifecycleEvent(EVENT_HIGHSCORE, self.score, self.high_score)
        return LifecycleEvent(EVENT_DIE, self.score, self.high_score)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    def speed_progress(self) -> float:
        initial = difficulty_config(self.difficulty)["initial_speed"]
        return speed_progress(initial, self.speed, self.min_speed)
