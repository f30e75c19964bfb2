"""
GameState entity - a read-only snapshot of the session at a point in time.
"""

from typing import Any, Dict, List, Tuple

from .constants import BOARD_SIZE, MIN_SPEED


def speed_progress(initial_speed: int, current_speed: int, min_speed: int = MIN_SPEED) -> float:
    """
    How far the tick interval has shrunk towards MIN_SPEED, as a
    percentage clamped to [0, 100].
    """
    span = initial_speed - min_speed
    if span <= 0:
        return 100.0
    percent = (initial_speed - current_speed) / span * 100
    return min(100.0, max(0.0, percent))


class GameState:
    """
    A snapshot of the game handed to presentation layers.

    Attributes:
        snake: list of (x, y), head first
        food: (x, y) of the single food item
        status: one of GameStatus
        score, high_score: current and best score
        difficulty: selected difficulty name
        speed: current tick interval in ms
        speed_progress: percentage of the way from initial speed to MIN_SPEED
        board_size: width and height of the square board
    """

    def __init__(
        self,
        snake: List[Tuple[int, int]],
        food: Tuple[int, int],
        status: str,
        score: int,
        high_score: int,
        difficulty: str,
        speed: int,
        speed_progress: float,
        board_size: int = BOARD_SIZE,
    ):
        self.snake = snake
        self.food = food
        self.status = status
        self.score = score
        self.high_score = high_score
        self.difficulty = difficulty
        self.speed = speed
        self.speed_progress = speed_progress
        self.board_size = board_size

    def to_dict(self) -> Dict[str, Any]:
        # JSON turns the (x, y) tuples into [x, y] lists
        return {
            "snake": [list(cell) for cell in self.snake],
            "food": list(self.food) if self.food is not None else None,
            "status": self.status,
            "score": self.score,
            "high_score": self.high_score,
            "difficulty": self.difficulty,
            "speed": self.speed,
            "speed_progress": round(self.speed_progress, 2),
            "board_size": self.board_size,
        }

    def print_board(self) -> str:
        """
        Returns a string representation of the board with:
        . = empty space
        F = food
        H = snake head
        S = snake body
        Row 0 is at the top, so moving UP decreases y.
        """
        board = [['.' for _ in range(self.board_size)] for _ in range(self.board_size)]

        if self.food is not None:
            fx, fy = self.food
            board[fy][fx] = 'F'

        for idx, (x, y) in enumerate(self.snake):
            if 0 <= x < self.board_size and 0 <= y < self.board_size:
                board[y][x] = 'H' if idx == 0 else 'S'

        rows = [f"{y:2d} {' '.join(board[y])}" for y in range(self.board_size)]
        return "\n".join(rows)

    def __repr__(self):
        return (
            f"<GameState status={self.status}, score={self.score}, "
            f"high_score={self.high_score}, head={self.snake[0] if self.snake else None}, "
            f"food={self.food}>"
        )
