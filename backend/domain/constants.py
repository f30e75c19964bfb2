"""
Game constants for NeonSnake.
"""

# Movement directions
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
VALID_MOVES = {UP, DOWN, LEFT, RIGHT}

OPPOSITES = {
    UP: DOWN,
    DOWN: UP,
    LEFT: RIGHT,
    RIGHT: LEFT,
}

# (dx, dy) per direction; y grows downwards so UP is y - 1
DIRECTION_OFFSETS = {
    UP: (0, -1),
    DOWN: (0, 1),
    LEFT: (-1, 0),
    RIGHT: (1, 0),
}

# Board and pacing
BOARD_SIZE = 20
MIN_SPEED = 40  # ms, fastest tick allowed
FOOD_REWARD = 10
MILESTONE_INTERVAL = 50

INITIAL_SNAKE = [(10, 10), (10, 11), (10, 12)]
INITIAL_DIRECTION = UP


class GameStatus:
    IDLE = "IDLE"
    PLAYING = "PLAYING"
    PAUSED = "PAUSED"
    GAME_OVER = "GAME_OVER"


class Difficulty:
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


DEFAULT_DIFFICULTY = Difficulty.MEDIUM

# initial_speed / speed_decrement are in milliseconds
DIFFICULTY_CONFIG = {
    Difficulty.EASY: {
        "initial_speed": 150,
        "speed_decrement": 2,
        "label": "EASY",
        "color": "text-green-400",
    },
    Difficulty.MEDIUM: {
        "initial_speed": 120,
        "speed_decrement": 4,
        "label": "NORMAL",
        "color": "text-yellow-400",
    },
    Difficulty.HARD: {
        "initial_speed": 90,
        "speed_decrement": 6,
        "label": "HARD",
        "color": "text-red-500",
    },
}

# Lifecycle events forwarded to the commentator
EVENT_START = "start"
EVENT_EAT = "eat"
EVENT_DIE = "die"
EVENT_HIGHSCORE = "highscore"
LIFECYCLE_EVENTS = {EVENT_START, EVENT_EAT, EVENT_DIE, EVENT_HIGHSCORE}

KEY_MAP = {
    "ArrowUp": UP,
    "w": UP,
    "ArrowDown": DOWN,
    "s": DOWN,
    "ArrowLeft": LEFT,
    "a": LEFT,
    "ArrowRight": RIGHT,
    "d": RIGHT,
}

HIGH_SCORE_KEY = "neonSnakeHighScore"


def difficulty_config(difficulty: str) -> dict:
    """Look up a difficulty entry, raising ValueError for unknown names."""
    try:
        return DIFFICULTY_CONFIG[difficulty]
    except KeyError:
        raise ValueError(f"Unknown difficulty: {difficulty!r}") from None


def direction_for_key(key: str):
    """Map a raw key name to a direction, or None if the key is not bound."""
    return KEY_MAP.get(key)
