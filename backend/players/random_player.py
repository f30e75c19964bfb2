"""
Random player implementation - picks random safe moves.
"""

import random
from typing import List, Optional

from domain.board import in_bounds
from domain.constants import DIRECTION_OFFSETS, VALID_MOVES
from domain.game_state import GameState
from .base import Player


class RandomPlayer(Player):
    """
    A random AI that picks a direction that avoids walls and the snake's body.

    The whole body counts as blocked, tail included, because the engine
    treats the tail cell as occupied on the tick it would vacate. A safe
    move onto the food is always taken.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def get_move(self, game_state: GameState) -> str:
        snake_positions = game_state.snake
        head_x, head_y = snake_positions[0]
        body = set(snake_positions)

        valid_moves: List[str] = []
        for move in sorted(VALID_MOVES):
            dx, dy = DIRECTION_OFFSETS[move]
            target = (head_x + dx, head_y + dy)

            if not in_bounds(target, game_state.board_size):
                continue
            if target in body:
                continue
            if game_state.food is not None and target == tuple(game_state.food):
                return move

            valid_moves.append(move)

        # If no valid moves, just return a random move (we'll die anyway)
        if not valid_moves:
            return self.rng.choice(sorted(VALID_MOVES))

        return self.rng.choice(valid_moves)
