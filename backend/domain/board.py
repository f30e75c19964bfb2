"""
Board geometry and food placement.
"""

import random
from typing import Iterable, Tuple

from .constants import BOARD_SIZE

Coordinate = Tuple[int, int]


def in_bounds(cell: Coordinate, board_size: int = BOARD_SIZE) -> bool:
    x, y = cell
    return 0 <= x < board_size and 0 <= y < board_size


def coords_equal(a: Coordinate, b: Coordinate) -> bool:
    return a[0] == b[0] and a[1] == b[1]


def place_food(
    occupied: Iterable[Coordinate],
    board_size: int = BOARD_SIZE,
    rng: random.Random = None,
) -> Coordinate:
    """
    Return a uniformly random cell that is not in `occupied`.

    Cells are drawn until a free one turns up, so every free cell is
    equally likely. A completely filled board has no answer and raises
    ValueError rather than looping forever.
    """
    rng = rng or random
    taken = set(occupied)
    if len(taken) >= board_size * board_size:
        raise ValueError("Cannot place food: the board is full.")

    while True:
        cell = (rng.randrange(board_size), rng.randrange(board_size))
        if cell not in taken:
            return cell
