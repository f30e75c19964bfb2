"""
Snake entity for the game engine.
"""

from collections import deque
from typing import List, Tuple

from .constants import DIRECTION_OFFSETS


class Snake:
    """
    Represents the player's snake on the board.

    Attributes:
        positions: deque of (x, y) from head at index 0 to tail at the end
    """

    def __init__(self, positions: List[Tuple[int, int]]):
        if not positions:
            raise ValueError("A snake needs at least one segment.")
        self.positions = deque(positions)

    @property
    def head(self) -> Tuple[int, int]:
        """Return the head position (first element)."""
        return self.positions[0]

    def next_head(self, direction: str) -> Tuple[int, int]:
        """Where the head lands after one cell of movement in `direction`."""
        dx, dy = DIRECTION_OFFSETS[direction]
        hx, hy = self.head
        return (hx + dx, hy + dy)

    def occupies(self, cell: Tuple[int, int]) -> bool:
        return cell in self.positions

    def advance(self, new_head: Tuple[int, int], grow: bool = False) -> None:
        """Prepend the new head; keep the tail only when growing."""
        self.positions.appendleft(new_head)
        if not grow:
            self.positions.pop()

    def __len__(self) -> int:
        return len(self.positions)

    def __repr__(self):
        return f"<Snake head={self.head} length={len(self.positions)}>"
