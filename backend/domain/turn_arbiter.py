"""
Turn arbitration between direction input and the simulation tick.
"""

import threading

from .constants import INITIAL_DIRECTION, OPPOSITES


class TurnArbiter:
    """
    Holds the pending and committed directions of the snake.

    Inputs are validated against the direction used by the last executed
    step, not against whatever is pending. Two quick turns inside one tick
    (UP -> LEFT -> DOWN) therefore cannot reverse the snake into its neck:
    DOWN is still the opposite of the committed UP and gets dropped.

    Input handlers and the ticker may live on different threads, so the
    pair of fields is guarded by a lock.
    """

    def __init__(self, initial_direction: str = INITIAL_DIRECTION):
        self._lock = threading.Lock()
        self._committed = initial_direction
        self._pending = initial_direction

    @property
    def committed_direction(self) -> str:
        with self._lock:
            return self._committed

    @property
    def pending_direction(self) -> str:
        with self._lock:
            return self._pending

    def submit_input(self, requested: str) -> bool:
        """
        Accept `requested` as the next direction unless it reverses the
        committed one. Returns whether the input was accepted; rejected
        inputs change nothing.
        """
        if requested not in OPPOSITES:
            raise ValueError(f"Invalid direction: {requested!r}")
        with self._lock:
            if OPPOSITES[requested] == self._committed:
                return False
            self._pending = requested
            return True

    def commit_for_step(self) -> str:
        """Freeze the pending direction for the step about to run."""
        with self._lock:
            self._committed = self._pending
            return self._committed

    def reset(self, direction: str = INITIAL_DIRECTION) -> None:
        with self._lock:
            self._committed = direction
            self._pending = direction
