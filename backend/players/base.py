"""
Base player interface for driving a session without a human.
"""

from domain.game_state import GameState


class Player:
    """
    Base class/interface for autopilot logic.

    A player looks at a snapshot and returns the direction it wants the
    snake to take on the next tick.
    """

    def get_move(self, game_state: GameState) -> str:
        """
        Return a move direction given the current game state.

        Args:
            game_state: Current snapshot of the session

        Returns:
            One of: "UP", "DOWN", "LEFT", "RIGHT"
        """
        raise NotImplementedError
