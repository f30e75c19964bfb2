"""
High score persistence.

A single integer, keyed by a fixed identifier, read once when a session
is created and written whenever a game beats it. Storage problems are
logged and swallowed so a broken disk never ends a game.
"""

import logging
from typing import Optional

from domain.constants import HIGH_SCORE_KEY

from .repositories import HighScoreRepository


logger = logging.getLogger(__name__)


class HighScoreStore:
    """Load/save pair for one high score value."""

    def __init__(self, key: str = HIGH_SCORE_KEY, repository: Optional[HighScoreRepository] = None):
        self.key = key
        self.repository = repository or HighScoreRepository()

    def load_high_score(self) -> Optional[int]:
        """Return the saved high score, or None if absent or unreadable."""
        try:
            return self.repository.get(self.key)
        except Exception as e:
            logger.warning(f"Could not load high score '{self.key}': {e}")
            return None

    def save_high_score(self, value: int) -> None:
        try:
            self.repository.upsert(self.key, value)
            logger.info(f"Saved high score {value} under '{self.key}'")
        except Exception as e:
            logger.warning(f"Could not save high score '{self.key}': {e}")
