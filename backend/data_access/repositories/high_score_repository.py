"""
High score repository for the keyed high_scores table.
"""

from typing import Optional

from .base import BaseRepository


class HighScoreRepository(BaseRepository):
    """
    Repository for high_scores table operations.
    """

    def get(self, key: str) -> Optional[int]:
        """
        Fetch the stored value for `key`.

        Returns:
            The stored integer, or None when nothing has been saved yet.
        """
        with self.read_connection() as (conn, cursor):
            cursor.execute("SELECT value FROM high_scores WHERE key = ?", (key,))
            row = cursor.fetchone()
        return int(row["value"]) if row is not None else None

    def upsert(self, key: str, value: int) -> None:
        """Insert or overwrite the value stored under `key`."""
        with self.connection() as (conn, cursor):
            cursor.execute(
                """
                INSERT INTO high_scores (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
