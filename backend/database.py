"""
Database configuration and schema management for NeonSnake.

This module provides SQLite connection management with environment-aware
path selection and schema initialization. The only persisted value is the
high score, stored as a keyed row.
"""

import logging
import os
import sqlite3
from pathlib import Path


logger = logging.getLogger(__name__)


def get_database_path() -> str:
    """
    Determine the SQLite file to use.

    Returns:
        NEON_SNAKE_DB_PATH when set, otherwise backend/neon_snake.db
    """
    configured = os.getenv('NEON_SNAKE_DB_PATH')
    if configured:
        parent = Path(configured).parent
        parent.mkdir(parents=True, exist_ok=True)
        return configured

    backend_dir = Path(__file__).parent
    return str(backend_dir / 'neon_snake.db')


def get_connection() -> sqlite3.Connection:
    """
    Get a database connection with appropriate settings.

    Returns:
        sqlite3.Connection: Database connection with row factory enabled.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row  # Enable column access by name
    return conn


def init_database() -> None:
    """
    Initialize the database schema.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    cursor = conn.cursor()

    try:
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS high_scores (
                key TEXT PRIMARY KEY,
                value INTEGER NOT NULL CHECK(value >= 0),
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)
        conn.commit()
        logger.debug(f"Database schema ready at {get_database_path()}")

    except Exception as e:
        conn.rollback()
        logger.error(f"Error initializing database: {e}")
        raise
    finally:
        conn.close()


if __name__ == "__main__":
    # Allow running this module directly to initialize the database
    logging.basicConfig(level=logging.INFO)
    init_database()
    print(f"Database ready at: {get_database_path()}")
