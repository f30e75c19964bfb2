"""
Tests for high score persistence.
"""

import os
import sys
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from data_access import HighScoreStore  # noqa: E402
from data_access.repositories import HighScoreRepository  # noqa: E402
from database import get_database_path  # noqa: E402
from domain.constants import HIGH_SCORE_KEY  # noqa: E402


@pytest.fixture
def db_path(tmp_path, monkeypatch):
    path = tmp_path / "data" / "neon_snake.db"
    monkeypatch.setenv("NEON_SNAKE_DB_PATH", str(path))
    return path


class TestHighScoreRepository:
    """Tests for HighScoreRepository."""

    def test_missing_key_returns_none(self, db_path):
        assert HighScoreRepository().get(HIGH_SCORE_KEY) is None

    def test_upsert_inserts_then_overwrites(self, db_path):
        repo = HighScoreRepository()
        repo.upsert(HIGH_SCORE_KEY, 50)
        repo.upsert(HIGH_SCORE_KEY, 120)
        assert repo.get(HIGH_SCORE_KEY) == 120

    def test_keys_are_independent(self, db_path):
        repo = HighScoreRepository()
        repo.upsert("a", 10)
        repo.upsert("b", 20)
        assert repo.get("a") == 10
        assert repo.get("b") == 20

    def test_database_path_from_env(self, db_path):
        assert get_database_path() == str(db_path)
        assert db_path.parent.exists()


class TestHighScoreStore:
    """Tests for HighScoreStore."""

    def test_round_trip(self, db_path):
        store = HighScoreStore()
        assert store.load_high_score() is None

        store.save_high_score(90)

        assert HighScoreStore().load_high_score() == 90

    def test_load_failure_returns_none(self):
        def broken_get(key):
            raise OSError("disk on fire")

        store = HighScoreStore(repository=SimpleNamespace(get=broken_get))
        assert store.load_high_score() is None

    def test_save_failure_is_swallowed(self):
        def broken_upsert(key, value):
            raise OSError("read-only filesystem")

        store = HighScoreStore(repository=SimpleNamespace(upsert=broken_upsert))
        store.save_high_score(10)
