"""
Tests for the commentary service and the commentary feed.

Commentary is an observer: whatever the provider does, the service
returns a string and the feed never raises into the game.
"""

import os
import sys
from types import SimpleNamespace

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import EVENT_START, EVENT_EAT, EVENT_DIE, EVENT_HIGHSCORE  # noqa: E402
from domain.engine import LifecycleEvent  # noqa: E402
from services.commentary_feed import CommentaryFeed, SENDER_AI, SENDER_SYSTEM  # noqa: E402
from services.commentary_service import (  # noqa: E402
    CommentaryService,
    EMPTY_REPLY,
    OFFLINE_MESSAGE,
    SYSTEM_PROMPT,
    build_prompt,
)


class DummyProvider:
    """Records prompts and answers with a fixed text."""

    def __init__(self, text="Snake on fire!"):
        self.text = text
        self.calls = []

    def get_response(self, prompt, system_prompt=None):
        self.calls.append((prompt, system_prompt))
        return {"text": self.text, "input_tokens": 1, "output_tokens": 1}


class FailingProvider:
    def get_response(self, prompt, system_prompt=None):
        raise TimeoutError("request timed out")


class TestBuildPrompt:
    """Tests for build_prompt()."""

    def test_start_prompt(self):
        assert "5-word hype intro" in build_prompt(EVENT_START, 0, 100)

    def test_eat_prompt_mentions_score(self):
        assert "Score is now 50" in build_prompt(EVENT_EAT, 50, 100)

    def test_die_prompt_mentions_both_scores(self):
        prompt = build_prompt(EVENT_DIE, 40, 120)
        assert "score of 40" in prompt
        assert "Previous high score was 120" in prompt

    def test_highscore_prompt(self):
        assert "NEW HIGH SCORE" in build_prompt(EVENT_HIGHSCORE, 200, 200)

    def test_unknown_event_raises(self):
        with pytest.raises(ValueError):
            build_prompt("levelup", 0, 0)


class TestCommentaryService:
    """Tests for CommentaryService.generate_commentary()."""

    def test_returns_model_text(self):
        provider = DummyProvider("Nice moves!")
        service = CommentaryService(provider)

        assert service.generate_commentary(EVENT_EAT, 50, 0) == "Nice moves!"
        prompt, system_prompt = provider.calls[0]
        assert "50" in prompt
        assert system_prompt == SYSTEM_PROMPT

    def test_offline_without_provider(self):
        service = CommentaryService(None)
        assert service.online is False
        assert service.generate_commentary(EVENT_START, 0, 0) == OFFLINE_MESSAGE

    def test_empty_reply_falls_back(self):
        service = CommentaryService(DummyProvider(""))
        assert service.generate_commentary(EVENT_START, 0, 0) == EMPTY_REPLY

    def test_provider_error_returns_empty_string(self):
        service = CommentaryService(FailingProvider())
        assert service.generate_commentary(EVENT_DIE, 10, 20) == ""

    def test_any_provider_exception_returns_empty_string(self):
        def explode(prompt, system_prompt=None):
            raise RuntimeError("connection reset")

        service = CommentaryService(SimpleNamespace(get_response=explode))
        assert service.generate_commentary(EVENT_HIGHSCORE, 30, 30) == ""


class TestCommentaryFeed:
    """Tests for CommentaryFeed."""

    def test_start_event_clears_and_announces(self):
        feed = CommentaryFeed(CommentaryService(DummyProvider("Go go go!")))
        try:
            feed.add_message("old message", SENDER_AI)

            future = feed.handle_event(LifecycleEvent(EVENT_START, 0, 10))
            future.result(timeout=2)

            messages = feed.messages
            assert [m.sender for m in messages] == [SENDER_SYSTEM, SENDER_AI]
            assert messages[0].text == "System: Game Started"
            assert messages[1].text == "Go go go!"
        finally:
            feed.shutdown()

    def test_non_start_event_keeps_history(self):
        feed = CommentaryFeed(CommentaryService(DummyProvider("Tasty!")))
        try:
            feed.handle_event(LifecycleEvent(EVENT_START, 0, 0)).result(timeout=2)
            feed.handle_event(LifecycleEvent(EVENT_EAT, 50, 0)).result(timeout=2)

            assert [m.text for m in feed.messages] == ["System: Game Started", "Tasty!", "Tasty!"]
        finally:
            feed.shutdown()

    def test_failed_commentary_adds_nothing(self):
        feed = CommentaryFeed(CommentaryService(FailingProvider()))
        try:
            feed.handle_event(LifecycleEvent(EVENT_DIE, 10, 20)).result(timeout=2)
            assert feed.messages == []
        finally:
            feed.shutdown()

    def test_service_exception_does_not_escape(self):
        def explode(event, score, high_score):
            raise RuntimeError("boom")

        feed = CommentaryFeed(SimpleNamespace(generate_commentary=explode))
        try:
            future = feed.handle_event(LifecycleEvent(EVENT_EAT, 50, 0))
            with pytest.raises(RuntimeError):
                future.result(timeout=2)
            assert feed.messages == []
        finally:
            feed.shutdown()

    def test_event_after_shutdown_is_dropped(self):
        feed = CommentaryFeed(CommentaryService(None))
        feed.shutdown()
        assert feed.handle_event(LifecycleEvent(EVENT_EAT, 50, 0)) is None

    def test_unknown_event_type_is_ignored(self):
        provider = DummyProvider()
        feed = CommentaryFeed(CommentaryService(provider))
        try:
            assert feed.handle_event(LifecycleEvent("teleport", 10, 0)) is None
            assert feed.messages == []
            assert provider.calls == []
        finally:
            feed.shutdown()

    def test_message_to_dict(self):
        feed = CommentaryFeed(CommentaryService(None))
        try:
            message = feed.add_message("hello", SENDER_SYSTEM)
            data = message.to_dict()
            assert data["text"] == "hello"
            assert data["sender"] == SENDER_SYSTEM
            assert set(data) == {"id", "text", "sender", "timestamp"}
        finally:
            feed.shutdown()
