"""
AI commentary for game lifecycle events.

The commentator ("NeonBit") reacts to starts, score milestones, deaths
and new high scores. Generation never raises: every failure path ends in
a plain string so gameplay is never affected by the LLM.
"""

import logging
from typing import Optional

from domain.constants import EVENT_DIE, EVENT_EAT, EVENT_HIGHSCORE, EVENT_START
from llm_providers import LLMProviderInterface


logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a witty, retro-arcade style commentator named 'NeonBit'. "
    "You are brief, energetic, and sometimes snarky."
)
OFFLINE_MESSAGE = "AI Offline (No API Key)"
EMPTY_REPLY = "..."


def build_prompt(event: str, score: int, previous_high_score: int) -> str:
    """Return the user prompt for a lifecycle event."""
    if event == EVENT_START:
        return "The player just started a new game of Snake. Give a short, 5-word hype intro."
    if event == EVENT_EAT:
        return f"The player just ate food. Score is now {score}. Give a 3-word encouraging remark."
    if event == EVENT_DIE:
        return (
            f"The player died in Snake with a score of {score}. "
            f"Previous high score was {previous_high_score}. "
            "Give a sarcastic or sympathetic 1-sentence comment depending on if they beat the high score."
        )
    if event == EVENT_HIGHSCORE:
        return f"NEW HIGH SCORE in Snake! Score: {score}. Go wild! 1 sentence."
    raise ValueError(f"Unknown lifecycle event: {event!r}")


class CommentaryService:
    """
    Turns lifecycle events into one-line commentary.

    Args:
        provider: an LLM provider, or None when no API key is configured
    """

    def __init__(self, provider: Optional[LLMProviderInterface]):
        self.provider = provider

    @property
    def online(self) -> bool:
        return self.provider is not None

    def generate_commentary(self, event: str, score: int, high_score: int) -> str:
        """
        Ask the model for a remark about `event`.

        Returns the remark, OFFLINE_MESSAGE without a provider, EMPTY_REPLY
        when the model answers with nothing, and "" on any provider error.
        """
        if self.provider is None:
            return OFFLINE_MESSAGE

        prompt = build_prompt(event, score, high_score)
        try:
            response = self.provider.get_response(prompt, system_prompt=SYSTEM_PROMPT)
        except Exception as exc:
            logger.error(f"Commentary provider error for '{event}' event: {exc}")
            return ""

        return response.get("text") or EMPTY_REPLY
