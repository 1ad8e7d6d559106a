"""Moderation: moderator interface, local keyword moderator, LLM guard."""

from .base import Moderator
from .keyword import EMAIL_PATTERN, PHONE_PATTERN, KeywordModerator
from .llm_guard import ModeratedLLMClient

__all__ = [
    "Moderator",
    "KeywordModerator",
    "EMAIL_PATTERN",
    "PHONE_PATTERN",
    "ModeratedLLMClient",
]
