"""Abstract moderator interface."""

from abc import ABC, abstractmethod

from ..schema import ModerationVerdict


class Moderator(ABC):
    """Content policy check: text -> pass/reject verdict, optionally with redacted text."""

    @abstractmethod
    async def check(self, text: str) -> ModerationVerdict:
        """Return the verdict for text."""
        ...
