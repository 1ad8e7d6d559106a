"""Local moderator: blocked terms reject, redaction patterns mask (e.g. PII) and pass."""

import logging
import re
from typing import Iterable, Mapping, Optional

from ..schema import ModerationVerdict
from .base import Moderator

logger = logging.getLogger(__name__)

# Common PII patterns usable as redact_patterns.
EMAIL_PATTERN = r"[\w.+-]+@[\w-]+\.[\w.-]+"
PHONE_PATTERN = r"\+?\d[\d\s().-]{7,}\d"


class KeywordModerator(Moderator):
    """Rejects text containing any blocked term; masks redaction patterns in passing text."""

    def __init__(
        self,
        blocked_terms: Iterable[str] = (),
        redact_patterns: Optional[Mapping[str, str]] = None,
        mask: str = "[{label}]",
    ):
        """
        Args:
            blocked_terms: Words/phrases that reject the text (case-insensitive, whole words).
            redact_patterns: label -> regex; matches are replaced by mask.format(label=label).
            mask: Replacement template for redacted spans.
        """
        self._blocked = [
            (term, re.compile(rf"\b{re.escape(term)}\b", re.IGNORECASE))
            for term in blocked_terms
        ]
        self._redact = [
            (label, re.compile(pattern)) for label, pattern in (redact_patterns or {}).items()
        ]
        self._mask = mask

    async def check(self, text: str) -> ModerationVerdict:
        for term, pattern in self._blocked:
            if pattern.search(text):
                logger.info("Moderation rejected text | term=%s", term)
                return ModerationVerdict(passed=False, reason=f"blocked term: {term}")

        redacted = text
        for label, pattern in self._redact:
            redacted = pattern.sub(self._mask.format(label=label), redacted)
        if redacted != text:
            return ModerationVerdict(passed=True, reason="redacted", redacted_text=redacted)
        return ModerationVerdict(passed=True)
