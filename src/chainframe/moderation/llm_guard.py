"""Moderation guard around an LLM call: the same policy as ModerationGuard, as an LLMClient decorator."""

from typing import Any, Sequence

from ..exceptions import CapabilityError, ContentRejectedError
from ..llm.base import LLMClient
from ..schema import ChatMessage
from .base import Moderator


class ModeratedLLMClient(LLMClient):
    """Checks every prompt with a moderator before forwarding it to the wrapped LLM.

    Moderator failures surface as CapabilityError("moderator"), so an enclosing
    chain does not report them as LLM failures.
    """

    def __init__(self, moderator: Moderator, llm: LLMClient, use_redacted: bool = True):
        self._moderator = moderator
        self._llm = llm
        self._use_redacted = use_redacted

    async def _screen(self, text: str) -> str:
        try:
            verdict = await self._moderator.check(text)
        except Exception as e:
            raise CapabilityError("moderator", e) from e
        if not verdict.passed:
            raise ContentRejectedError(verdict.reason, verdict)
        if self._use_redacted and verdict.redacted_text is not None:
            return verdict.redacted_text
        return text

    async def invoke(self, prompt: str, **kwargs: Any) -> str:
        prompt = await self._screen(prompt)
        return await self._llm.invoke(prompt, **kwargs)

    async def chat(self, messages: Sequence[ChatMessage], **kwargs: Any) -> str:
        screened = []
        for m in messages:
            # system prompts are authored by the application, not the user
            if m.role == "system":
                screened.append(m)
            else:
                screened.append(ChatMessage(role=m.role, content=await self._screen(m.content)))
        return await self._llm.chat(screened, **kwargs)
