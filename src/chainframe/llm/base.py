"""Abstract LLM client interface."""

from abc import ABC, abstractmethod
from typing import Any, Sequence, Union

from ..schema import ChatMessage

PromptOrMessages = Union[str, Sequence[ChatMessage]]


class LLMClient(ABC):
    """Abstract interface for LLM providers.

    Calls are coroutines; cancelling the awaiting task must abort the request.
    """

    @abstractmethod
    async def invoke(self, prompt: str, **kwargs: Any) -> str:
        """Send a prompt and return the model response text."""
        ...

    async def chat(self, messages: Sequence[ChatMessage], **kwargs: Any) -> str:
        """Chat with a list of messages. Default implementation uses a single combined prompt."""
        prompt = "\n".join(f"{m.role}: {m.content}" for m in messages)
        return await self.invoke(prompt, **kwargs)

    async def generate(self, prompt: PromptOrMessages, **kwargs: Any) -> str:
        """Dispatch to invoke() for text or chat() for a message sequence."""
        if isinstance(prompt, str):
            return await self.invoke(prompt, **kwargs)
        return await self.chat(list(prompt), **kwargs)
