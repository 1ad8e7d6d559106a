"""Abstract memory and chat history interfaces."""

from abc import ABC, abstractmethod
from typing import Any

from ..schema import ChatMessage


class ChatMessageHistory(ABC):
    """Ordered store of conversation turns. Persistent implementations live outside the engine."""

    @abstractmethod
    async def messages(self) -> list[ChatMessage]:
        ...

    @abstractmethod
    async def add_message(self, message: ChatMessage) -> None:
        ...

    @abstractmethod
    async def clear(self) -> None:
        ...

    async def add_user_message(self, text: str) -> None:
        await self.add_message(ChatMessage(role="human", content=text))

    async def add_ai_message(self, text: str) -> None:
        await self.add_message(ChatMessage(role="ai", content=text))


class InMemoryChatMessageHistory(ChatMessageHistory):
    """Chat history held in a list. Not shared across chains unless passed explicitly."""

    def __init__(self, messages: list[ChatMessage] | None = None):
        self._messages: list[ChatMessage] = list(messages or [])

    async def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    async def add_message(self, message: ChatMessage) -> None:
        self._messages.append(message)

    async def clear(self) -> None:
        self._messages.clear()

    def __len__(self) -> int:
        return len(self._messages)


class Memory(ABC):
    """State a chain loads before each call and saves after each successful call."""

    @property
    @abstractmethod
    def memory_keys(self) -> list[str]:
        """Keys this memory adds to the chain inputs."""
        ...

    @abstractmethod
    async def load_memory_variables(self, inputs: dict[str, Any]) -> dict[str, Any]:
        ...

    @abstractmethod
    async def save_context(self, inputs: dict[str, Any], outputs: dict[str, Any]) -> None:
        ...

    @abstractmethod
    async def clear(self) -> None:
        ...
