"""Chain memory and chat message history."""

from .base import ChatMessageHistory, InMemoryChatMessageHistory, Memory
from .buffer import ConversationBufferMemory
from .readonly import ReadOnlyMemory

__all__ = [
    "Memory",
    "ChatMessageHistory",
    "InMemoryChatMessageHistory",
    "ConversationBufferMemory",
    "ReadOnlyMemory",
]
