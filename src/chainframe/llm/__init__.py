"""LLM abstraction and providers."""

from .base import LLMClient, PromptOrMessages
from .langchain_provider import LangChainLLMClient, to_langchain_messages

__all__ = [
    "LLMClient",
    "PromptOrMessages",
    "LangChainLLMClient",
    "to_langchain_messages",
]
