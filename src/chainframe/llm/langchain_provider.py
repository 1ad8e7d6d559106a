"""LLM client backed by any LangChain language model (chat model or completion LLM)."""

from typing import Any, Sequence

from langchain_core.language_models import BaseLanguageModel
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage

from ..schema import ChatMessage
from .base import LLMClient


def to_langchain_messages(messages: Sequence[ChatMessage]) -> list[BaseMessage]:
    """Convert framework chat messages to LangChain message objects."""
    converted: list[BaseMessage] = []
    for m in messages:
        if m.role == "ai":
            converted.append(AIMessage(content=m.content))
        elif m.role == "system":
            converted.append(SystemMessage(content=m.content))
        else:
            converted.append(HumanMessage(content=m.content))
    return converted


def _response_text(response: Any) -> str:
    if isinstance(response, str):
        return response
    content = getattr(response, "content", None)
    if isinstance(content, str):
        return content
    return str(response)


class LangChainLLMClient(LLMClient):
    """Adapts a langchain_core language model (ChatOpenAI, FakeListLLM, ...) to LLMClient."""

    def __init__(self, model: BaseLanguageModel):
        self._model = model

    @property
    def model(self) -> BaseLanguageModel:
        return self._model

    async def invoke(self, prompt: str, **kwargs: Any) -> str:
        response = await self._model.ainvoke(prompt, **kwargs)
        return _response_text(response)

    async def chat(self, messages: Sequence[ChatMessage], **kwargs: Any) -> str:
        response = await self._model.ainvoke(to_langchain_messages(messages), **kwargs)
        return _response_text(response)
