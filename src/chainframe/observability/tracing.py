"""LLM call tracing: one TraceEntry per model call, logged and optionally handed to a sink."""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional, Sequence

from ..config import EngineSettings
from ..llm.base import LLMClient
from ..schema import ChatMessage

logger = logging.getLogger(__name__)

TraceSink = Callable[["TraceEntry"], None]


@dataclass
class TraceEntry:
    """Single LLM call trace. error holds the exception class name of a failed call."""

    operation: str  # "invoke" | "chat"
    prompt: str
    response: str
    latency_seconds: float
    prompt_length: int = 0
    response_length: int = 0
    error: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)


class TracingLLMClient(LLMClient):
    """Decorates an LLMClient; cancelled and failed calls are traced too, then re-raised."""

    def __init__(
        self,
        inner: LLMClient,
        log_level: int = logging.INFO,
        callback: Optional[TraceSink] = None,
    ):
        self._inner = inner
        self._log_level = log_level
        self._callback = callback

    @property
    def inner(self) -> LLMClient:
        return self._inner

    async def invoke(self, prompt: str, **kwargs: Any) -> str:
        return await self._traced("invoke", prompt, self._inner.invoke(prompt, **kwargs), kwargs)

    async def chat(self, messages: Sequence[ChatMessage], **kwargs: Any) -> str:
        transcript = "\n".join(f"{m.role}: {m.content}" for m in messages)
        return await self._traced("chat", transcript, self._inner.chat(messages, **kwargs), kwargs)

    async def _traced(
        self,
        operation: str,
        prompt: str,
        call: Awaitable[str],
        metadata: dict[str, Any],
    ) -> str:
        started = time.perf_counter()
        response = ""
        error: Optional[str] = None
        try:
            response = await call
            return response
        except BaseException as e:
            error = type(e).__name__
            raise
        finally:
            self._emit(TraceEntry(
                operation=operation,
                prompt=prompt,
                response=response,
                latency_seconds=time.perf_counter() - started,
                prompt_length=len(prompt),
                response_length=len(response),
                error=error,
                metadata=dict(metadata),
            ))

    def _emit(self, entry: TraceEntry) -> None:
        logger.log(
            self._log_level,
            "LLM trace | op=%s latency=%.3fs prompt_len=%s response_len=%s error=%s",
            entry.operation,
            entry.latency_seconds,
            entry.prompt_length,
            entry.response_length,
            entry.error,
        )
        if self._callback is None:
            return
        try:
            self._callback(entry)
        except Exception as e:
            logger.warning("Trace sink %r failed: %s", self._callback, e)


def maybe_trace(llm: LLMClient, settings: EngineSettings) -> LLMClient:
    """Wrap llm in TracingLLMClient when ENABLE_LLM_TRACING is set."""
    if not settings.ENABLE_LLM_TRACING:
        return llm
    level = getattr(logging, settings.TRACING_LOG_LEVEL.upper(), logging.INFO)
    return TracingLLMClient(llm, log_level=level)
