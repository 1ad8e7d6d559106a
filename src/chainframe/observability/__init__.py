"""Observability: LLM call tracing."""

from .tracing import TraceEntry, TracingLLMClient, maybe_trace

__all__ = ["TracingLLMClient", "TraceEntry", "maybe_trace"]
