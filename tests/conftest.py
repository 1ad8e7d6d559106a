"""Pytest fixtures and shared test doubles."""

import asyncio
from typing import Any

import pytest

from chainframe.callbacks import ChainCallback
from chainframe.config import get_settings
from chainframe.llm import LLMClient


class RecordingLLM(LLMClient):
    """Returns scripted responses in order (or echoes), recording every prompt."""

    def __init__(self, responses: list[str] | None = None):
        self.responses = list(responses or [])
        self.prompts: list[str] = []

    async def invoke(self, prompt: str, **kwargs: Any) -> str:
        self.prompts.append(prompt)
        if self.responses:
            return self.responses.pop(0)
        return f"Echo: {prompt[-20:]}"


class FailingLLM(LLMClient):
    """Raises on every call, like a provider returning a transport error."""

    def __init__(self, exc: Exception | None = None):
        self.exc = exc or ConnectionError("upstream unavailable")
        self.calls = 0

    async def invoke(self, prompt: str, **kwargs: Any) -> str:
        self.calls += 1
        raise self.exc


class BlockingLLM(LLMClient):
    """Blocks until cancelled; `started` is set once the call is in flight."""

    def __init__(self):
        self.started = asyncio.Event()
        self.cancelled = False

    async def invoke(self, prompt: str, **kwargs: Any) -> str:
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.cancelled = True
            raise
        return "unreachable"


class RecordingCallback(ChainCallback):
    """Appends (name, event, payload) to a shared log."""

    def __init__(self, log: list | None = None, name: str = "rec"):
        self.log = log if log is not None else []
        self.name = name

    def on_chain_start(self, run, inputs):
        self.log.append((self.name, "chain_start", run.chain_type))

    def on_step_start(self, run, step, inputs):
        self.log.append((self.name, "step_start", step))

    def on_step_end(self, run, step, outputs):
        self.log.append((self.name, "step_end", step))

    def on_chain_end(self, run, outputs):
        self.log.append((self.name, "chain_end", run.chain_type))

    def on_chain_error(self, run, error):
        self.log.append((self.name, "chain_error", type(error).__name__))

    def events(self, kind: str) -> list:
        return [entry for entry in self.log if entry[1] == kind]


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached process-wide; isolate tests from each other."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def recording_llm() -> RecordingLLM:
    return RecordingLLM()


@pytest.fixture
def recorder() -> RecordingCallback:
    return RecordingCallback()
