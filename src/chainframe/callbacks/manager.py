"""Callback fan-out: ordered, synchronous notification with failure isolation."""

import asyncio
import inspect
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Optional, Sequence, TypeVar

from ..exceptions import CapabilityError, ChainError
from .base import ChainCallback, RunInfo
from .handlers import LoggingCallback

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StepRecord:
    """Handle yielded by RunManager.step(); set outputs before the block exits."""

    def __init__(self, name: str):
        self.name = name
        self.outputs: dict[str, Any] = {}


class RunManager:
    """Fan-out for one chain run. Handlers are notified in registration order.

    A failing handler is logged and skipped; a coroutine hook that exceeds
    ``timeout`` seconds is abandoned with a warning.
    """

    def __init__(
        self,
        handlers: Sequence[ChainCallback],
        run: RunInfo,
        timeout: float = 5.0,
    ):
        self._handlers = list(handlers)
        self._run = run
        self._timeout = timeout

    @property
    def run(self) -> RunInfo:
        return self._run

    @property
    def handlers(self) -> list[ChainCallback]:
        return list(self._handlers)

    @property
    def timeout(self) -> float:
        return self._timeout

    async def _dispatch(self, hook: str, *args: Any) -> None:
        for handler in self._handlers:
            method = getattr(handler, hook, None)
            if method is None:
                continue
            try:
                result = method(self._run, *args)
                if inspect.isawaitable(result):
                    await asyncio.wait_for(result, timeout=self._timeout)
            except asyncio.TimeoutError:
                logger.warning(
                    "Callback %s.%s timed out after %.1fs",
                    type(handler).__name__, hook, self._timeout,
                )
            except Exception as e:
                logger.warning("Callback %s.%s failed: %s", type(handler).__name__, hook, e)

    async def on_chain_start(self, inputs: dict[str, Any]) -> None:
        await self._dispatch("on_chain_start", inputs)

    async def on_chain_end(self, outputs: dict[str, Any]) -> None:
        await self._dispatch("on_chain_end", outputs)

    async def on_chain_error(self, error: BaseException) -> None:
        await self._dispatch("on_chain_error", error)

    async def on_step_start(self, step: str, inputs: dict[str, Any]) -> None:
        await self._dispatch("on_step_start", step, inputs)

    async def on_step_end(self, step: str, outputs: dict[str, Any]) -> None:
        await self._dispatch("on_step_end", step, outputs)

    async def on_text(self, text: str) -> None:
        await self._dispatch("on_text", text)

    @asynccontextmanager
    async def step(self, name: str, inputs: dict[str, Any]) -> AsyncIterator[StepRecord]:
        """Emit step-start, run the block, emit step-end with record.outputs on success."""
        record = StepRecord(name)
        await self.on_step_start(name, inputs)
        yield record
        await self.on_step_end(name, record.outputs)

    async def call_capability(self, capability: str, awaitable: Awaitable[T]) -> T:
        """Await a capability call; wrap its failures in CapabilityError.

        Engine errors (ChainError) and cancellation pass through unchanged.
        """
        try:
            return await awaitable
        except ChainError:
            raise
        except Exception as e:
            raise CapabilityError(capability, e) from e

    def child(self, chain_type: str, extra_handlers: Sequence[ChainCallback] = ()) -> "RunManager":
        """Run manager for a nested chain: same handlers (plus extras), this run as parent."""
        has_logger = any(isinstance(h, LoggingCallback) for h in self._handlers)
        handlers = self._handlers + [
            h for h in extra_handlers
            if h not in self._handlers and not (has_logger and isinstance(h, LoggingCallback))
        ]
        return RunManager(
            handlers,
            RunInfo(chain_type=chain_type, parent_run_id=self._run.run_id),
            timeout=self._timeout,
        )


class CallbackManager:
    """Holds the handlers configured for a chain and opens RunManagers for each call."""

    def __init__(self, handlers: Optional[Sequence[ChainCallback]] = None, timeout: float = 5.0):
        self._handlers = list(handlers or [])
        self._timeout = timeout

    @property
    def handlers(self) -> list[ChainCallback]:
        return list(self._handlers)

    @property
    def timeout(self) -> float:
        return self._timeout

    def add_handler(self, handler: ChainCallback) -> None:
        self._handlers.append(handler)

    def start_run(self, chain_type: str, parent_run_id: Optional[str] = None) -> RunManager:
        return RunManager(
            self._handlers,
            RunInfo(chain_type=chain_type, parent_run_id=parent_run_id),
            timeout=self._timeout,
        )
