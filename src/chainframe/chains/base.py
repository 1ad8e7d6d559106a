"""Abstract chain interface and the shared execution path (validation, callbacks, memory).

Subclasses implement ``_call``; callers use ``invoke`` (value map in, value map
out) or ``run`` (single value in, string out). Both are coroutines: the caller's
task is the execution context, so cancelling it (or wrapping the call in
``asyncio.timeout``) aborts the in-flight capability call and propagates
through every nesting level.
"""

import asyncio
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from ..callbacks.base import ChainCallback
from ..callbacks.handlers import LoggingCallback
from ..callbacks.manager import CallbackManager, RunManager
from ..config import get_settings
from ..exceptions import (
    ChainConfigurationError,
    InvalidInputTypeError,
    InvalidOutputTypeError,
    MissingInputError,
    RunNotSupportedError,
)
from ..memory.base import Memory
from ..memory.readonly import ReadOnlyMemory
from ..schema import ChainValues

RUN_INFO_KEY = "run_info"


@dataclass
class ChainConfig:
    """Optional construction settings shared by every chain.

    Attributes:
        callbacks: Observers notified (in this order) for every call.
        verbose: Attach a LoggingCallback. None = EngineSettings.VERBOSE.
        memory: State loaded before and saved after each successful call.
        callback_timeout: Seconds a coroutine hook may run. None = EngineSettings value.
    """

    callbacks: list[ChainCallback] = field(default_factory=list)
    verbose: Optional[bool] = None
    memory: Optional[Memory] = None
    callback_timeout: Optional[float] = None


class Chain(ABC):
    """Abstract interface for chains: invoke with inputs dict, return outputs dict."""

    def __init__(self, config: Optional[ChainConfig] = None):
        config = config or ChainConfig()
        settings = get_settings()
        self._memory = config.memory
        self._verbose = settings.VERBOSE if config.verbose is None else config.verbose
        timeout = config.callback_timeout
        if timeout is None:
            timeout = settings.CALLBACK_TIMEOUT_SECONDS
        handlers = list(config.callbacks)
        if self._verbose and not any(isinstance(h, LoggingCallback) for h in handlers):
            handlers.append(LoggingCallback())
        self._callback_manager = CallbackManager(handlers, timeout=timeout)

    @property
    @abstractmethod
    def input_keys(self) -> list[str]:
        """Keys the chain requires (memory-provided keys included)."""
        ...

    @property
    @abstractmethod
    def output_keys(self) -> list[str]:
        ...

    @property
    def chain_type(self) -> str:
        return type(self).__name__

    @property
    def memory(self) -> Optional[Memory]:
        return self._memory

    @property
    def verbose(self) -> bool:
        return self._verbose

    @property
    def callbacks(self) -> list[ChainCallback]:
        return self._callback_manager.handlers

    @property
    def prompt_input_keys(self) -> list[str]:
        """Input keys the caller must supply (those not provided by memory)."""
        memory_keys = set(self._memory.memory_keys) if self._memory is not None else set()
        return [k for k in self.input_keys if k not in memory_keys]

    @abstractmethod
    async def _call(self, inputs: ChainValues, run_manager: RunManager) -> ChainValues:
        """Run the chain-specific steps. inputs already contain memory variables."""
        ...

    def _validate_inputs(self, inputs: Mapping[str, Any]) -> None:
        if not isinstance(inputs, Mapping):
            raise InvalidInputTypeError("inputs", "a mapping", inputs)
        for key in self.prompt_input_keys:
            if key not in inputs:
                raise MissingInputError(key)

    def _start_run(
        self,
        callbacks: Optional[Sequence[ChainCallback]],
        parent: Optional[RunManager],
    ) -> RunManager:
        if parent is not None:
            return parent.child(self.chain_type, extra_handlers=self.callbacks + list(callbacks or []))
        manager = self._callback_manager
        if callbacks:
            manager = CallbackManager(self.callbacks + list(callbacks), timeout=manager.timeout)
        return manager.start_run(self.chain_type)

    async def invoke(
        self,
        inputs: Mapping[str, Any],
        *,
        callbacks: Optional[Sequence[ChainCallback]] = None,
        parent: Optional[RunManager] = None,
        include_run_info: bool = False,
    ) -> ChainValues:
        """Run the chain.

        Args:
            inputs: Value map holding every declared input key; extra keys are passed through.
            callbacks: Extra observers for this call only.
            parent: Run manager of the enclosing chain when called as a sub-step.
            include_run_info: Add the RunInfo under "run_info" in the outputs.

        Returns:
            A new value map with the chain's output keys.
        """
        self._validate_inputs(inputs)
        run_manager = self._start_run(callbacks, parent)
        await run_manager.on_chain_start(dict(inputs))

        values: ChainValues = dict(inputs)
        try:
            if self._memory is not None:
                loaded = await run_manager.call_capability(
                    "memory", self._memory.load_memory_variables(values)
                )
                values.update(loaded)
            outputs = await self._call(values, run_manager)
            if self._memory is not None:
                await run_manager.call_capability(
                    "memory", self._memory.save_context(dict(inputs), dict(outputs))
                )
        except (Exception, asyncio.CancelledError) as e:
            await run_manager.on_chain_error(e)
            raise

        result = dict(outputs)
        if include_run_info:
            result[RUN_INFO_KEY] = run_manager.run
        await run_manager.on_chain_end(result)
        return result

    async def __call__(self, inputs: Mapping[str, Any], **kwargs: Any) -> ChainValues:
        """Convenience: await chain(inputs) == await chain.invoke(inputs)."""
        return await self.invoke(inputs, **kwargs)

    async def run(self, value: Any, **kwargs: Any) -> str:
        """Single value in, string out. Requires exactly one input key and one output key.

        A mapping is passed to invoke() unchanged.
        """
        if len(self.output_keys) != 1:
            raise RunNotSupportedError(
                f"run() requires exactly one output key, got {len(self.output_keys)}"
            )
        if isinstance(value, Mapping):
            inputs = dict(value)
        else:
            keys = self.prompt_input_keys
            if len(keys) != 1:
                raise RunNotSupportedError(f"run() requires exactly one input key, got {len(keys)}")
            inputs = {keys[0]: value}

        outputs = await self.invoke(inputs, **kwargs)
        key = self.output_keys[0]
        output = outputs.get(key)
        if not isinstance(output, str):
            raise InvalidOutputTypeError(key, output)
        return output

    async def batch(
        self,
        inputs_list: Sequence[Mapping[str, Any]],
        *,
        max_concurrency: Optional[int] = None,
        callbacks: Optional[Sequence[ChainCallback]] = None,
    ) -> list[ChainValues]:
        """Run independent invoke() calls concurrently; results keep input order.

        The first failure cancels the outstanding calls and is re-raised.
        Chains with writable memory are rejected: their turns must be ordered by the caller.
        """
        if self._memory is not None and not isinstance(self._memory, ReadOnlyMemory):
            raise ChainConfigurationError(
                f"{self.chain_type} holds memory; call invoke() sequentially instead of batch()"
            )
        limit = max_concurrency or get_settings().BATCH_MAX_CONCURRENCY
        semaphore = asyncio.Semaphore(limit)

        async def _one(inputs: Mapping[str, Any]) -> ChainValues:
            async with semaphore:
                return await self.invoke(inputs, callbacks=callbacks)

        tasks = [asyncio.ensure_future(_one(inputs)) for inputs in inputs_list]
        try:
            return list(await asyncio.gather(*tasks))
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    def invoke_sync(self, inputs: Mapping[str, Any], **kwargs: Any) -> ChainValues:
        """Blocking invoke() for scripts; must not be called from a running event loop."""
        return asyncio.run(self.invoke(inputs, **kwargs))

    def run_sync(self, value: Any, **kwargs: Any) -> str:
        """Blocking run() for scripts; must not be called from a running event loop."""
        return asyncio.run(self.run(value, **kwargs))
