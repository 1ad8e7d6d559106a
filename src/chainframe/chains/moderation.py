"""Moderation chains: a standalone moderation step and a guard that wraps any chain."""

from typing import Optional

from ..callbacks.manager import RunManager
from ..exceptions import ChainConfigurationError, ContentRejectedError
from ..moderation.base import Moderator
from ..schema import ChainValues, ModerationVerdict, get_string
from .base import Chain, ChainConfig


async def _moderate(moderator: Moderator, text: str, run_manager: RunManager) -> ModerationVerdict:
    async with run_manager.step("moderation", {"text": text}) as step:
        verdict = await run_manager.call_capability("moderator", moderator.check(text))
        step.outputs = {"passed": verdict.passed, "reason": verdict.reason}
    if not verdict.passed:
        raise ContentRejectedError(verdict.reason, verdict)
    return verdict


class ModerationChain(Chain):
    """Checks input text; returns it (redacted when the moderator redacts) or raises ContentRejectedError."""

    def __init__(
        self,
        moderator: Moderator,
        input_key: str = "input",
        output_key: str = "output",
        use_redacted: bool = True,
        config: Optional[ChainConfig] = None,
    ):
        super().__init__(config)
        self._moderator = moderator
        self._input_key = input_key
        self._output_key = output_key
        self._use_redacted = use_redacted

    @property
    def input_keys(self) -> list[str]:
        return [self._input_key]

    @property
    def output_keys(self) -> list[str]:
        return [self._output_key]

    async def _call(self, inputs: ChainValues, run_manager: RunManager) -> ChainValues:
        text = get_string(inputs, self._input_key)
        verdict = await _moderate(self._moderator, text, run_manager)
        if self._use_redacted and verdict.redacted_text is not None:
            text = verdict.redacted_text
        return {self._output_key: text}


class ModerationGuard(Chain):
    """Decorator over another chain: moderate first, forward only if the text passes.

    The wrapped chain is held by reference and never modified; guards nest.
    A rejected verdict raises ContentRejectedError without invoking the wrapped chain.
    """

    def __init__(
        self,
        moderator: Moderator,
        inner: Chain,
        input_key: Optional[str] = None,
        use_redacted: bool = True,
        config: Optional[ChainConfig] = None,
    ):
        """
        Args:
            moderator: Moderator deciding on the candidate text.
            inner: Chain to protect.
            input_key: Input holding the candidate text. Defaults to inner's only input key.
            use_redacted: Forward the moderator's redacted text instead of the original.
        """
        if config is not None and config.memory is not None:
            raise ChainConfigurationError("ModerationGuard does not hold memory; configure it on the inner chain")
        super().__init__(config)
        keys = inner.prompt_input_keys
        if input_key is None:
            if len(keys) != 1:
                raise ChainConfigurationError(
                    f"Cannot infer input_key: {inner.chain_type} has input keys {keys}"
                )
            input_key = keys[0]
        elif input_key not in keys:
            raise ChainConfigurationError(f"{inner.chain_type} does not take input key '{input_key}'")
        self._moderator = moderator
        self._inner = inner
        self._input_key = input_key
        self._use_redacted = use_redacted

    @property
    def inner(self) -> Chain:
        return self._inner

    @property
    def input_keys(self) -> list[str]:
        return self._inner.prompt_input_keys

    @property
    def output_keys(self) -> list[str]:
        return self._inner.output_keys

    async def _call(self, inputs: ChainValues, run_manager: RunManager) -> ChainValues:
        text = get_string(inputs, self._input_key)
        verdict = await _moderate(self._moderator, text, run_manager)

        forwarded = dict(inputs)
        if self._use_redacted and verdict.redacted_text is not None:
            forwarded[self._input_key] = verdict.redacted_text
        return await self._inner.invoke(forwarded, parent=run_manager)
