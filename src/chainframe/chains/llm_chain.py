"""LLM chain: prompt template + LLM -> formatted prompt -> completion text."""

from typing import Optional, Union

from ..callbacks.manager import RunManager
from ..llm.base import LLMClient
from ..prompts.template import PromptTemplate
from ..schema import ChainValues
from .base import Chain, ChainConfig


class LLMChain(Chain):
    """Chain that formats a prompt template with inputs and invokes the LLM.

    Steps: "prompt" (render) then "llm" (generate).
    """

    def __init__(
        self,
        llm: LLMClient,
        prompt: Union[PromptTemplate, str],
        output_key: str = "text",
        config: Optional[ChainConfig] = None,
    ):
        """
        Args:
            llm: LLM client.
            prompt: PromptTemplate, or a string with {variable} placeholders.
            output_key: Key under which the completion is returned.
            config: Callbacks, verbose flag, memory.
        """
        super().__init__(config)
        self._llm = llm
        self._prompt = prompt if isinstance(prompt, PromptTemplate) else PromptTemplate(prompt)
        self._output_key = output_key

    @property
    def llm(self) -> LLMClient:
        return self._llm

    @property
    def prompt(self) -> PromptTemplate:
        return self._prompt

    @property
    def input_keys(self) -> list[str]:
        return self._prompt.input_variables

    @property
    def output_keys(self) -> list[str]:
        return [self._output_key]

    @property
    def output_key(self) -> str:
        return self._output_key

    async def _call(self, inputs: ChainValues, run_manager: RunManager) -> ChainValues:
        async with run_manager.step("prompt", inputs) as step:
            text = self._prompt.format(inputs)
            step.outputs = {"prompt": text}
        await run_manager.on_text(f"Prompt after formatting:\n{text}")

        async with run_manager.step("llm", {"prompt": text}) as step:
            completion = await run_manager.call_capability("llm", self._llm.invoke(text))
            step.outputs = {self._output_key: completion}
        return {self._output_key: completion}

    async def predict(self, **kwargs) -> str:
        """Keyword-argument shortcut for invoke(); returns the completion text."""
        outputs = await self.invoke(kwargs)
        return outputs[self._output_key]
