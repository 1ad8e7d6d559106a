"""Tool chain: run a named tool on one input value."""

from typing import Optional

from ..callbacks.manager import RunManager
from ..schema import ChainValues, get_string
from ..tools.base import Tool
from .base import Chain, ChainConfig


class ToolChain(Chain):
    """Feeds input_key to the tool and returns its output under output_key."""

    def __init__(
        self,
        tool: Tool,
        input_key: str = "input",
        output_key: str = "output",
        config: Optional[ChainConfig] = None,
    ):
        super().__init__(config)
        self._tool = tool
        self._input_key = input_key
        self._output_key = output_key

    @property
    def chain_type(self) -> str:
        return f"Tool[{self._tool.name}]"

    @property
    def input_keys(self) -> list[str]:
        return [self._input_key]

    @property
    def output_keys(self) -> list[str]:
        return [self._output_key]

    async def _call(self, inputs: ChainValues, run_manager: RunManager) -> ChainValues:
        tool_input = get_string(inputs, self._input_key)
        async with run_manager.step(self._tool.name, {"input": tool_input}) as step:
            output = await run_manager.call_capability(
                f"tool:{self._tool.name}", self._tool.run(tool_input)
            )
            step.outputs = {self._output_key: output}
        return {self._output_key: output}
