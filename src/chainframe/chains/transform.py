"""Transform chain: a plain (sync or async) function as a chain step."""

import inspect
from typing import Any, Awaitable, Callable, Optional, Sequence, Union

from ..callbacks.manager import RunManager
from ..exceptions import InvalidOutputTypeError
from ..schema import ChainValues
from .base import Chain, ChainConfig

TransformFunc = Callable[[ChainValues], Union[ChainValues, Awaitable[ChainValues]]]


class TransformChain(Chain):
    """Wraps a function that maps input values to output values.

    Exceptions raised by the function surface as CapabilityError("transform");
    a result that is not a dict holding every output key raises InvalidOutputTypeError.
    """

    def __init__(
        self,
        input_keys: Sequence[str],
        output_keys: Sequence[str],
        transform: TransformFunc,
        config: Optional[ChainConfig] = None,
    ):
        super().__init__(config)
        self._input_keys = list(input_keys)
        self._output_keys = list(output_keys)
        self._transform = transform

    @property
    def input_keys(self) -> list[str]:
        return list(self._input_keys)

    @property
    def output_keys(self) -> list[str]:
        return list(self._output_keys)

    async def _apply(self, inputs: ChainValues) -> Any:
        result = self._transform(dict(inputs))
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _call(self, inputs: ChainValues, run_manager: RunManager) -> ChainValues:
        async with run_manager.step("transform", inputs) as step:
            result = await run_manager.call_capability("transform", self._apply(inputs))
            if not isinstance(result, dict):
                raise InvalidOutputTypeError(None, result, expected="a dict")
            for key in self._output_keys:
                if key not in result:
                    raise InvalidOutputTypeError(key, None, expected="present in the transform result")
            step.outputs = result
        return dict(result)
