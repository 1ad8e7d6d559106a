"""Sequential chain: run sub-chains in order, each seeing the inputs plus all previous outputs."""

from typing import Optional, Sequence

from ..callbacks.manager import RunManager
from ..exceptions import ChainConfigurationError
from ..schema import ChainValues
from .base import Chain, ChainConfig


class SequentialChain(Chain):
    """Run a sequence of chains; key compatibility is checked at construction."""

    def __init__(
        self,
        chains: Sequence[Chain],
        input_keys: Sequence[str],
        output_keys: Optional[Sequence[str]] = None,
        return_all: bool = False,
        config: Optional[ChainConfig] = None,
    ):
        """
        Args:
            chains: Sub-chains, run strictly in order.
            input_keys: Keys the caller supplies.
            output_keys: Keys to return. Default: last chain's outputs (or all produced keys with return_all).
            return_all: Return every key produced by the sub-chains.
        """
        super().__init__(config)
        if not chains:
            raise ChainConfigurationError("SequentialChain requires at least one chain")

        memory_keys = self.memory.memory_keys if self.memory is not None else []
        overlap = [k for k in input_keys if k in memory_keys]
        if overlap:
            raise ChainConfigurationError(f"Overlapping input keys: {', '.join(overlap)}")

        known = list(input_keys) + list(memory_keys)
        for chain in chains:
            missing = [k for k in chain.prompt_input_keys if k not in known]
            if missing:
                raise ChainConfigurationError(
                    f"Missing required input keys for {chain.chain_type}: {', '.join(missing)}"
                )
            overlap = [k for k in chain.output_keys if k in known]
            if overlap:
                raise ChainConfigurationError(f"Overlapping output keys: {', '.join(overlap)}")
            known.extend(chain.output_keys)

        if output_keys is None:
            if return_all:
                output_keys = [k for k in known if k not in input_keys and k not in memory_keys]
            else:
                output_keys = list(chains[-1].output_keys)
        else:
            unknown = [k for k in output_keys if k not in known]
            if unknown:
                raise ChainConfigurationError(f"Output keys never produced: {', '.join(unknown)}")

        self._chains = list(chains)
        self._input_keys = list(input_keys)
        self._output_keys = list(output_keys)

    @property
    def chains(self) -> list[Chain]:
        return list(self._chains)

    @property
    def input_keys(self) -> list[str]:
        return list(self._input_keys)

    @property
    def output_keys(self) -> list[str]:
        return list(self._output_keys)

    async def _call(self, inputs: ChainValues, run_manager: RunManager) -> ChainValues:
        known = dict(inputs)
        for i, chain in enumerate(self._chains):
            async with run_manager.step(f"{i}:{chain.chain_type}", {"keys": sorted(known)}) as step:
                outputs = await chain.invoke(known, parent=run_manager)
                step.outputs = outputs
            known.update(outputs)
        return {k: known[k] for k in self._output_keys}
