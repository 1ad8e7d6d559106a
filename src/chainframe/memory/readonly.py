"""Read-only view over another memory: loads, never writes."""

from typing import Any

from .base import Memory


class ReadOnlyMemory(Memory):
    """Shares another chain's memory without letting this chain modify it."""

    def __init__(self, memory: Memory):
        self._memory = memory

    @property
    def memory_keys(self) -> list[str]:
        return self._memory.memory_keys

    async def load_memory_variables(self, inputs: dict[str, Any]) -> dict[str, Any]:
        return await self._memory.load_memory_variables(inputs)

    async def save_context(self, inputs: dict[str, Any], outputs: dict[str, Any]) -> None:
        return None

    async def clear(self) -> None:
        return None
