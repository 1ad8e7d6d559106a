"""Tool interface, LangChain tool adapter, and registry for lookup by name."""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from langchain_core.tools import BaseTool

from ..exceptions import ToolNotFoundError


class Tool(ABC):
    """Named capability with textual input and output."""

    name: str = ""
    description: str = ""

    @abstractmethod
    async def run(self, tool_input: str) -> str:
        """Run the tool and return its textual output."""
        ...


class LangChainTool(Tool):
    """Adapts a langchain_core BaseTool (single string input) to Tool."""

    def __init__(self, tool: BaseTool):
        self._tool = tool
        self.name = tool.name
        self.description = tool.description

    async def run(self, tool_input: str) -> str:
        result = await self._tool.ainvoke(tool_input)
        return result if isinstance(result, str) else str(result)


class ToolRegistry:
    """Tools by stable name."""

    def __init__(self, tools: Optional[Iterable[Tool]] = None):
        self._tools: dict[str, Tool] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: Tool) -> None:
        if not tool.name:
            raise ValueError("Tool name must be a non-empty string")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool:
        try:
            return self._tools[name]
        except KeyError:
            raise ToolNotFoundError(name, self.names()) from None

    def names(self) -> list[str]:
        return list(self._tools)

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)
