"""Tools: interface, LangChain adapter, registry."""

from .base import LangChainTool, Tool, ToolRegistry

__all__ = ["Tool", "LangChainTool", "ToolRegistry"]
