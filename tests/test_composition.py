"""Tests for SequentialChain, TransformChain, ToolChain and the tool registry."""

import pytest
from langchain_core.tools import tool

from conftest import RecordingLLM

from chainframe.chains import ChainConfig, LLMChain, SequentialChain, ToolChain, TransformChain
from chainframe.exceptions import (
    CapabilityError,
    ChainConfigurationError,
    InvalidOutputTypeError,
    ToolNotFoundError,
)
from chainframe.tools import LangChainTool, Tool, ToolRegistry


class UpperTool(Tool):
    name = "upper"
    description = "Uppercase the input"

    async def run(self, tool_input):
        return tool_input.upper()


class BrokenTool(Tool):
    name = "broken"
    description = "Always fails"

    async def run(self, tool_input):
        raise ValueError("bad tool input")


@tool
def word_count(text: str) -> int:
    """Count words in text."""
    return len(text.split())


@pytest.mark.asyncio
async def test_sequential_passes_outputs_forward(recorder):
    outline = LLMChain(RecordingLLM(["1. intro 2. body"]), "Outline {topic}", output_key="outline")
    draft = LLMChain(RecordingLLM(["Draft text"]), "Write from: {outline}", output_key="draft")
    chain = SequentialChain(
        [outline, draft], input_keys=["topic"], config=ChainConfig(callbacks=[recorder])
    )

    assert chain.output_keys == ["draft"]
    assert await chain.run("bees") == "Draft text"
    assert draft.llm.prompts == ["Write from: 1. intro 2. body"]
    starts = [p for _, e, p in recorder.log if e == "chain_start"]
    assert starts == ["SequentialChain", "LLMChain", "LLMChain"]


@pytest.mark.asyncio
async def test_sequential_return_all():
    a = TransformChain(["x"], ["y"], lambda v: {"y": v["x"] + "!"})
    b = TransformChain(["y"], ["z"], lambda v: {"z": v["y"] * 2})
    chain = SequentialChain([a, b], input_keys=["x"], return_all=True)
    assert await chain.invoke({"x": "hi"}) == {"y": "hi!", "z": "hi!hi!"}


def test_sequential_validates_keys_at_construction():
    a = TransformChain(["x"], ["y"], lambda v: {"y": 1})
    needs_w = TransformChain(["w"], ["z"], lambda v: {"z": 1})
    with pytest.raises(ChainConfigurationError):
        SequentialChain([], input_keys=["x"])
    with pytest.raises(ChainConfigurationError):
        SequentialChain([a, needs_w], input_keys=["x"])
    with pytest.raises(ChainConfigurationError):
        SequentialChain([a, a], input_keys=["x"])
    with pytest.raises(ChainConfigurationError):
        SequentialChain([a], input_keys=["x"], output_keys=["nope"])


@pytest.mark.asyncio
async def test_transform_accepts_async_functions():
    async def shout(values):
        return {"out": values["text"].upper()}

    chain = TransformChain(["text"], ["out"], shout)
    assert await chain.run("hey") == "HEY"


@pytest.mark.asyncio
async def test_transform_must_return_declared_keys():
    chain = TransformChain(["text"], ["out"], lambda v: {"other": 1})
    with pytest.raises(InvalidOutputTypeError) as exc_info:
        await chain.invoke({"text": "x"})
    assert exc_info.value.key == "out"
    not_a_dict = TransformChain(["text"], ["out"], lambda v: "out")
    with pytest.raises(InvalidOutputTypeError) as exc_info:
        await not_a_dict.invoke({"text": "x"})
    assert exc_info.value.key is None
    assert exc_info.value.expected == "a dict"


@pytest.mark.asyncio
async def test_transform_function_failure_wrapped(recorder):
    def explode(values):
        raise KeyError("missing field")

    async def explode_async(values):
        raise ValueError("bad value")

    chain = TransformChain(["text"], ["out"], explode, config=ChainConfig(callbacks=[recorder]))
    with pytest.raises(CapabilityError) as exc_info:
        await chain.invoke({"text": "x"})
    assert exc_info.value.capability == "transform"
    assert isinstance(exc_info.value.__cause__, KeyError)
    assert recorder.events("chain_error") == [("rec", "chain_error", "CapabilityError")]

    with pytest.raises(CapabilityError) as exc_info:
        await TransformChain(["text"], ["out"], explode_async).invoke({"text": "x"})
    assert isinstance(exc_info.value.__cause__, ValueError)


@pytest.mark.asyncio
async def test_tool_chain(recorder):
    chain = ToolChain(UpperTool(), config=ChainConfig(callbacks=[recorder]))
    assert chain.chain_type == "Tool[upper]"
    assert await chain.run("abc") == "ABC"
    assert ("rec", "step_start", "upper") in recorder.log


@pytest.mark.asyncio
async def test_tool_failure_wrapped():
    chain = ToolChain(BrokenTool())
    with pytest.raises(CapabilityError) as exc_info:
        await chain.run("x")
    assert exc_info.value.capability == "tool:broken"


@pytest.mark.asyncio
async def test_langchain_tool_adapter():
    adapted = LangChainTool(word_count)
    assert adapted.name == "word_count"
    assert "Count words" in adapted.description
    assert await adapted.run("one two three") == "3"
    assert await ToolChain(adapted).run("a b") == "2"


def test_registry_lookup():
    registry = ToolRegistry([UpperTool()])
    registry.register(LangChainTool(word_count))
    assert "upper" in registry
    assert len(registry) == 2
    assert registry.names() == ["upper", "word_count"]
    assert isinstance(registry.get("upper"), UpperTool)
    with pytest.raises(ToolNotFoundError) as exc_info:
        registry.get("missing")
    assert exc_info.value.available_tools == ["upper", "word_count"]


def test_registry_rejects_unnamed_tool():
    class Nameless(Tool):
        async def run(self, tool_input):
            return tool_input

    with pytest.raises(ValueError):
        ToolRegistry().register(Nameless())
