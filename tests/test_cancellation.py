"""Tests for cancellation and deadlines propagating through chains."""

import asyncio

import pytest

from conftest import BlockingLLM, RecordingCallback, RecordingLLM

from chainframe.chains import ChainConfig, ConversationChain, LLMChain, SequentialChain
from chainframe.chains import load_refine_summarization_chain
from chainframe.schema import Document


@pytest.mark.asyncio
async def test_cancel_aborts_inflight_llm_call(recorder):
    llm = BlockingLLM()
    chain = LLMChain(llm=llm, prompt="{a}", config=ChainConfig(callbacks=[recorder]))

    task = asyncio.ensure_future(chain.invoke({"a": "x"}))
    await asyncio.wait_for(llm.started.wait(), timeout=5)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert llm.cancelled is True
    assert recorder.events("chain_end") == []
    assert recorder.events("chain_error") == [("rec", "chain_error", "CancelledError")]


@pytest.mark.asyncio
async def test_deadline_surfaces_as_timeout(recorder):
    llm = BlockingLLM()
    chain = LLMChain(llm=llm, prompt="{a}", config=ChainConfig(callbacks=[recorder]))

    with pytest.raises(asyncio.TimeoutError):
        await asyncio.wait_for(chain.invoke({"a": "x"}), timeout=0.05)

    assert llm.cancelled is True
    assert recorder.events("chain_end") == []
    assert len(recorder.events("chain_error")) == 1


@pytest.mark.asyncio
async def test_cancellation_propagates_through_nested_chains():
    log = []
    recorder = RecordingCallback(log)
    llm = BlockingLLM()
    first = LLMChain(llm=RecordingLLM(["draft"]), prompt="{topic}", output_key="draft")
    second = LLMChain(llm=llm, prompt="Polish: {draft}", output_key="final")
    chain = SequentialChain(
        [first, second],
        input_keys=["topic"],
        config=ChainConfig(callbacks=[recorder]),
    )

    task = asyncio.ensure_future(chain.invoke({"topic": "bees"}))
    await asyncio.wait_for(llm.started.wait(), timeout=5)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert llm.cancelled is True
    # inner LLMChain fails first, then the enclosing SequentialChain
    assert recorder.events("chain_error") == [
        ("rec", "chain_error", "CancelledError"),
        ("rec", "chain_error", "CancelledError"),
    ]
    ends = [payload for _, event, payload in log if event == "chain_end"]
    assert ends == ["LLMChain"]


@pytest.mark.asyncio
async def test_cancelled_refine_returns_no_partial_summary(recorder):
    class BlocksOnSecondCall(BlockingLLM):
        def __init__(self):
            super().__init__()
            self.calls = 0

        async def invoke(self, prompt, **kwargs):
            self.calls += 1
            if self.calls == 1:
                return "first summary"
            return await super().invoke(prompt, **kwargs)

    llm = BlocksOnSecondCall()
    chain = load_refine_summarization_chain(llm, config=ChainConfig(callbacks=[recorder]))
    docs = [Document(page_content="one"), Document(page_content="two")]

    task = asyncio.ensure_future(chain.invoke({"input_documents": docs}))
    await asyncio.wait_for(llm.started.wait(), timeout=5)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert llm.calls == 2
    ends = [payload for _, event, payload in recorder.log if event == "chain_end"]
    assert "RefineDocumentsChain" not in ends


@pytest.mark.asyncio
async def test_cancelled_turn_leaves_history_unchanged():
    llm = BlockingLLM()
    chain = ConversationChain(llm=llm)

    task = asyncio.ensure_future(chain.run("Hello"))
    await asyncio.wait_for(llm.started.wait(), timeout=5)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert await chain.memory.chat_history.messages() == []
