"""Tests for RefineDocumentsChain and load_refine_summarization_chain."""

import pytest

from conftest import FailingLLM, RecordingLLM

from chainframe.chains import (
    INITIAL_SUMMARY_PROMPT,
    ChainConfig,
    LLMChain,
    RefineDocumentsChain,
    TransformChain,
    load_refine_summarization_chain,
)
from chainframe.exceptions import (
    CapabilityError,
    ChainConfigurationError,
    InvalidInputTypeError,
    InvalidOutputTypeError,
)
from chainframe.schema import Document

DOCS = [
    Document(page_content="Bees pollinate flowers."),
    Document(page_content="Bees make honey."),
    Document(page_content="Honey never spoils."),
]


@pytest.mark.asyncio
async def test_each_step_sees_previous_summary(recorder):
    llm = RecordingLLM(["S1", "S2", "S3"])
    chain = load_refine_summarization_chain(llm, config=ChainConfig(callbacks=[recorder]))

    out = await chain.invoke({"input_documents": DOCS})

    assert out == {"text": "S3"}
    assert len(llm.prompts) == 3
    assert 'existing summary up to a certain point: ""' in llm.prompts[0]
    assert "Bees pollinate flowers." in llm.prompts[0]
    assert '"S1"' in llm.prompts[1] and "Bees make honey." in llm.prompts[1]
    assert '"S2"' in llm.prompts[2] and "Honey never spoils." in llm.prompts[2]
    steps = [p for _, e, p in recorder.log if e == "step_start" and p.startswith("document_")]
    assert steps == ["document_0", "document_1", "document_2"]


@pytest.mark.asyncio
async def test_document_order_matters():
    forward = RecordingLLM(["a", "b", "c"])
    backward = RecordingLLM(["a", "b", "c"])
    await load_refine_summarization_chain(forward).run(DOCS)
    await load_refine_summarization_chain(backward).run(list(reversed(DOCS)))
    assert forward.prompts != backward.prompts
    assert "Bees pollinate flowers." in forward.prompts[0]
    assert "Honey never spoils." in backward.prompts[0]


@pytest.mark.asyncio
async def test_final_summary_is_trimmed():
    chain = load_refine_summarization_chain(RecordingLLM(["  first  ", "\n final summary \n"]))
    assert await chain.run(DOCS[:2]) == "final summary"


@pytest.mark.asyncio
async def test_empty_document_list_returns_empty_summary(recording_llm):
    chain = load_refine_summarization_chain(recording_llm)
    assert await chain.run([]) == ""
    assert recording_llm.prompts == []


@pytest.mark.asyncio
async def test_failure_aborts_without_partial_summary(recorder):
    class FailsOnSecond(RecordingLLM):
        async def invoke(self, prompt, **kwargs):
            if len(self.prompts) == 1:
                self.prompts.append(prompt)
                raise TimeoutError("provider timeout")
            return await super().invoke(prompt, **kwargs)

    llm = FailsOnSecond(["S1", "S2", "S3"])
    chain = load_refine_summarization_chain(llm, config=ChainConfig(callbacks=[recorder]))

    with pytest.raises(CapabilityError):
        await chain.invoke({"input_documents": DOCS})

    assert len(llm.prompts) == 2
    ends = [p for _, e, p in recorder.log if e == "chain_end"]
    assert "RefineDocumentsChain" not in ends


@pytest.mark.asyncio
async def test_initial_prompt_used_for_first_document():
    llm = RecordingLLM(["first", "second"])
    chain = load_refine_summarization_chain(llm, initial_prompt=INITIAL_SUMMARY_PROMPT)
    assert await chain.run(DOCS[:2]) == "second"
    assert llm.prompts[0].startswith("Write a concise summary")
    assert "existing summary" not in llm.prompts[0]
    assert '"first"' in llm.prompts[1]


@pytest.mark.asyncio
async def test_document_prompt_renders_metadata():
    llm = RecordingLLM()
    refine = LLMChain(llm, "{existing_answer}|{context}")
    chain = RefineDocumentsChain(refine, document_prompt="[{source}] {page_content}")
    await chain.run([Document(page_content="body", metadata={"source": "a.md"})])
    assert llm.prompts == ["|[a.md] body"]


@pytest.mark.asyncio
async def test_extra_inputs_reach_sub_chains():
    llm = RecordingLLM()
    refine = LLMChain(llm, "({language}) {existing_answer} {context}")
    chain = RefineDocumentsChain(refine)
    await chain.invoke({"input_documents": DOCS[:1], "language": "French"})
    assert llm.prompts[0].startswith("(French)")


@pytest.mark.asyncio
@pytest.mark.parametrize("bad", ["just a string", 42, [Document(page_content="ok"), "not a doc"]])
async def test_invalid_documents_rejected(recording_llm, bad):
    chain = load_refine_summarization_chain(recording_llm)
    with pytest.raises(InvalidInputTypeError):
        await chain.invoke({"input_documents": bad})
    assert recording_llm.prompts == []


@pytest.mark.asyncio
async def test_non_string_sub_chain_output_rejected():
    refine = TransformChain(["context", "existing_answer"], ["n"], lambda v: {"n": 1})
    chain = RefineDocumentsChain(refine)
    with pytest.raises(InvalidOutputTypeError):
        await chain.run(DOCS[:1])


def test_sub_chain_must_take_document_variable(recording_llm):
    with pytest.raises(ChainConfigurationError):
        RefineDocumentsChain(LLMChain(recording_llm, "{existing_answer} {text}"))


@pytest.mark.asyncio
async def test_capability_failure_on_first_document():
    llm = FailingLLM()
    chain = load_refine_summarization_chain(llm)
    with pytest.raises(CapabilityError):
        await chain.run(DOCS)
    assert llm.calls == 1
