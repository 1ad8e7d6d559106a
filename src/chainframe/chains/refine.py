"""Refine documents chain: fold an ordered document sequence into one running summary.

For each document in order, the refine chain sees the summary so far plus the
document text and returns the new summary. The first failure aborts the whole
call; there is no partial summary.
"""

from dataclasses import replace
from typing import Optional, Union

from ..callbacks.manager import RunManager
from ..exceptions import ChainConfigurationError, InvalidOutputTypeError
from ..llm.base import LLMClient
from ..prompts.template import PromptTemplate, format_document
from ..schema import ChainValues, get_documents
from .base import Chain, ChainConfig
from .llm_chain import LLMChain

REFINE_SUMMARY_PROMPT = """Your job is to produce a final summary
We have provided an existing summary up to a certain point: "{existing_answer}"
We have the opportunity to refine the existing summary
(only if needed) with some more context below.
------------
"{context}"
------------

Given the new context, refine the original summary
If the context isn't useful, return the original summary.

REFINED SUMMARY:"""

INITIAL_SUMMARY_PROMPT = """Write a concise summary of the following:


"{context}"


CONCISE SUMMARY:"""


class RefineDocumentsChain(Chain):
    """Iterative summarization over documents, strictly in sequence order."""

    def __init__(
        self,
        refine_chain: Chain,
        initial_chain: Optional[Chain] = None,
        input_key: str = "input_documents",
        document_variable_name: str = "context",
        summary_variable_name: str = "existing_answer",
        document_prompt: Union[PromptTemplate, str] = "{page_content}",
        output_key: str = "text",
        config: Optional[ChainConfig] = None,
    ):
        """
        Args:
            refine_chain: Chain run per document with the summary so far and the document text.
            initial_chain: Optional chain for the first document (no summary yet).
            input_key: Input key holding the sequence of Document.
            document_variable_name: Variable the rendered document is passed as.
            summary_variable_name: Variable the running summary is passed as.
            document_prompt: Renders one document; variables are page_content and metadata keys.
            output_key: Key of the final summary.
        """
        super().__init__(config)
        for name, chain in (("refine_chain", refine_chain), ("initial_chain", initial_chain)):
            if chain is None:
                continue
            if len(chain.output_keys) != 1:
                raise ChainConfigurationError(f"{name} must have exactly one output key")
            if document_variable_name not in chain.input_keys:
                raise ChainConfigurationError(
                    f"{name} does not take document variable '{document_variable_name}'"
                )
        self._refine_chain = refine_chain
        self._initial_chain = initial_chain
        self._input_key = input_key
        self._document_variable_name = document_variable_name
        self._summary_variable_name = summary_variable_name
        self._document_prompt = (
            document_prompt if isinstance(document_prompt, PromptTemplate)
            else PromptTemplate(document_prompt)
        )
        self._output_key = output_key

    @property
    def input_keys(self) -> list[str]:
        return [self._input_key]

    @property
    def output_keys(self) -> list[str]:
        return [self._output_key]

    async def _call(self, inputs: ChainValues, run_manager: RunManager) -> ChainValues:
        docs = get_documents(inputs, self._input_key)
        rest = {k: v for k, v in inputs.items() if k != self._input_key}

        summary = ""
        for i, doc in enumerate(docs):
            if i == 0 and self._initial_chain is not None:
                chain = self._initial_chain
            else:
                chain = self._refine_chain
            values = dict(rest)
            values[self._document_variable_name] = format_document(doc, self._document_prompt)
            if chain is self._refine_chain:
                values[self._summary_variable_name] = summary

            async with run_manager.step(f"document_{i}", {"index": i, "summary": summary}) as step:
                outputs = await chain.invoke(values, parent=run_manager)
                key = chain.output_keys[0]
                result = outputs.get(key)
                if not isinstance(result, str):
                    raise InvalidOutputTypeError(key, result)
                summary = result
                step.outputs = {"summary": summary}

        return {self._output_key: summary.strip()}


def load_refine_summarization_chain(
    llm: LLMClient,
    refine_prompt: Union[PromptTemplate, str] = REFINE_SUMMARY_PROMPT,
    initial_prompt: Optional[Union[PromptTemplate, str]] = None,
    config: Optional[ChainConfig] = None,
) -> RefineDocumentsChain:
    """Build a refine summarization chain.

    Without initial_prompt every document goes through the refine prompt, starting
    from an empty summary. Pass INITIAL_SUMMARY_PROMPT to summarize the first document
    from scratch instead.
    """
    step_config = replace(config, memory=None) if config is not None else None
    refine_chain = LLMChain(llm, refine_prompt, config=step_config)
    initial_chain = LLMChain(llm, initial_prompt, config=step_config) if initial_prompt is not None else None
    return RefineDocumentsChain(refine_chain, initial_chain=initial_chain, config=config)
