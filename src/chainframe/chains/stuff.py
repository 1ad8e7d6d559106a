"""Stuff documents chain: render every document, join them, and answer with one LLM chain call."""

from dataclasses import replace
from typing import Optional, Union

from ..callbacks.manager import RunManager
from ..exceptions import ChainConfigurationError
from ..llm.base import LLMClient
from ..prompts.template import PromptTemplate, format_document
from ..schema import ChainValues, get_documents
from .base import Chain, ChainConfig
from .llm_chain import LLMChain
from .refine import INITIAL_SUMMARY_PROMPT

# One-shot summary over all documents; same wording as the refine chain's first step.
STUFF_SUMMARY_PROMPT = INITIAL_SUMMARY_PROMPT


class StuffDocumentsChain(Chain):
    """Joins all documents into one variable and runs the wrapped chain once.

    Cheaper than refining but bounded by the model's context window. An empty
    document sequence returns "" without calling the wrapped chain.
    """

    def __init__(
        self,
        llm_chain: Chain,
        input_key: str = "input_documents",
        document_variable_name: str = "context",
        document_prompt: Union[PromptTemplate, str] = "{page_content}",
        separator: str = "\n\n",
        config: Optional[ChainConfig] = None,
    ):
        """
        Args:
            llm_chain: Chain run once with the joined documents.
            input_key: Input key holding the sequence of Document.
            document_variable_name: Variable the joined text is passed as.
            document_prompt: Renders one document; variables are page_content and metadata keys.
            separator: Placed between rendered documents.
        """
        super().__init__(config)
        if len(llm_chain.output_keys) != 1:
            raise ChainConfigurationError("llm_chain must have exactly one output key")
        if document_variable_name not in llm_chain.input_keys:
            raise ChainConfigurationError(
                f"llm_chain does not take document variable '{document_variable_name}'"
            )
        self._llm_chain = llm_chain
        self._input_key = input_key
        self._document_variable_name = document_variable_name
        self._document_prompt = (
            document_prompt if isinstance(document_prompt, PromptTemplate)
            else PromptTemplate(document_prompt)
        )
        self._separator = separator

    @property
    def llm_chain(self) -> Chain:
        return self._llm_chain

    @property
    def input_keys(self) -> list[str]:
        extra = [
            k for k in self._llm_chain.prompt_input_keys
            if k not in (self._document_variable_name, self._input_key)
        ]
        return [self._input_key] + extra

    @property
    def output_keys(self) -> list[str]:
        return self._llm_chain.output_keys

    async def _call(self, inputs: ChainValues, run_manager: RunManager) -> ChainValues:
        docs = get_documents(inputs, self._input_key)
        output_key = self._llm_chain.output_keys[0]
        if not docs:
            return {output_key: ""}

        values = {k: v for k, v in inputs.items() if k != self._input_key}
        async with run_manager.step("combine", {"documents": len(docs)}) as step:
            joined = self._separator.join(format_document(doc, self._document_prompt) for doc in docs)
            values[self._document_variable_name] = joined
            step.outputs = {self._document_variable_name: joined}

        outputs = await self._llm_chain.invoke(values, parent=run_manager)
        return {output_key: outputs[output_key]}


def load_stuff_summarization_chain(
    llm: LLMClient,
    prompt: Union[PromptTemplate, str] = STUFF_SUMMARY_PROMPT,
    config: Optional[ChainConfig] = None,
) -> StuffDocumentsChain:
    """Build a summarization chain that sends every document to the model in a single call."""
    step_config = replace(config, memory=None) if config is not None else None
    return StuffDocumentsChain(LLMChain(llm, prompt, config=step_config), config=config)
