"""Conversation chain: LLM chain with a rolling transcript in memory."""

from dataclasses import replace
from typing import Optional, Union

from ..exceptions import ChainConfigurationError
from ..llm.base import LLMClient
from ..memory.buffer import ConversationBufferMemory
from ..prompts.template import PromptTemplate
from .base import ChainConfig
from .llm_chain import LLMChain

DEFAULT_CONVERSATION_PROMPT = """The following is a friendly conversation between a human and an AI. The AI is talkative and provides lots of specific details from its context. If the AI does not know the answer to a question, it truthfully says it does not know.

Current conversation:
{history}
Human: {input}
AI:"""


class ConversationChain(LLMChain):
    """Chat over a single input key; each successful turn is appended to memory.

    Memory defaults to a ConversationBufferMemory owned by this instance.
    Not safe for concurrent calls on the same instance: turn order is the caller's.
    """

    def __init__(
        self,
        llm: LLMClient,
        prompt: Union[PromptTemplate, str] = DEFAULT_CONVERSATION_PROMPT,
        input_key: str = "input",
        output_key: str = "response",
        config: Optional[ChainConfig] = None,
    ):
        config = config or ChainConfig()
        if config.memory is None:
            config = replace(
                config,
                memory=ConversationBufferMemory(input_key=input_key, output_key=output_key),
            )
        super().__init__(llm, prompt, output_key=output_key, config=config)
        self._input_key = input_key

        memory = self.memory
        if isinstance(memory, ConversationBufferMemory):
            # the turn is saved from this chain's own keys, never inferred from caller extras
            if memory.input_key is None:
                memory.input_key = input_key
            if memory.output_key is None:
                memory.output_key = output_key
            if (memory.input_key, memory.output_key) != (input_key, output_key):
                raise ChainConfigurationError(
                    f"Memory saves ({memory.input_key!r}, {memory.output_key!r}) but the chain "
                    f"uses input_key={input_key!r}, output_key={output_key!r}"
                )

        memory_keys = memory.memory_keys
        if input_key in memory_keys:
            raise ChainConfigurationError(
                f"Input key '{input_key}' overlaps memory keys {memory_keys}"
            )
        expected = set(memory_keys) | {input_key}
        found = set(self.prompt.input_variables)
        if found != expected:
            raise ChainConfigurationError(
                f"Prompt variables {sorted(found)} must match memory keys plus input key {sorted(expected)}"
            )

    @property
    def input_keys(self) -> list[str]:
        return [self._input_key]
