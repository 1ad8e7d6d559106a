"""Conversation buffer memory: rolling transcript of human/AI turns."""

from typing import Any, Optional

from ..exceptions import ChainConfigurationError, InvalidInputTypeError, MissingInputError
from ..schema import format_messages
from .base import ChatMessageHistory, InMemoryChatMessageHistory, Memory


class ConversationBufferMemory(Memory):
    """Stores every turn in a ChatMessageHistory and exposes it under memory_key.

    With ``k`` set, only the last k turns (2k messages) are loaded.
    With ``return_messages``, the raw ChatMessage list is loaded instead of text.
    """

    def __init__(
        self,
        chat_history: Optional[ChatMessageHistory] = None,
        human_prefix: str = "Human",
        ai_prefix: str = "AI",
        memory_key: str = "history",
        input_key: Optional[str] = None,
        output_key: Optional[str] = None,
        k: Optional[int] = None,
        return_messages: bool = False,
    ):
        if k is not None and k < 0:
            raise ValueError("k must be >= 0")
        self.chat_history = chat_history if chat_history is not None else InMemoryChatMessageHistory()
        self.human_prefix = human_prefix
        self.ai_prefix = ai_prefix
        self.memory_key = memory_key
        self.input_key = input_key
        self.output_key = output_key
        self.k = k
        self.return_messages = return_messages

    @property
    def memory_keys(self) -> list[str]:
        return [self.memory_key]

    async def load_memory_variables(self, inputs: dict[str, Any]) -> dict[str, Any]:
        messages = await self.chat_history.messages()
        if self.k is not None:
            messages = messages[-self.k * 2:] if self.k > 0 else []
        if self.return_messages:
            return {self.memory_key: messages}
        return {
            self.memory_key: format_messages(
                messages, human_prefix=self.human_prefix, ai_prefix=self.ai_prefix
            )
        }

    async def save_context(self, inputs: dict[str, Any], outputs: dict[str, Any]) -> None:
        user_text, ai_text = self._get_input_output(inputs, outputs)
        await self.chat_history.add_user_message(user_text)
        await self.chat_history.add_ai_message(ai_text)

    async def clear(self) -> None:
        await self.chat_history.clear()

    def _get_input_output(self, inputs: dict[str, Any], outputs: dict[str, Any]) -> tuple[str, str]:
        input_key = self.input_key
        if input_key is None:
            candidates = [k for k in inputs if k not in self.memory_keys]
            if len(candidates) != 1:
                raise ChainConfigurationError(
                    f"One input key expected to infer memory input, got {len(candidates)}; set input_key"
                )
            input_key = candidates[0]

        output_key = self.output_key
        if output_key is None:
            if len(outputs) != 1:
                raise ChainConfigurationError(
                    f"One output key expected to infer memory output, got {len(outputs)}; set output_key"
                )
            output_key = next(iter(outputs))

        if input_key not in inputs:
            raise MissingInputError(input_key)
        if output_key not in outputs:
            raise MissingInputError(output_key)
        user_text, ai_text = inputs[input_key], outputs[output_key]
        if not isinstance(user_text, str):
            raise InvalidInputTypeError(input_key, "a string", user_text)
        if not isinstance(ai_text, str):
            raise InvalidInputTypeError(output_key, "a string", ai_text)
        return user_text, ai_text
