"""chainframe: a composable, cancellable chain execution engine for LLM pipelines.

The engine composes independently written steps (prompt formatting, model
calls, document refinement, moderation) into one observable unit of work with
a uniform calling convention:

- **Chains**: ``await chain.invoke(values) -> values`` and ``await chain.run(value) -> str``
- **Capabilities**: ``LLMClient``, ``EmbeddingsProvider``, ``Moderator``, ``Tool``
  (LangChain adapters included); the engine depends only on these interfaces
- **Prompts**: ``PromptTemplate`` with ``{variable}`` placeholders
- **Callbacks**: ordered lifecycle observers (chain start/end/error, step start/end)
- **Memory**: conversation history for stateful chains
- **Observability**: LLM call tracing

Quick Start:
    ```python
    from chainframe import ConversationChain, LangChainLLMClient
    from langchain_openai import ChatOpenAI

    chain = ConversationChain(LangChainLLMClient(ChatOpenAI()))
    answer = await chain.run("What is the meaning of life?")
    ```

Cancellation follows asyncio: cancel the awaiting task or wrap the call in
``asyncio.timeout(...)``.
"""

from .callbacks import ChainCallback, LoggingCallback, MetricsCallback, RunInfo
from .chains import (
    Chain,
    ChainConfig,
    ConversationChain,
    LLMChain,
    ModerationChain,
    ModerationGuard,
    RefineDocumentsChain,
    SequentialChain,
    StuffDocumentsChain,
    ToolChain,
    TransformChain,
    load_refine_summarization_chain,
    load_stuff_summarization_chain,
)
from .config import EngineSettings, configure_logging, get_settings
from .embeddings import EmbeddingsProvider, LangChainEmbeddingsProvider
from .exceptions import (
    CapabilityError,
    ChainConfigurationError,
    ChainError,
    ContentRejectedError,
    FrameworkError,
    InvalidInputTypeError,
    InvalidOutputTypeError,
    MissingInputError,
    RunNotSupportedError,
    TemplateRenderError,
    ToolNotFoundError,
)
from .llm import LangChainLLMClient, LLMClient
from .memory import ConversationBufferMemory, InMemoryChatMessageHistory, Memory
from .moderation import KeywordModerator, ModeratedLLMClient, Moderator
from .prompts import PromptTemplate
from .schema import ChainValues, ChatMessage, Document, ModerationVerdict
from .tools import LangChainTool, Tool, ToolRegistry

__all__ = [
    # Chains
    "Chain",
    "ChainConfig",
    "LLMChain",
    "ConversationChain",
    "RefineDocumentsChain",
    "load_refine_summarization_chain",
    "StuffDocumentsChain",
    "load_stuff_summarization_chain",
    "ModerationChain",
    "ModerationGuard",
    "SequentialChain",
    "TransformChain",
    "ToolChain",
    # Capabilities
    "LLMClient",
    "LangChainLLMClient",
    "EmbeddingsProvider",
    "LangChainEmbeddingsProvider",
    "Moderator",
    "KeywordModerator",
    "ModeratedLLMClient",
    "Tool",
    "LangChainTool",
    "ToolRegistry",
    # Data
    "ChainValues",
    "Document",
    "ChatMessage",
    "ModerationVerdict",
    "PromptTemplate",
    # Callbacks and memory
    "ChainCallback",
    "RunInfo",
    "LoggingCallback",
    "MetricsCallback",
    "Memory",
    "ConversationBufferMemory",
    "InMemoryChatMessageHistory",
    # Config
    "EngineSettings",
    "get_settings",
    "configure_logging",
    # Errors
    "FrameworkError",
    "ChainError",
    "MissingInputError",
    "InvalidInputTypeError",
    "InvalidOutputTypeError",
    "RunNotSupportedError",
    "ChainConfigurationError",
    "TemplateRenderError",
    "ContentRejectedError",
    "CapabilityError",
    "ToolNotFoundError",
]
