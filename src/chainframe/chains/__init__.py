"""Chains: compose prompt formatting, model calls, moderation and post-processing.

This module provides:
- Chain / ChainConfig: the shared contract (invoke, run, batch) and construction options
- LLMChain: prompt -> LLM -> text
- ConversationChain: LLM chain with rolling conversation memory
- RefineDocumentsChain: iterative summarization over an ordered document sequence
- StuffDocumentsChain: all documents joined into a single LLM call
- ModerationChain / ModerationGuard: content policy checks, standalone or wrapping a chain
- SequentialChain, TransformChain, ToolChain: composition helpers
"""

from .base import RUN_INFO_KEY, Chain, ChainConfig
from .conversation import DEFAULT_CONVERSATION_PROMPT, ConversationChain
from .llm_chain import LLMChain
from .moderation import ModerationChain, ModerationGuard
from .refine import (
    INITIAL_SUMMARY_PROMPT,
    REFINE_SUMMARY_PROMPT,
    RefineDocumentsChain,
    load_refine_summarization_chain,
)
from .sequential import SequentialChain
from .stuff import STUFF_SUMMARY_PROMPT, StuffDocumentsChain, load_stuff_summarization_chain
from .tool_chain import ToolChain
from .transform import TransformChain

__all__ = [
    # Base
    "Chain",
    "ChainConfig",
    "RUN_INFO_KEY",
    # Chain implementations
    "LLMChain",
    "ConversationChain",
    "DEFAULT_CONVERSATION_PROMPT",
    "RefineDocumentsChain",
    "load_refine_summarization_chain",
    "REFINE_SUMMARY_PROMPT",
    "INITIAL_SUMMARY_PROMPT",
    "StuffDocumentsChain",
    "load_stuff_summarization_chain",
    "STUFF_SUMMARY_PROMPT",
    "ModerationChain",
    "ModerationGuard",
    # Composition
    "SequentialChain",
    "TransformChain",
    "ToolChain",
]
