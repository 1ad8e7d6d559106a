"""Embeddings: abstract provider and LangChain adapter."""

from .base import EmbeddingsProvider
from .langchain_provider import LangChainEmbeddingsProvider

__all__ = ["EmbeddingsProvider", "LangChainEmbeddingsProvider"]
