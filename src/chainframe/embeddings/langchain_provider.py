"""Embeddings provider backed by any LangChain Embeddings implementation."""

from typing import Sequence

from langchain_core.embeddings import Embeddings

from .base import EmbeddingsProvider, Vector


class LangChainEmbeddingsProvider(EmbeddingsProvider):
    """Wraps langchain_core Embeddings (OpenAIEmbeddings, DeterministicFakeEmbedding, ...)."""

    def __init__(self, embeddings: Embeddings):
        self._embeddings = embeddings

    @property
    def embeddings(self) -> Embeddings:
        return self._embeddings

    async def embed_documents(self, texts: Sequence[str]) -> list[Vector]:
        return await self._embeddings.aembed_documents(list(texts))

    async def embed_query(self, text: str) -> Vector:
        return await self._embeddings.aembed_query(text)
