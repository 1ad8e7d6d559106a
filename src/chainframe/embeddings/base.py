"""Embedder capability: text -> vector."""

from abc import ABC, abstractmethod
from typing import Sequence

Vector = list[float]


class EmbeddingsProvider(ABC):
    """Turns text into vectors. Calls are coroutines and must honour cancellation.

    Vectors returned by one provider instance all have the same dimension.
    """

    @abstractmethod
    async def embed_documents(self, texts: Sequence[str]) -> list[Vector]:
        """One vector per text, in input order."""
        ...

    @abstractmethod
    async def embed_query(self, text: str) -> Vector:
        ...

    async def embed(self, text_or_texts: str | Sequence[str]) -> Vector | list[Vector]:
        """embed_query() for a single string, embed_documents() for a sequence."""
        if isinstance(text_or_texts, str):
            return await self.embed_query(text_or_texts)
        return await self.embed_documents(list(text_or_texts))
