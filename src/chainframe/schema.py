"""Core data types: chain values, documents, chat messages, moderation verdicts."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Optional

from pydantic import BaseModel, Field

from .exceptions import InvalidInputTypeError, MissingInputError

# Universal input/output container for chains: string keys -> arbitrary values.
ChainValues = dict[str, Any]


def get_string(values: ChainValues, key: str) -> str:
    """Return the string stored under key; raise MissingInputError / InvalidInputTypeError."""
    if key not in values:
        raise MissingInputError(key)
    value = values[key]
    if not isinstance(value, str):
        raise InvalidInputTypeError(key, "a string", value)
    return value


def get_documents(values: ChainValues, key: str) -> list["Document"]:
    """Return the Document sequence stored under key as a list; str and non-Document items are rejected."""
    if key not in values:
        raise MissingInputError(key)
    docs = values[key]
    if isinstance(docs, (str, bytes)) or not isinstance(docs, Sequence):
        raise InvalidInputTypeError(key, "a sequence of Document", docs)
    for doc in docs:
        if not isinstance(doc, Document):
            raise InvalidInputTypeError(key, "a sequence of Document", doc)
    return list(docs)


class Document(BaseModel):
    """A piece of text with metadata, produced by loaders/splitters."""

    page_content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


@dataclass
class ChatMessage:
    """One conversation turn."""

    role: str  # "human" | "ai" | "system" | any custom role
    content: str


def format_messages(
    messages: list[ChatMessage],
    human_prefix: str = "Human",
    ai_prefix: str = "AI",
) -> str:
    """Render messages as "<Prefix>: <content>" lines."""
    lines = []
    for m in messages:
        if m.role == "human":
            prefix = human_prefix
        elif m.role == "ai":
            prefix = ai_prefix
        elif m.role == "system":
            prefix = "System"
        else:
            prefix = m.role
        lines.append(f"{prefix}: {m.content}")
    return "\n".join(lines)


@dataclass(frozen=True)
class ModerationVerdict:
    """Outcome of a moderation check. Ephemeral: lives for one guarded call."""

    passed: bool
    reason: Optional[str] = None
    redacted_text: Optional[str] = None
