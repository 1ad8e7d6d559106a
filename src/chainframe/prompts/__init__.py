"""Prompt templates."""

from .template import PromptTemplate, format_document

__all__ = ["PromptTemplate", "format_document"]
