"""Prompt templates: render chain values into instruction text with {variable} placeholders."""

from string import Formatter
from typing import Any, Callable, Mapping, Optional, Union

from ..exceptions import TemplateRenderError
from ..schema import Document

PartialValue = Union[str, Callable[[], str]]

_formatter = Formatter()


def _parse_variables(template: str) -> list[str]:
    """Return placeholder names in order of first appearance; raise TemplateRenderError if malformed."""
    names: list[str] = []
    try:
        for _, field_name, format_spec, _ in _formatter.parse(template):
            if field_name is None:
                continue
            if field_name == "" or field_name.isdigit():
                raise TemplateRenderError(template, reason="positional placeholders are not supported")
            # "{doc.title}" / "{items[0]}" resolve against the top-level name
            name = field_name.split(".", 1)[0].split("[", 1)[0]
            if name not in names:
                names.append(name)
            if format_spec:
                for nested in _parse_variables(format_spec):
                    if nested not in names:
                        names.append(nested)
    except ValueError as e:
        raise TemplateRenderError(template, reason=str(e)) from e
    return names


class PromptTemplate:
    """Immutable template with named {placeholders}. Use {{ and }} for literal braces."""

    def __init__(
        self,
        template: str,
        partial_variables: Optional[Mapping[str, PartialValue]] = None,
    ):
        """
        Args:
            template: Prompt string with {variable} placeholders.
            partial_variables: Values bound ahead of time; strings or zero-arg callables.
        """
        self._template = template
        self._partials: dict[str, PartialValue] = dict(partial_variables or {})
        self._variables = _parse_variables(template)

    @property
    def template(self) -> str:
        return self._template

    @property
    def input_variables(self) -> list[str]:
        """Placeholders the caller must supply (partials excluded)."""
        return [v for v in self._variables if v not in self._partials]

    def partial(self, **values: PartialValue) -> "PromptTemplate":
        """Return a new template with additional partial variables."""
        return PromptTemplate(self._template, partial_variables={**self._partials, **values})

    def format(self, values: Mapping[str, Any]) -> str:
        """Render the template. Raises TemplateRenderError on unresolved placeholders."""
        data: dict[str, Any] = {}
        for name, value in self._partials.items():
            data[name] = value() if callable(value) else value
        data.update(values)
        for name in self._variables:
            if name not in data:
                raise TemplateRenderError(self._template, variable=name)
        try:
            return self._template.format(**data)
        except (KeyError, IndexError, AttributeError, TypeError, ValueError) as e:
            raise TemplateRenderError(self._template, reason=str(e)) from e

    def __repr__(self) -> str:
        return f"PromptTemplate(input_variables={self.input_variables!r})"


def format_document(document: Document, prompt: PromptTemplate) -> str:
    """Render a document through prompt; variables come from page_content plus metadata."""
    values: dict[str, Any] = dict(document.metadata)
    values["page_content"] = document.page_content
    return prompt.format(values)
