"""Chain engine exception hierarchy.

Every error raised by the engine is a typed exception so callers can tell
"bad input", "rejected by policy" and "upstream failure" apart without
string-matching. Cancellation is not part of this hierarchy: a cancelled or
timed-out call surfaces as ``asyncio.CancelledError`` / ``TimeoutError``.
"""

from typing import Any, Optional


class FrameworkError(Exception):
    """Base exception for all chainframe errors."""
    pass


class ChainError(FrameworkError):
    """Base exception for errors raised while executing a chain."""
    pass


class MissingInputError(ChainError):
    """Raised when a declared input key is absent from the input values.

    Attributes:
        key: Name of the missing input key
    """
    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing input key '{key}'")


class InvalidInputTypeError(ChainError):
    """Raised when an input value does not have the expected type.

    Attributes:
        key: Input key holding the value
        expected: Human readable name of the expected type
    """
    def __init__(self, key: str, expected: str, actual: Any = None):
        self.key = key
        self.expected = expected
        message = f"Input key '{key}' must be {expected}"
        if actual is not None:
            message += f", got {type(actual).__name__}"
        super().__init__(message)


class RunNotSupportedError(ChainError):
    """Raised when ``run`` is used on a chain without exactly one input and one output key."""
    pass


class InvalidOutputTypeError(ChainError):
    """Raised when a chain or step produces output of the wrong shape or type.

    Attributes:
        key: Output key holding the value, or None when the whole output is wrong
        expected: Human readable name of the expected type
    """
    def __init__(self, key: Optional[str], value: Any, expected: str = "str"):
        self.key = key
        self.value = value
        self.expected = expected
        target = f"Output key '{key}'" if key is not None else "Output"
        super().__init__(f"{target} must be {expected}, got {type(value).__name__}")


class ChainConfigurationError(ChainError):
    """Raised when a chain is composed with incompatible keys or settings."""
    pass


class TemplateRenderError(ChainError):
    """Raised when a prompt template is malformed or a placeholder is unresolved.

    Attributes:
        template: The template text
        variable: Unresolved placeholder name, if any
    """
    def __init__(self, template: str, variable: Optional[str] = None, reason: str = ""):
        self.template = template
        self.variable = variable
        if variable is not None:
            message = f"Missing value for template variable '{variable}'"
        else:
            message = "Malformed prompt template"
        if reason:
            message += f": {reason}"
        super().__init__(message)


class ContentRejectedError(ChainError):
    """Raised when a moderator rejects the candidate text.

    This is a policy decision, not a transport failure.

    Attributes:
        reason: Reason reported by the moderator
        verdict: The full moderation verdict
    """
    def __init__(self, reason: Optional[str] = None, verdict: Any = None):
        self.reason = reason or "content policy violation"
        self.verdict = verdict
        super().__init__(f"Content rejected: {self.reason}")


class CapabilityError(ChainError):
    """Wraps an error raised by a consumed capability (LLM, moderator, tool, embedder).

    The original exception is available as ``__cause__`` and ``cause``.

    Attributes:
        capability: Name of the capability that failed (e.g. "llm", "moderator")
        cause: The underlying exception
    """
    def __init__(self, capability: str, cause: BaseException):
        self.capability = capability
        self.cause = cause
        super().__init__(f"{capability} call failed: {cause}")


class ToolNotFoundError(FrameworkError):
    """Raised when a requested tool is not registered."""

    def __init__(self, tool_name: str, available_tools: Optional[list[str]] = None):
        message = f"Tool '{tool_name}' not found"
        if available_tools:
            message += f". Available tools: {', '.join(available_tools)}"
        super().__init__(message)
        self.tool_name = tool_name
        self.available_tools = available_tools or []
