"""Callback hooks for chain lifecycle events."""

from dataclasses import dataclass, field
from typing import Any, Optional
from uuid import uuid4


@dataclass(frozen=True)
class RunInfo:
    """Identifies one chain execution; nested chains carry their parent's run_id."""

    chain_type: str
    run_id: str = field(default_factory=lambda: uuid4().hex)
    parent_run_id: Optional[str] = None


class ChainCallback:
    """Observer for chain lifecycle events. Override the hooks you need.

    Hooks may be plain methods or coroutines. Exceptions raised by a hook are
    logged and ignored; they never change the result of the chain.
    """

    def on_chain_start(self, run: RunInfo, inputs: dict[str, Any]) -> Any:
        """Called after input validation, before any step runs."""
        return None

    def on_step_start(self, run: RunInfo, step: str, inputs: dict[str, Any]) -> Any:
        return None

    def on_step_end(self, run: RunInfo, step: str, outputs: dict[str, Any]) -> Any:
        return None

    def on_chain_end(self, run: RunInfo, outputs: dict[str, Any]) -> Any:
        """Called only when the chain succeeded."""
        return None

    def on_chain_error(self, run: RunInfo, error: BaseException) -> Any:
        """Called when the chain failed or was cancelled."""
        return None

    def on_text(self, run: RunInfo, text: str) -> Any:
        """Free-form trace text (e.g. the prompt after formatting)."""
        return None
