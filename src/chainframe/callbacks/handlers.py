"""Built-in callback handlers: trace logging (verbose mode) and metrics collection."""

import logging
from typing import Any, Dict, List, Optional

from .base import ChainCallback, RunInfo


class LoggingCallback(ChainCallback):
    """Logs chain lifecycle events. Attached automatically to verbose chains."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO):
        self._logger = logger or logging.getLogger("chainframe.trace")
        self._level = level

    def on_chain_start(self, run: RunInfo, inputs: dict[str, Any]) -> None:
        self._logger.log(
            self._level,
            "> Entering new %s chain | run_id=%s parent=%s keys=%s",
            run.chain_type, run.run_id, run.parent_run_id, sorted(inputs),
        )

    def on_step_start(self, run: RunInfo, step: str, inputs: dict[str, Any]) -> None:
        self._logger.log(self._level, "  step %s started | chain=%s", step, run.chain_type)

    def on_step_end(self, run: RunInfo, step: str, outputs: dict[str, Any]) -> None:
        self._logger.log(self._level, "  step %s finished | chain=%s", step, run.chain_type)

    def on_text(self, run: RunInfo, text: str) -> None:
        self._logger.log(self._level, "%s", text)

    def on_chain_end(self, run: RunInfo, outputs: dict[str, Any]) -> None:
        self._logger.log(self._level, "> Finished %s chain | run_id=%s", run.chain_type, run.run_id)

    def on_chain_error(self, run: RunInfo, error: BaseException) -> None:
        self._logger.log(
            self._level,
            "> %s chain failed | run_id=%s error=%s: %s",
            run.chain_type, run.run_id, type(error).__name__, error,
        )


class MetricsCallback(ChainCallback):
    """Callback that collects counts of lifecycle events."""

    def __init__(self):
        self.metrics: Dict[str, Any] = {
            "chain_starts": 0,
            "chain_ends": 0,
            "chain_errors": 0,
            "steps": 0,
        }
        self.steps: List[str] = []
        self.errors: List[BaseException] = []

    def on_chain_start(self, run: RunInfo, inputs: dict[str, Any]) -> None:
        self.metrics["chain_starts"] += 1

    def on_step_end(self, run: RunInfo, step: str, outputs: dict[str, Any]) -> None:
        self.metrics["steps"] += 1
        self.steps.append(step)

    def on_chain_end(self, run: RunInfo, outputs: dict[str, Any]) -> None:
        self.metrics["chain_ends"] += 1

    def on_chain_error(self, run: RunInfo, error: BaseException) -> None:
        self.metrics["chain_errors"] += 1
        self.errors.append(error)

    def get_metrics(self) -> Dict[str, Any]:
        """Get collected metrics."""
        return self.metrics.copy()
