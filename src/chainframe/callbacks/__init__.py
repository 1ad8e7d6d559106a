"""Callbacks: lifecycle hooks, fan-out manager, built-in handlers."""

from .base import ChainCallback, RunInfo
from .handlers import LoggingCallback, MetricsCallback
from .manager import CallbackManager, RunManager, StepRecord

__all__ = [
    "ChainCallback",
    "RunInfo",
    "CallbackManager",
    "RunManager",
    "StepRecord",
    "LoggingCallback",
    "MetricsCallback",
]
