"""Shared configuration for the chain engine."""

import logging
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Process-wide engine settings.

    Read once from the environment (or ``.env``); chains take their defaults
    from here at construction time and never mutate them during execution.
    """

    # Attach the default LoggingCallback to chains that do not set verbose
    VERBOSE: bool = False
    LOG_LEVEL: str = "INFO"  # DEBUG | INFO | WARNING

    # Upper bound for a single coroutine callback hook, in seconds
    CALLBACK_TIMEOUT_SECONDS: float = 5.0

    # Chain.batch(): concurrent invoke() calls
    BATCH_MAX_CONCURRENCY: int = 5

    # Observability: LLM tracing (log prompt/response/latency)
    ENABLE_LLM_TRACING: bool = False
    TRACING_LOG_LEVEL: str = "INFO"  # DEBUG | INFO | WARNING

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")


@lru_cache
def get_settings() -> EngineSettings:
    return EngineSettings()


def configure_logging(settings: EngineSettings | None = None) -> None:
    """Initialise process-wide logging for the engine. Call before building chains."""
    settings = settings or get_settings()
    level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("chainframe").setLevel(level)
