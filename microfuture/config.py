"""Settings for microfuture, read from the environment."""

import logging
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

ENV_MAX_TASKS_PER_DRAIN = "MICROFUTURE_MAX_TASKS_PER_DRAIN"
ENV_LOG_LEVEL = "MICROFUTURE_LOG_LEVEL"


class Settings(BaseModel):
    """Runtime settings.

    Attributes:
        max_tasks_per_drain: Upper bound on tasks run by one
            ``MicrotaskQueue.run_until_idle()`` call
        log_level: Level applied to the ``microfuture`` logger, if set
    """

    model_config = ConfigDict(frozen=True)

    max_tasks_per_drain: int = 1_000_000
    log_level: Optional[str] = None

    @field_validator("max_tasks_per_drain")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_tasks_per_drain must be positive")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``MICROFUTURE_*`` environment variables."""
        values = {}

        max_tasks = os.environ.get(ENV_MAX_TASKS_PER_DRAIN)
        if max_tasks:
            values["max_tasks_per_drain"] = max_tasks

        log_level = os.environ.get(ENV_LOG_LEVEL)
        if log_level:
            values["log_level"] = log_level

        return cls(**values)


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply ``settings.log_level`` to the package logger."""
    settings = settings or Settings.from_env()
    if settings.log_level:
        logging.getLogger("microfuture").setLevel(settings.log_level)
