"""Validated startup settings for batterylogd."""

import logging
import threading
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_INTERVAL = 60
DEFAULT_LOG_FILENAME = "batterylogd.log"


def default_log_file() -> Path:
    """Get the default log file, $HOME/batterylogd.log."""
    return Path.home() / DEFAULT_LOG_FILENAME


class Settings(BaseModel):
    """Everything the daemon needs before it starts sampling.

    Empty battery paths mean batteries are auto-detected. Backlights
    are only logged when paths are given or auto_backlight is set.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    interval: int = Field(
        default=DEFAULT_INTERVAL,
        gt=0,
        le=int(threading.TIMEOUT_MAX),
        description="Sampling interval in seconds",
    )
    batteries: list[str] = Field(
        default_factory=list, description="Explicit battery sysfs paths"
    )
    backlights: list[str] = Field(
        default_factory=list, description="Explicit backlight sysfs paths"
    )
    auto_backlight: bool = Field(
        default=False, description="Auto-detect backlights when none given"
    )
    log_file: Path = Field(
        default_factory=default_log_file, description="Append-only log file"
    )
    log_level: str = Field(default="INFO", description="Logging level name")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def backlight_enabled(self) -> bool:
        """Check whether backlights should be logged at all."""
        return bool(self.backlights) or self.auto_backlight
