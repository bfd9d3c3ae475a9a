"""
Settings and logging setup for applications embedding repo_index.

Parsing and lookup take no configuration. These settings only control how
log output from the library is rendered.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field, field_validator

LOG_LEVEL_ENV_VAR = "REPO_INDEX_LOG_LEVEL"
LOG_FORMAT_ENV_VAR = "REPO_INDEX_LOG_FORMAT"

_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class IndexSettings(BaseModel):
    """
    Logging configuration.

    Values can come from the constructor or from the environment via
    ``from_env()``.
    """

    log_level: str = Field(
        default="INFO",
        description="Minimum level of emitted log records (e.g., 'DEBUG', 'INFO').",
    )
    log_format: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Format string passed to logging.basicConfig.",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LEVELS)}")
        return level

    @classmethod
    def from_env(cls) -> "IndexSettings":
        """Build settings, letting REPO_INDEX_* variables override the defaults."""
        values = {}
        level = os.environ.get(LOG_LEVEL_ENV_VAR)
        if level:
            values["log_level"] = level
        fmt = os.environ.get(LOG_FORMAT_ENV_VAR)
        if fmt:
            values["log_format"] = fmt
        return cls(**values)


def configure_logging(settings: Optional[IndexSettings] = None) -> IndexSettings:
    """
    Configure the root logger from ``settings`` (or the environment).

    Returns:
        The settings that were applied
    """
    settings = settings or IndexSettings.from_env()
    logging.basicConfig(level=settings.log_level, format=settings.log_format)
    logging.getLogger("repo_index").setLevel(settings.log_level)
    return settings
