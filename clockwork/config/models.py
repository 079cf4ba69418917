"""Typed settings model for clockwork.

Settings are validated with pydantic so a YAML file naming an unknown
timezone fails at load time instead of at the first timestamp built.
"""
from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clockwork.core.time_utils import DEFAULT_TZ_NAME, is_valid_timezone

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class ClockworkSettings(BaseModel):
    """Process-wide defaults: default timezone, named formats, log level."""

    default_timezone: str = Field(DEFAULT_TZ_NAME, min_length=1)
    formats: Dict[str, str] = Field(default_factory=dict)
    log_level: str = Field("INFO")

    model_config = ConfigDict(frozen=True)

    @field_validator("default_timezone")
    @classmethod
    def _check_timezone(cls, value: str) -> str:
        if not is_valid_timezone(value):
            raise ValueError(f"Unknown timezone {value!r}")
        return value

    @field_validator("formats")
    @classmethod
    def _check_format_names(cls, value: Dict[str, str]) -> Dict[str, str]:
        for name in value:
            if not name.strip():
                raise ValueError("Format names must not be blank")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}")
        return level
