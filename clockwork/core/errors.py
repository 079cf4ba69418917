"""Error hierarchy shared by the clockwork subsystems.

Every failure surfaced to callers is a local validation failure. Value types
validate before they mutate, so a raised error always leaves the value as it
was. Submodules should raise the most specific error available.
"""
from __future__ import annotations

from typing import Any


class ClockworkError(Exception):
    """Base class for all custom exceptions in the package."""


class ValidationError(ClockworkError):
    """Raised when caller-supplied text or fields cannot be accepted."""


class ProgrammerError(ClockworkError):
    """Raised when a call is structurally wrong rather than given bad data."""


class ConfigurationError(ClockworkError):
    """Raised when settings files are missing or invalid."""


class ParseError(ClockworkError):
    """Raised by the parsers; value types translate it into a specific error."""


class InvalidTimeFormat(ValidationError):
    """Raised when text cannot be read as a time of day."""


class InvalidDateTimeFormat(ValidationError):
    """Raised when text cannot be read as a date/time."""


class InvalidField(ValidationError):
    """Raised when a single date or time field is out of range or non-numeric."""

    def __init__(self, field: str, value: Any, message: str | None = None) -> None:
        self.field = field
        self.value = value
        label = field.replace("_", " ")
        super().__init__(
            message or f"The {label} specified, {value!r}, does not appear to be a valid {label}"
        )


class InvalidDate(ValidationError):
    """Raised for well-formed fields that name an impossible calendar date."""


class InvalidAdjustment(ValidationError):
    """Raised when a relative adjustment expression cannot be parsed."""


class IllegalAdjustmentScope(ValidationError):
    """Raised when a time of day is given a date or timezone adjustment."""


class InvalidTimezone(ValidationError):
    """Raised when a timezone identifier cannot be resolved."""


class IllegalFormatToken(ProgrammerError):
    """Raised when a time of day format uses a calendar or timezone token."""
