"""Timezone-aware timestamps and zoneless times of day.

The package exposes the value types (:class:`Timestamp`, :class:`TimeOfDay`),
the named format registry and the process default timezone helpers. Logging
is never configured on import; call :func:`clockwork.telemetry.configure_logging`
from an application entry point if JSON logs are wanted.
"""

from .core.errors import (
    ClockworkError,
    IllegalAdjustmentScope,
    IllegalFormatToken,
    InvalidAdjustment,
    InvalidDate,
    InvalidDateTimeFormat,
    InvalidField,
    InvalidTimeFormat,
    InvalidTimezone,
    ValidationError,
)
from .core.time_utils import (
    default_timezone,
    get_default_timezone,
    is_valid_timezone,
    set_default_timezone,
)
from .formatting import FormatRegistry, format_registry, register_format, resolve_format
from .values import TimeOfDay, Timestamp

__all__ = [
    "ClockworkError",
    "FormatRegistry",
    "IllegalAdjustmentScope",
    "IllegalFormatToken",
    "InvalidAdjustment",
    "InvalidDate",
    "InvalidDateTimeFormat",
    "InvalidField",
    "InvalidTimeFormat",
    "InvalidTimezone",
    "TimeOfDay",
    "Timestamp",
    "ValidationError",
    "default_timezone",
    "format_registry",
    "get_default_timezone",
    "is_valid_timezone",
    "register_format",
    "resolve_format",
    "set_default_timezone",
]
