"""Core primitives shared across all subsystems.

This module aggregates enums, common types, timezone helpers and error classes
used by the parsers, the formatter and the value types. Higher level packages
import from here to avoid circular dependencies.
"""

from . import enums, errors, time_utils, types

__all__ = ["enums", "errors", "time_utils", "types"]
