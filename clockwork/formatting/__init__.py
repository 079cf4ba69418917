"""Format name registry and date-token renderer."""
from .registry import FormatRegistry, format_registry, register_format, resolve_format
from .tokens import CALENDAR_TOKENS, CLOCK_TOKENS, find_tokens, render

__all__ = [
    "CALENDAR_TOKENS",
    "CLOCK_TOKENS",
    "FormatRegistry",
    "find_tokens",
    "format_registry",
    "register_format",
    "render",
    "resolve_format",
]
