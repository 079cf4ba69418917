"""Named format table shared by every value type.

Applications register a pattern once (``register_format("iso", "Y-m-d")``)
and then pass the name wherever a pattern is accepted. Unknown names pass
through unchanged, so a literal pattern is always a valid argument too.
"""
from __future__ import annotations

import logging
import threading
from typing import Dict

from clockwork.core.types import FormatPattern

logger = logging.getLogger("clockwork.formatting")


class FormatRegistry:
    """Append-only mapping from a format name to a date-token pattern."""

    def __init__(self) -> None:
        self._formats: Dict[str, str] = {}
        self._lock = threading.Lock()

    def register(self, name: str, pattern: str) -> None:
        """Insert or overwrite ``name``; the pattern is not validated."""

        with self._lock:
            replaced = self._formats.get(name)
            self._formats[name] = pattern
        logger.debug(
            "Registered format",
            extra={"format_name": name, "format_pattern": pattern, "replaced_pattern": replaced},
        )

    def resolve(self, token: str) -> FormatPattern:
        """Return the pattern registered for ``token`` or ``token`` itself."""

        with self._lock:
            return FormatPattern(self._formats.get(token, token))

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._formats)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._formats


format_registry = FormatRegistry()


def register_format(name: str, pattern: str) -> None:
    """Register ``name`` in the process-wide registry."""

    format_registry.register(name, pattern)


def resolve_format(token: str) -> FormatPattern:
    """Resolve ``token`` against the process-wide registry."""

    return format_registry.resolve(token)


__all__ = ["FormatRegistry", "format_registry", "register_format", "resolve_format"]
