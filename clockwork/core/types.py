"""Shared type aliases for readability and contract enforcement.

Instants, timezone names and format patterns are all plain ints/strings at
runtime; the aliases keep their roles apart in signatures.
"""
from __future__ import annotations

from typing import NewType, Protocol, TypeAlias, Union

EpochSeconds = NewType("EpochSeconds", int)
TimezoneName = NewType("TimezoneName", str)
FormatPattern = NewType("FormatPattern", str)

FieldValue: TypeAlias = Union[int, float, str]


class DateLike(Protocol):
    """A calendar date whose ``str()`` is a canonical date such as ``2008-06-15``."""

    def __str__(self) -> str: ...
