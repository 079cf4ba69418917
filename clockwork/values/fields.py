"""Validation of individual date/time fields shared by the value types."""
from __future__ import annotations

from typing import Tuple

from clockwork.core.errors import InvalidField
from clockwork.core.types import FieldValue

# 32-bit signed epoch range, kept for compatibility with stored values.
YEAR_RANGE: Tuple[int, int] = (1901, 2038)
MONTH_RANGE: Tuple[int, int] = (1, 12)
DAY_RANGE: Tuple[int, int] = (1, 31)
WEEK_RANGE: Tuple[int, int] = (1, 53)
DAY_OF_WEEK_RANGE: Tuple[int, int] = (1, 7)
HOUR_RANGE: Tuple[int, int] = (0, 23)
MINUTE_RANGE: Tuple[int, int] = (0, 59)
SECOND_RANGE: Tuple[int, int] = (0, 59)


def coerce_field(field: str, value: FieldValue, bounds: Tuple[int, int]) -> int:
    """Return ``value`` as an int within ``bounds`` or raise :class:`InvalidField`.

    Integral floats and numeric strings (``"07"``, ``" 7 "``, ``"7.0"``) are
    accepted; booleans, fractions and anything else are not.
    """

    if isinstance(value, bool):
        raise InvalidField(field, value)
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidField(field, value)
        number = int(value)
    elif isinstance(value, str):
        number = _int_from_text(field, value)
    else:
        raise InvalidField(field, value)

    low, high = bounds
    if not low <= number <= high:
        raise InvalidField(field, value)
    return number


def _int_from_text(field: str, value: str) -> int:
    text = value.strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        parsed = float(text)
    except ValueError as exc:
        raise InvalidField(field, value) from exc
    if not parsed.is_integer():
        raise InvalidField(field, value)
    return int(parsed)
