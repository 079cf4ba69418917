"""Single-character date tokens and the renderer that expands them.

Patterns follow the widespread ``date()`` convention: ``Y-m-d H:i:s`` renders
``2008-06-15 10:00:00``. A backslash makes the next character literal and any
character that is not a token is copied through. Names are always English;
there is no locale support.
"""
from __future__ import annotations

import calendar
from datetime import datetime, timezone
from typing import Callable, Dict, Iterator, Tuple

ESCAPE = "\\"

# Tokens that need a calendar date or a timezone to mean anything.
CALENDAR_TOKENS = frozenset("cdDeFIjlLmMnNoOPrStTUwWyYzZ")
CLOCK_TOKENS = frozenset("aABgGhHisuv")

_DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
_MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

TokenRenderer = Callable[[datetime, str], str]


def iter_pattern(pattern: str) -> Iterator[Tuple[str, bool]]:
    """Yield ``(character, escaped)`` pairs for ``pattern``."""

    chars = iter(pattern)
    for char in chars:
        if char == ESCAPE:
            escaped = next(chars, None)
            if escaped is not None:
                yield escaped, True
            continue
        yield char, False


def find_tokens(pattern: str, tokens: frozenset[str]) -> list[str]:
    """Return the unescaped characters of ``pattern`` that belong to ``tokens``."""

    found: list[str] = []
    for char, escaped in iter_pattern(pattern):
        if not escaped and char in tokens and char not in found:
            found.append(char)
    return found


def render(pattern: str, moment: datetime, zone_name: str | None = None) -> str:
    """Expand every token of ``pattern`` against ``moment``.

    ``zone_name`` is the identifier printed by ``e``; naive datetimes render as
    if they were UTC.
    """

    label = zone_name or _zone_label(moment)
    parts: list[str] = []
    for char, escaped in iter_pattern(pattern):
        renderer = None if escaped else _RENDERERS.get(char)
        parts.append(renderer(moment, label) if renderer else char)
    return "".join(parts)


def _zone_label(moment: datetime) -> str:
    key = getattr(moment.tzinfo, "key", None)
    if key:
        return key
    return "UTC"


def _offset_seconds(moment: datetime) -> int:
    offset = moment.utcoffset()
    return int(offset.total_seconds()) if offset is not None else 0


def _format_offset(moment: datetime, separator: str) -> str:
    seconds = _offset_seconds(moment)
    sign = "+" if seconds >= 0 else "-"
    hours, remainder = divmod(abs(seconds), 3600)
    return f"{sign}{hours:02d}{separator}{remainder // 60:02d}"


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def _ordinal_suffix(day: int) -> str:
    if 11 <= day % 100 <= 13:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def _swatch_beat(moment: datetime) -> str:
    utc = _as_utc(moment)
    seconds = (utc.hour * 3600 + utc.minute * 60 + utc.second + 3600) % 86400
    return f"{seconds * 1000 // 86400:03d}"


def _twelve_hour(moment: datetime) -> int:
    return moment.hour % 12 or 12


def _tz_abbreviation(moment: datetime, label: str) -> str:
    if moment.tzinfo is None:
        return "UTC"
    return moment.tzname() or label


_RENDERERS: Dict[str, TokenRenderer] = {
    # day
    "d": lambda m, _: f"{m.day:02d}",
    "D": lambda m, _: _DAY_NAMES[m.weekday()][:3],
    "j": lambda m, _: str(m.day),
    "l": lambda m, _: _DAY_NAMES[m.weekday()],
    "N": lambda m, _: str(m.isoweekday()),
    "S": lambda m, _: _ordinal_suffix(m.day),
    "w": lambda m, _: str(m.isoweekday() % 7),
    "z": lambda m, _: str(m.timetuple().tm_yday - 1),
    # week
    "W": lambda m, _: f"{m.isocalendar()[1]:02d}",
    # month
    "F": lambda m, _: _MONTH_NAMES[m.month - 1],
    "m": lambda m, _: f"{m.month:02d}",
    "M": lambda m, _: _MONTH_NAMES[m.month - 1][:3],
    "n": lambda m, _: str(m.month),
    "t": lambda m, _: str(calendar.monthrange(m.year, m.month)[1]),
    # year
    "L": lambda m, _: "1" if calendar.isleap(m.year) else "0",
    "o": lambda m, _: str(m.isocalendar()[0]),
    "Y": lambda m, _: f"{m.year:04d}",
    "y": lambda m, _: f"{m.year % 100:02d}",
    # time
    "a": lambda m, _: "am" if m.hour < 12 else "pm",
    "A": lambda m, _: "AM" if m.hour < 12 else "PM",
    "B": lambda m, _: _swatch_beat(m),
    "g": lambda m, _: str(_twelve_hour(m)),
    "G": lambda m, _: str(m.hour),
    "h": lambda m, _: f"{_twelve_hour(m):02d}",
    "H": lambda m, _: f"{m.hour:02d}",
    "i": lambda m, _: f"{m.minute:02d}",
    "s": lambda m, _: f"{m.second:02d}",
    "u": lambda m, _: f"{m.microsecond:06d}",
    "v": lambda m, _: f"{m.microsecond // 1000:03d}",
    # timezone
    "e": lambda m, label: label,
    "I": lambda m, _: "1" if m.tzinfo is not None and m.dst() else "0",
    "O": lambda m, _: _format_offset(m, ""),
    "P": lambda m, _: _format_offset(m, ":"),
    "T": _tz_abbreviation,
    "Z": lambda m, _: str(_offset_seconds(m)),
    # full date/time
    "c": lambda m, label: render("Y-m-d\\TH:i:sP", m, label),
    "r": lambda m, label: render("D, d M Y H:i:s O", m, label),
    "U": lambda m, _: str(int(_as_utc(m).timestamp())),
}


__all__ = ["CALENDAR_TOKENS", "CLOCK_TOKENS", "ESCAPE", "find_tokens", "iter_pattern", "render"]
