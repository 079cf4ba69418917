"""Relative adjustment grammar and its evaluation.

An expression such as ``"+1 day -2 hours"`` or ``"next monday"`` is parsed into
an :class:`Adjustment`: a tuple of typed steps. Callers decide what they accept
by inspecting the steps (a time of day only takes clock shifts) and then hand
the adjustment to :func:`apply_adjustment` together with an aware datetime in
the zone the adjustment should be evaluated in.

Grammar (case-insensitive, whitespace-tolerant), repeated as often as needed:

* ``[+-]N [unit]``: a unitless magnitude counts seconds; ``ago`` negates the
  shifts parsed so far
* ``next|last|previous|this <unit|weekday>``
* a bare weekday name
* ``now``, ``today``, ``midnight``, ``noon``, ``tomorrow``, ``yesterday``

An expression that is exactly a timezone identifier parses to a single
:class:`TimezoneSwitch` step.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Dict, List, Tuple, Union
from zoneinfo import ZoneInfo

from clockwork.core.enums import AdjustmentUnit, Weekday
from clockwork.core.errors import ParseError
from clockwork.core.time_utils import is_valid_timezone


@dataclass(frozen=True, slots=True)
class Shift:
    """Move by ``amount`` units; negative amounts move backwards."""

    unit: AdjustmentUnit
    amount: int

    @property
    def is_clock(self) -> bool:
        return self.unit.is_clock


@dataclass(frozen=True, slots=True)
class Now:
    """Keep the instant as it is."""


@dataclass(frozen=True, slots=True)
class ClockAnchor:
    """Reset the wall clock to ``hour``:00:00 on the same date."""

    hour: int


@dataclass(frozen=True, slots=True)
class WeekdayMove:
    """Move to a weekday at midnight.

    ``direction`` is 1 for ``next`` (strictly after today), -1 for ``last``
    (strictly before today) and 0 for a bare name or ``this`` (today counts).
    """

    weekday: Weekday
    direction: int


@dataclass(frozen=True, slots=True)
class TimezoneSwitch:
    """Observe the same instant in another zone."""

    name: str


AdjustmentStep = Union[Shift, Now, ClockAnchor, WeekdayMove, TimezoneSwitch]


@dataclass(frozen=True, slots=True)
class Adjustment:
    """A parsed relative adjustment.

    ``phrased`` is set when the text used ``ago`` or ``next``/``last``/``this``
    instead of plain signed amounts.
    """

    steps: Tuple[AdjustmentStep, ...]
    source: str = ""
    phrased: bool = False

    @property
    def is_clock_only(self) -> bool:
        """True when only hours, minutes, seconds and ``now`` are involved."""

        return all(isinstance(step, Now) or (isinstance(step, Shift) and step.is_clock) for step in self.steps)

    @property
    def timezone(self) -> str | None:
        """The zone name when the whole adjustment is a timezone switch."""

        if len(self.steps) == 1 and isinstance(self.steps[0], TimezoneSwitch):
            return self.steps[0].name
        return None


_TOKEN_RE = re.compile(r"\s*(?:(?P<number>[+-]?\s*\d+)|(?P<word>[a-z]+))", re.IGNORECASE)

_UNITS: Dict[str, Tuple[AdjustmentUnit, int]] = {}
for _names, _unit, _factor in (
    (("sec", "secs", "second", "seconds"), AdjustmentUnit.SECOND, 1),
    (("min", "mins", "minute", "minutes"), AdjustmentUnit.MINUTE, 1),
    (("hour", "hours"), AdjustmentUnit.HOUR, 1),
    (("day", "days"), AdjustmentUnit.DAY, 1),
    (("week", "weeks"), AdjustmentUnit.WEEK, 1),
    (("fortnight", "fortnights"), AdjustmentUnit.WEEK, 2),
    (("month", "months"), AdjustmentUnit.MONTH, 1),
    (("year", "years"), AdjustmentUnit.YEAR, 1),
):
    for _name in _names:
        _UNITS[_name] = (_unit, _factor)

_WEEKDAYS: Dict[str, Weekday] = {}
for _weekday, _aliases in (
    (Weekday.MONDAY, ("mon",)),
    (Weekday.TUESDAY, ("tue", "tues")),
    (Weekday.WEDNESDAY, ("wed",)),
    (Weekday.THURSDAY, ("thu", "thur", "thurs")),
    (Weekday.FRIDAY, ("fri",)),
    (Weekday.SATURDAY, ("sat",)),
    (Weekday.SUNDAY, ("sun",)),
):
    _WEEKDAYS[_weekday.name.lower()] = _weekday
    for _alias in _aliases:
        _WEEKDAYS[_alias] = _weekday

_DIRECTIONS = {"next": 1, "last": -1, "previous": -1, "this": 0}

_KEYWORDS: Dict[str, Tuple[AdjustmentStep, ...]] = {
    "now": (Now(),),
    "today": (ClockAnchor(0),),
    "midnight": (ClockAnchor(0),),
    "noon": (ClockAnchor(12),),
    "tomorrow": (ClockAnchor(0), Shift(AdjustmentUnit.DAY, 1)),
    "yesterday": (ClockAnchor(0), Shift(AdjustmentUnit.DAY, -1)),
}


def _tokenize(text: str) -> List[Tuple[str, str]]:
    tokens: List[Tuple[str, str]] = []
    position = 0
    length = len(text)
    while position < length:
        if text[position:].isspace():
            break
        match = _TOKEN_RE.match(text, position)
        if match is None:
            raise ParseError(f"Unexpected character {text[position:].strip()[0]!r} in {text!r}")
        if match.group("number") is not None:
            tokens.append(("number", re.sub(r"\s+", "", match.group("number"))))
        else:
            tokens.append(("word", match.group("word").lower()))
        position = match.end()
    return tokens


def parse_adjustment(text: str) -> Adjustment:
    """Parse ``text`` into an :class:`Adjustment`, raising :class:`ParseError`."""

    if not isinstance(text, str) or not text.strip():
        raise ParseError(f"Empty adjustment {text!r}")
    stripped = text.strip()
    if is_valid_timezone(stripped):
        return Adjustment(steps=(TimezoneSwitch(stripped),), source=text)

    tokens = _tokenize(stripped)
    steps: List[AdjustmentStep] = []
    phrased = False
    index = 0
    while index < len(tokens):
        kind, value = tokens[index]
        following = tokens[index + 1] if index + 1 < len(tokens) else None

        if kind == "number":
            amount = int(value)
            unit, factor = AdjustmentUnit.SECOND, 1
            if following is not None and following[0] == "word" and following[1] in _UNITS:
                unit, factor = _UNITS[following[1]]
                index += 1
            steps.append(Shift(unit, amount * factor))
        elif value == "ago":
            if not any(isinstance(step, Shift) for step in steps):
                raise ParseError(f"'ago' without a preceding amount in {text!r}")
            steps = [Shift(step.unit, -step.amount) if isinstance(step, Shift) else step for step in steps]
            phrased = True
        elif value in _KEYWORDS:
            steps.extend(_KEYWORDS[value])
        elif value in _DIRECTIONS:
            direction = _DIRECTIONS[value]
            phrased = True
            if following is None or following[0] != "word":
                raise ParseError(f"'{value}' must be followed by a unit or weekday in {text!r}")
            if following[1] in _UNITS:
                unit, factor = _UNITS[following[1]]
                steps.append(Shift(unit, direction * factor))
            elif following[1] in _WEEKDAYS:
                steps.append(WeekdayMove(_WEEKDAYS[following[1]], direction))
            else:
                raise ParseError(f"Unknown unit {following[1]!r} in {text!r}")
            index += 1
        elif value in _WEEKDAYS:
            steps.append(WeekdayMove(_WEEKDAYS[value], 0))
        else:
            raise ParseError(f"Unknown word {value!r} in {text!r}")
        index += 1

    return Adjustment(steps=tuple(steps), source=text, phrased=phrased)


def apply_adjustment(adjustment: Adjustment, moment: datetime) -> datetime:
    """Evaluate ``adjustment`` against the aware datetime ``moment``.

    Clock anchors, calendar shifts and weekday moves operate on the wall clock
    of ``moment``'s zone; hour/minute/second shifts are elapsed time, so they
    stay exact across DST transitions. Month and year shifts overflow like
    the classic ``strtotime``: ``+1 month`` on January 31st lands in March.
    """

    if moment.tzinfo is None:
        raise ValueError("Datetime must be timezone-aware before adjustment")
    if adjustment.timezone is not None:
        return moment.astimezone(ZoneInfo(adjustment.timezone))

    zone = moment.tzinfo
    original_wall = moment.replace(tzinfo=None)
    wall = original_wall
    months = 0
    days = 0
    elapsed = 0
    try:
        for step in adjustment.steps:
            if isinstance(step, ClockAnchor):
                wall = wall.replace(hour=step.hour, minute=0, second=0, microsecond=0)
            elif isinstance(step, Shift):
                if step.unit is AdjustmentUnit.YEAR:
                    months += 12 * step.amount
                elif step.unit is AdjustmentUnit.MONTH:
                    months += step.amount
                elif step.unit is AdjustmentUnit.WEEK:
                    days += 7 * step.amount
                elif step.unit is AdjustmentUnit.DAY:
                    days += step.amount
                else:
                    elapsed += step.amount * step.unit.seconds
        if months:
            wall = _add_months(wall, months)
        if days:
            wall = wall + timedelta(days=days)
        for step in adjustment.steps:
            if isinstance(step, WeekdayMove):
                wall = _move_to_weekday(wall, step)

        result = moment if wall == original_wall else wall.replace(tzinfo=zone, fold=0)
        if elapsed:
            result = (result.astimezone(timezone.utc) + timedelta(seconds=elapsed)).astimezone(zone)
    except (OverflowError, ValueError) as exc:
        raise ParseError(f"The adjustment {adjustment.source!r} leaves the supported date range") from exc
    return result


def _add_months(wall: datetime, months: int) -> datetime:
    total = wall.year * 12 + (wall.month - 1) + months
    year, month_index = divmod(total, 12)
    first = wall.replace(year=year, month=month_index + 1, day=1)
    return first + timedelta(days=wall.day - 1)


def _move_to_weekday(wall: datetime, move: WeekdayMove) -> datetime:
    ahead = (int(move.weekday) - wall.isoweekday()) % 7
    if move.direction > 0 and ahead == 0:
        ahead = 7
    elif move.direction < 0:
        ahead = ahead - 7 if ahead else -7
    return (wall + timedelta(days=ahead)).replace(hour=0, minute=0, second=0, microsecond=0)


__all__ = [
    "Adjustment",
    "AdjustmentStep",
    "ClockAnchor",
    "Now",
    "Shift",
    "TimezoneSwitch",
    "WeekdayMove",
    "apply_adjustment",
    "parse_adjustment",
]
