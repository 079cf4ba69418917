"""Free-form date/time text parser.

Reads the date and time notations people actually type, in this order:

1. an optional date: ``2008-06-15``, ``2008/06/15``, ``06/15/2008`` (US),
   ``15.06.2008`` or ``15-06-2008`` (European), ``June 15, 2008``,
   ``15 June 2008`` or an ISO week date ``2008-W24-7``
2. an optional time after ``T`` or whitespace: ``10:00``, ``10:00:00``,
   ``10:00:00.250``, ``10:00 pm`` or ``3pm``
3. an optional zone: ``Z`` or ``+02:00`` attached to the time, or an offset
   (``+0200``, ``+02:00``, ``GMT+0200``) or a timezone identifier such as
   ``America/New_York`` after whitespace. A signed four-digit number followed
   by a unit word (``+1000 seconds``) is a relative shift, not an offset.
4. an optional relative tail understood by
   :func:`clockwork.parsing.adjustments.parse_adjustment`

Wall-clock fields are interpreted in the zone passed by the caller unless the
text names its own. Text with a time but no date uses today's date, text with
a date but no time means midnight, and purely relative text is evaluated
against the current time.
"""
from __future__ import annotations

import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Dict, Optional, Tuple
from zoneinfo import ZoneInfo

from clockwork.core.errors import InvalidDate, ParseError
from clockwork.core.time_utils import is_valid_timezone, now_utc

from .adjustments import Adjustment, apply_adjustment, parse_adjustment

_BOUNDARY = r"(?=\s|T|$)"

_DATE_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(?P<year>\d{4})-?W(?P<week>\d{2})(?:-?(?P<weekday>[1-7]))?" + _BOUNDARY,
        r"(?P<year>\d{4})-(?P<month>\d{1,2})-(?P<day>\d{1,2})" + _BOUNDARY,
        r"(?P<year>\d{4})/(?P<month>\d{1,2})/(?P<day>\d{1,2})" + _BOUNDARY,
        r"(?P<month>\d{1,2})/(?P<day>\d{1,2})/(?P<year>\d{4})" + _BOUNDARY,
        r"(?P<day>\d{1,2})[.\-](?P<month>\d{1,2})[.\-](?P<year>\d{4})" + _BOUNDARY,
        r"(?P<month_name>[a-z]+)\.?\s+(?P<day>\d{1,2})(?:st|nd|rd|th)?,?\s+(?P<year>\d{4})" + _BOUNDARY,
        r"(?P<day>\d{1,2})(?:st|nd|rd|th)?\s+(?P<month_name>[a-z]+)\.?,?\s+(?P<year>\d{4})" + _BOUNDARY,
    )
)

_DATE_TIME_SEPARATOR = re.compile(r"T|\s+", re.IGNORECASE)

_TIME_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"(?P<hour>\d{1,2}):(?P<minute>\d{2})(?::(?P<second>\d{2})(?:[.,]\d+)?)?"
        r"(?:\s*(?P<meridiem>[ap])\.?m\.?)?(?=\s|[+-]|Z|$)",
        r"(?P<hour>\d{1,2})\s*(?P<meridiem>[ap])\.?m\.?(?=\s|$)",
    )
)

_ATTACHED_OFFSET = re.compile(r"(?:(?P<utc>Z)|(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2}))(?=\s|$)", re.IGNORECASE)
_SPACED_OFFSET = re.compile(r"\s+(?:UTC|GMT)\s*(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})(?=\s|$)", re.IGNORECASE)
_SPACED_BARE_OFFSET = re.compile(r"\s+(?P<sign>[+-])(?P<hours>\d{2}):?(?P<minutes>\d{2})(?=\s|$)(?!\s*[A-Za-z])")
_SPACED_ZONE_NAME = re.compile(r"\s+(?P<name>[A-Za-z][A-Za-z0-9_+\-]*(?:/[A-Za-z0-9_+\-]+)*)(?=\s|$)")

_MONTHS: Dict[str, int] = {}
for _number, _name in enumerate(
    (
        "january",
        "february",
        "march",
        "april",
        "may",
        "june",
        "july",
        "august",
        "september",
        "october",
        "november",
        "december",
    ),
    start=1,
):
    _MONTHS[_name] = _number
    _MONTHS[_name[:3]] = _number
_MONTHS["sept"] = 9

DateFields = Tuple[int, int, int]
TimeFields = Tuple[int, int, int]


def parse_datetime(
    text: str,
    zone: tzinfo,
    *,
    now: Optional[datetime] = None,
    allow_zone: bool = True,
) -> datetime:
    """Parse ``text`` as a wall-clock reading in ``zone``.

    Returns an aware datetime expressed in ``zone``. Raises :class:`ParseError`
    for unreadable text (or for an explicit zone when ``allow_zone`` is
    False) and :class:`InvalidDate` for well-formed fields naming a day that
    does not exist, such as February 30th.
    """

    if not isinstance(text, str):
        raise ParseError(f"Expected date/time text, got {type(text).__name__}")
    source = " ".join(text.split())
    if not source:
        raise ParseError("Empty date/time text")

    date_fields, position = _match_date(source)
    time_fields: Optional[TimeFields] = None
    if date_fields is not None:
        separator = _DATE_TIME_SEPARATOR.match(source, position)
        if separator is not None:
            time_fields, time_end = _match_time(source, separator.end())
            if time_fields is not None:
                position = time_end
    else:
        time_fields, position = _match_time(source, 0)

    override: Optional[tzinfo] = None
    if date_fields is not None or time_fields is not None:
        override, position = _match_zone(source, position, attached=time_fields is not None)

    rest = source[position:]
    adjustment: Optional[Adjustment] = parse_adjustment(rest) if rest.strip() else None
    if adjustment is not None and adjustment.timezone is not None:
        if override is not None:
            raise ParseError(f"More than one timezone in {text!r}")
        override = ZoneInfo(adjustment.timezone)
        adjustment = None
    if override is not None and not allow_zone:
        raise ParseError(f"A timezone is not allowed in {text!r}")

    effective_zone = override or zone
    base = (now or now_utc()).astimezone(effective_zone)
    if date_fields is None and time_fields is None:
        moment = base.replace(microsecond=0)
    else:
        year, month, day = date_fields or (base.year, base.month, base.day)
        hour, minute, second = time_fields or (0, 0, 0)
        try:
            wall = datetime(year, month, day, hour, minute, second)
        except ValueError as exc:
            raise InvalidDate(
                f"The date specified, {year:04d}-{month:02d}-{day:02d}, does not appear to be a valid date"
            ) from exc
        moment = wall.replace(tzinfo=effective_zone, fold=0)

    if adjustment is not None:
        moment = apply_adjustment(adjustment, moment)
    try:
        return moment.astimezone(zone)
    except (OverflowError, ValueError) as exc:
        raise ParseError(f"The date/time {text!r} leaves the supported date range") from exc


def _match_date(source: str) -> Tuple[Optional[DateFields], int]:
    for pattern in _DATE_PATTERNS:
        match = pattern.match(source)
        if match is None:
            continue
        fields = match.groupdict()
        year = int(fields["year"])
        if fields.get("week") is not None:
            week = int(fields["week"])
            weekday = int(fields["weekday"] or 1)
            if not 1 <= week <= 53 or year < 1:
                raise ParseError(f"Invalid ISO week date {match.group(0)!r}")
            try:
                iso_date = date.fromisocalendar(year, week, weekday)
            except ValueError as exc:
                raise InvalidDate(f"The ISO date specified, {match.group(0)}, does not appear to be a valid ISO date") from exc
            return (iso_date.year, iso_date.month, iso_date.day), match.end()
        if fields.get("month_name") is not None:
            month = _MONTHS.get(fields["month_name"].lower())
            if month is None:
                continue
        else:
            month = int(fields["month"])
        day = int(fields["day"])
        if year < 1 or not 1 <= month <= 12 or not 1 <= day <= 31:
            raise ParseError(f"Date out of range in {match.group(0)!r}")
        return (year, month, day), match.end()
    return None, 0


def _match_time(source: str, position: int) -> Tuple[Optional[TimeFields], int]:
    for pattern in _TIME_PATTERNS:
        match = pattern.match(source, position)
        if match is None:
            continue
        hour = int(match.group("hour"))
        minute = int(match.groupdict().get("minute") or 0)
        second = int(match.groupdict().get("second") or 0)
        meridiem = match.group("meridiem")
        if meridiem is not None:
            if not 1 <= hour <= 12:
                raise ParseError(f"Invalid 12-hour time {match.group(0)!r}")
            hour = hour % 12 + (12 if meridiem.lower() == "p" else 0)
        if hour > 23 or minute > 59 or second > 59:
            raise ParseError(f"Time out of range in {match.group(0)!r}")
        return (hour, minute, second), match.end()
    return None, position


def _match_zone(source: str, position: int, *, attached: bool) -> Tuple[Optional[tzinfo], int]:
    if attached:
        match = _ATTACHED_OFFSET.match(source, position)
        if match is not None:
            if match.group("utc"):
                return timezone.utc, match.end()
            return _fixed_offset(match), match.end()
    for pattern in (_SPACED_OFFSET, _SPACED_BARE_OFFSET):
        match = pattern.match(source, position)
        if match is not None:
            return _fixed_offset(match), match.end()
    match = _SPACED_ZONE_NAME.match(source, position)
    if match is not None and is_valid_timezone(match.group("name")):
        return ZoneInfo(match.group("name")), match.end()
    return None, position


def _fixed_offset(match: re.Match[str]) -> tzinfo:
    hours = int(match.group("hours"))
    minutes = int(match.group("minutes"))
    if hours > 14 or minutes > 59:
        raise ParseError(f"Invalid UTC offset {match.group(0).strip()!r}")
    offset = timedelta(hours=hours, minutes=minutes)
    return timezone(-offset if match.group("sign") == "-" else offset)


__all__ = ["parse_datetime"]
