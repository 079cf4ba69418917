"""Timezone-aware calendar timestamp.

A :class:`Timestamp` stores an instant (whole seconds since the Unix epoch)
and the identifier of the zone it belongs to. Every field read, field write,
relative adjustment and rendering is evaluated on the wall clock of that
zone, through an explicit :class:`~clockwork.core.time_utils.TimeZoneContext`,
so setting the hour of a ``America/New_York`` timestamp sets the New York hour
whatever the process default timezone happens to be.

String conversion always renders UTC: ``str(ts)`` is comparable across
timestamps regardless of their zones.
"""
from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from clockwork.core.errors import (
    InvalidAdjustment,
    InvalidDate,
    InvalidDateTimeFormat,
    InvalidTimezone,
    ParseError,
)
from clockwork.core.time_utils import TimeZoneContext, is_valid_timezone, to_epoch_seconds
from clockwork.core.types import DateLike, EpochSeconds, FieldValue
from clockwork.formatting.registry import FormatRegistry, format_registry
from clockwork.formatting.tokens import render
from clockwork.parsing.absolute import parse_datetime
from clockwork.parsing.adjustments import Adjustment, apply_adjustment, parse_adjustment

from .fields import (
    DAY_OF_WEEK_RANGE,
    DAY_RANGE,
    HOUR_RANGE,
    MINUTE_RANGE,
    MONTH_RANGE,
    SECOND_RANGE,
    WEEK_RANGE,
    YEAR_RANGE,
    coerce_field,
)
from .time_of_day import TimeOfDay

logger = logging.getLogger("clockwork.values")

TIMESTAMP_FORMAT = "Y-m-d H:i:s"


def _resolve_zone(tz_name: str) -> TimeZoneContext:
    if not is_valid_timezone(tz_name):
        raise InvalidTimezone(f"The timezone specified, {tz_name}, is not a valid timezone")
    return TimeZoneContext.resolve(tz_name)


class Timestamp:
    """A date and time in a specific timezone.

    ``Timestamp("2008-06-15 10:00:00", "America/New_York")`` reads the text as
    New York wall time. Without a timezone the process default
    (:func:`~clockwork.core.time_utils.get_default_timezone`) is used.
    """

    __slots__ = ("_instant", "_timezone")

    def __init__(self, datetime_text: str, timezone: Optional[str] = None) -> None:
        context = _resolve_zone(timezone) if timezone is not None else TimeZoneContext.resolve()
        try:
            parsed = parse_datetime(datetime_text, context.zone)
        except ParseError as exc:
            raise InvalidDateTimeFormat(
                f"The date/time specified, {datetime_text}, does not appear to be a valid date/time"
            ) from exc
        self._timezone: str = context.name
        self._instant: EpochSeconds = to_epoch_seconds(parsed)

    @classmethod
    def combine(cls, date: DateLike, time_of_day: TimeOfDay, timezone: Optional[str] = None) -> "Timestamp":
        """Build a timestamp from a date value and a :class:`TimeOfDay`."""

        return cls(f"{date} {time_of_day}", timezone)

    @property
    def instant(self) -> EpochSeconds:
        """Seconds since the Unix epoch."""

        return self._instant

    def to_datetime(self) -> datetime:
        """Return an aware datetime on the wall clock of this timestamp's zone."""

        return self._context().observe(self._instant)

    def __str__(self) -> str:
        return self.format(TIMESTAMP_FORMAT, "UTC")

    def __repr__(self) -> str:
        return f"Timestamp({self.format(TIMESTAMP_FORMAT)!r}, timezone={self._timezone!r})"

    # Fields ----------------------------------------------------------------
    def set_date(
        self,
        year: Optional[FieldValue] = None,
        month: Optional[FieldValue] = None,
        day: Optional[FieldValue] = None,
    ) -> None:
        """Replace calendar fields, keeping the wall-clock time.

        Impossible dates such as February 31st raise :class:`InvalidDate`;
        nothing rolls over into the next month.
        """

        context = self._context()
        local = context.observe(self._instant)
        year = coerce_field("year", local.year if year is None else year, YEAR_RANGE)
        month = coerce_field("month", local.month if month is None else month, MONTH_RANGE)
        day = coerce_field("day", local.day if day is None else day, DAY_RANGE)
        try:
            wall = local.replace(tzinfo=None, year=year, month=month, day=day)
        except ValueError as exc:
            raise InvalidDate(
                f"The date specified, {year:04d}-{month:02d}-{day:02d}, does not appear to be a valid date"
            ) from exc
        self._instant = context.to_instant(wall)

    def set_iso_date(
        self,
        year: Optional[FieldValue] = None,
        week: Optional[FieldValue] = None,
        day_of_week: Optional[FieldValue] = None,
    ) -> None:
        """Replace the ISO year, week and weekday (Monday is 1), keeping the time."""

        context = self._context()
        local = context.observe(self._instant)
        iso_year, iso_week, iso_weekday = local.isocalendar()
        year = coerce_field("year", iso_year if year is None else year, YEAR_RANGE)
        week = coerce_field("week", iso_week if week is None else week, WEEK_RANGE)
        day_of_week = coerce_field("day_of_week", iso_weekday if day_of_week is None else day_of_week, DAY_OF_WEEK_RANGE)
        try:
            target = date.fromisocalendar(year, week, day_of_week)
        except ValueError as exc:
            raise InvalidDate(
                f"The ISO date specified, {year:04d}-W{week:02d}-{day_of_week}, does not appear to be a valid ISO date"
            ) from exc
        self._instant = context.to_instant(datetime.combine(target, local.time()))

    def set_time(
        self,
        hour: Optional[FieldValue] = None,
        minute: Optional[FieldValue] = None,
        second: Optional[FieldValue] = None,
    ) -> None:
        """Replace clock fields, keeping the calendar date."""

        context = self._context()
        local = context.observe(self._instant)
        hour = coerce_field("hour", local.hour if hour is None else hour, HOUR_RANGE)
        minute = coerce_field("minute", local.minute if minute is None else minute, MINUTE_RANGE)
        second = coerce_field("second", local.second if second is None else second, SECOND_RANGE)
        wall = local.replace(tzinfo=None, hour=hour, minute=minute, second=second)
        self._instant = context.to_instant(wall)

    # Timezone --------------------------------------------------------------
    def set_timezone(self, timezone: str) -> None:
        """Relabel the timestamp; the instant itself does not move."""

        context = _resolve_zone(timezone)
        previous = self._timezone
        self._timezone = context.name
        logger.debug("Timestamp timezone changed", extra={"previous_timezone": previous, "timezone": timezone})

    def get_timezone(self) -> str:
        return self._timezone

    # Adjustment and rendering ------------------------------------------------
    def adjust(self, adjustment: str) -> None:
        """Apply a relative adjustment (``"+1 day"``) or switch to a timezone (``"UTC"``)."""

        parsed = self._parse_adjustment(adjustment)
        if parsed.timezone is not None:
            self.set_timezone(parsed.timezone)
            return
        moment = self._apply(parsed, self.to_datetime())
        self._instant = to_epoch_seconds(moment)

    def format(
        self,
        format_or_name: str,
        adjustment: Optional[str] = None,
        registry: Optional[FormatRegistry] = None,
    ) -> str:
        """Render with a pattern or registered format name.

        A timezone ``adjustment`` renders the same instant as seen in that
        zone; a relative one renders an adjusted copy in this timestamp's zone.
        Neither changes the stored value.
        """

        pattern = (registry or format_registry).resolve(format_or_name)
        context = self._context()
        moment = context.observe(self._instant)
        if adjustment:
            parsed = self._parse_adjustment(adjustment)
            if parsed.timezone is not None:
                context = _resolve_zone(parsed.timezone)
                moment = context.observe(self._instant)
            else:
                moment = self._apply(parsed, moment)
        return render(pattern, moment, context.name)

    def _context(self) -> TimeZoneContext:
        return TimeZoneContext.resolve(self._timezone)

    @staticmethod
    def _parse_adjustment(adjustment: str) -> Adjustment:
        try:
            return parse_adjustment(adjustment)
        except ParseError as exc:
            raise InvalidAdjustment(
                f"The adjustment specified, {adjustment}, does not appear to be a valid relative date/time measurement"
            ) from exc

    @staticmethod
    def _apply(adjustment: Adjustment, moment: datetime) -> datetime:
        try:
            return apply_adjustment(adjustment, moment)
        except ParseError as exc:
            raise InvalidAdjustment(f"The adjustment specified, {adjustment.source}, is out of range") from exc


__all__ = ["TIMESTAMP_FORMAT", "Timestamp"]
