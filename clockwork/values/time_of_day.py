"""Zoneless time of day.

A :class:`TimeOfDay` carries hours, minutes and seconds only. Internally it is
a naive datetime pinned to :data:`REFERENCE_DATE`; the date never carries
meaning, so adjustments that cross midnight wrap around instead of moving to
another day, and calendar or timezone adjustments and format tokens are
refused outright.
"""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timezone
from typing import Optional

from clockwork.core.errors import (
    IllegalAdjustmentScope,
    IllegalFormatToken,
    InvalidAdjustment,
    InvalidDate,
    InvalidTimeFormat,
    ParseError,
)
from clockwork.core.time_utils import TimeZoneContext
from clockwork.core.types import FieldValue
from clockwork.formatting.registry import FormatRegistry, format_registry
from clockwork.formatting.tokens import CALENDAR_TOKENS, find_tokens, render
from clockwork.parsing.absolute import parse_datetime
from clockwork.parsing.adjustments import apply_adjustment, parse_adjustment

from .fields import HOUR_RANGE, MINUTE_RANGE, SECOND_RANGE, coerce_field

logger = logging.getLogger("clockwork.values")

REFERENCE_DATE = date(1970, 1, 1)
TIME_OF_DAY_FORMAT = "H:i:s"


def _pin(moment: datetime) -> datetime:
    return datetime.combine(REFERENCE_DATE, moment.time().replace(microsecond=0))


class TimeOfDay:
    """A time of day without a date or a timezone.

    ``TimeOfDay("14:30")``, ``TimeOfDay("2:30 pm")`` and ``TimeOfDay("noon")``
    all work; text naming a timezone or offset is rejected. Relative text is
    evaluated against the current time in the process default timezone.
    """

    __slots__ = ("_instant",)

    def __init__(self, time_text: str) -> None:
        context = TimeZoneContext.resolve()
        try:
            parsed = parse_datetime(time_text, context.zone, allow_zone=False)
        except (ParseError, InvalidDate) as exc:
            raise InvalidTimeFormat(f"The time specified, {time_text}, does not appear to be a valid time") from exc
        self._instant = _pin(parsed)

    @classmethod
    def parse(cls, time_text: str) -> "TimeOfDay":
        return cls(time_text)

    @property
    def instant(self) -> datetime:
        """The naive datetime on the reference date backing this value."""

        return self._instant

    def __str__(self) -> str:
        return self.format(TIME_OF_DAY_FORMAT)

    def __repr__(self) -> str:
        return f"TimeOfDay({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return self._instant == other._instant

    __hash__ = None  # type: ignore[assignment]

    def set_time(
        self,
        hour: Optional[FieldValue] = None,
        minute: Optional[FieldValue] = None,
        second: Optional[FieldValue] = None,
    ) -> None:
        """Replace the given fields; omitted fields keep their current value."""

        hour = coerce_field("hour", self._instant.hour if hour is None else hour, HOUR_RANGE)
        minute = coerce_field("minute", self._instant.minute if minute is None else minute, MINUTE_RANGE)
        second = coerce_field("second", self._instant.second if second is None else second, SECOND_RANGE)
        try:
            self._instant = datetime.combine(REFERENCE_DATE, time(hour, minute, second))
        except ValueError as exc:
            raise InvalidTimeFormat(
                f"The time specified, {hour:02d}:{minute:02d}:{second:02d}, does not appear to be a valid time"
            ) from exc

    def adjust(self, adjustment: str) -> None:
        """Shift by hours, minutes or seconds, e.g. ``"+1 hour -30 minutes"``."""

        self._instant = self._adjusted(adjustment)

    def format(
        self,
        format_or_name: str,
        adjustment: Optional[str] = None,
        *,
        registry: Optional[FormatRegistry] = None,
    ) -> str:
        """Render with a pattern or registered format name.

        ``adjustment`` is applied to a copy, so the stored time is unchanged.
        """

        pattern = (registry or format_registry).resolve(format_or_name)
        restricted = find_tokens(pattern, CALENDAR_TOKENS)
        if restricted:
            raise IllegalFormatToken(
                f"The formatting string, {pattern}, contains non-time formatting characters: {', '.join(restricted)}"
            )
        moment = self._adjusted(adjustment) if adjustment else self._instant
        return render(pattern, moment)

    def _adjusted(self, adjustment: str) -> datetime:
        try:
            parsed = parse_adjustment(adjustment)
        except ParseError as exc:
            raise InvalidAdjustment(
                f"The adjustment specified, {adjustment}, does not appear to be a valid relative time measurement"
            ) from exc
        if not parsed.is_clock_only or parsed.phrased:
            logger.debug("Rejected time of day adjustment", extra={"adjustment": adjustment})
            raise IllegalAdjustmentScope(
                f"The adjustment specified, {adjustment}, appears to be a date or timezone adjustment. "
                "Only adjustments of hours, minutes and seconds are allowed for times."
            )
        try:
            moment = apply_adjustment(parsed, self._instant.replace(tzinfo=timezone.utc))
        except ParseError as exc:
            raise InvalidAdjustment(f"The adjustment specified, {adjustment}, is out of range") from exc
        return _pin(moment)


__all__ = ["REFERENCE_DATE", "TIME_OF_DAY_FORMAT", "TimeOfDay"]
