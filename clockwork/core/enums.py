"""Enumerations shared across clockwork subsystems.

Adjustment units and weekdays are referenced by both the adjustment grammar
and the value types, so they live in the core package.
"""
from __future__ import annotations

from enum import Enum, IntEnum


class AdjustmentUnit(str, Enum):
    """Unit of a relative shift such as ``+2 hours``."""

    SECOND = "second"
    MINUTE = "minute"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def is_clock(self) -> bool:
        """True for units that never touch the calendar date on their own."""

        return self in (AdjustmentUnit.SECOND, AdjustmentUnit.MINUTE, AdjustmentUnit.HOUR)

    @property
    def seconds(self) -> int:
        """Length of a clock unit in seconds (0 for calendar units)."""

        return _CLOCK_SECONDS.get(self, 0)


_CLOCK_SECONDS = {
    AdjustmentUnit.SECOND: 1,
    AdjustmentUnit.MINUTE: 60,
    AdjustmentUnit.HOUR: 3600,
}


class Weekday(IntEnum):
    """ISO weekday numbers (Monday is 1)."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7
