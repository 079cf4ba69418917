"""Parsers for absolute date/time text and relative adjustments."""
from .absolute import parse_datetime
from .adjustments import (
    Adjustment,
    ClockAnchor,
    Now,
    Shift,
    TimezoneSwitch,
    WeekdayMove,
    apply_adjustment,
    parse_adjustment,
)

__all__ = [
    "Adjustment",
    "ClockAnchor",
    "Now",
    "Shift",
    "TimezoneSwitch",
    "WeekdayMove",
    "apply_adjustment",
    "parse_adjustment",
    "parse_datetime",
]
