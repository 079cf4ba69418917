"""Utilities for dealing with timezones and instants.

Every timezone-sensitive operation in the package receives an explicit
:class:`TimeZoneContext` instead of consulting process state, so parsing and
rendering in a foreign zone never has to switch anything global. The only
process-wide setting is the default timezone used when a caller names none;
it is guarded by a lock and can be swapped for a scope with
:func:`default_timezone`, which always restores the previous value.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterator
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .errors import InvalidTimezone
from .types import EpochSeconds, TimezoneName

logger = logging.getLogger("clockwork.time")

DEFAULT_TZ_NAME = "UTC"

_default_lock = threading.RLock()
_default_tz_name: str = DEFAULT_TZ_NAME


def is_valid_timezone(tz_name: object) -> bool:
    """Return True when ``tz_name`` resolves to a zone in the tz database."""

    if not isinstance(tz_name, str) or not tz_name.strip():
        return False
    try:
        ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True


def get_app_timezone(tz_name: str | None = None) -> ZoneInfo:
    """Return the ZoneInfo object for ``tz_name`` or the process default."""

    target_name = tz_name or get_default_timezone()
    if not is_valid_timezone(target_name):
        raise InvalidTimezone(f"The timezone specified, {target_name}, is not a valid timezone")
    return ZoneInfo(target_name)


def get_default_timezone() -> str:
    """Return the timezone used when a caller does not name one."""

    with _default_lock:
        return _default_tz_name


def set_default_timezone(tz_name: str) -> None:
    """Replace the process default timezone, rejecting unknown identifiers."""

    global _default_tz_name
    if not is_valid_timezone(tz_name):
        raise InvalidTimezone(f"The timezone specified, {tz_name}, does not appear to be a valid timezone")
    with _default_lock:
        previous = _default_tz_name
        _default_tz_name = tz_name
    logger.info("Default timezone changed", extra={"previous_timezone": previous, "timezone": tz_name})


@contextmanager
def default_timezone(tz_name: str) -> Iterator[str]:
    """Make ``tz_name`` the default timezone for the body of a ``with`` block.

    The lock is held for the whole block, so concurrent scopes are serialized,
    and the previous default is restored on every exit path.
    """

    global _default_tz_name
    if not is_valid_timezone(tz_name):
        raise InvalidTimezone(f"The timezone specified, {tz_name}, does not appear to be a valid timezone")
    with _default_lock:
        previous = _default_tz_name
        _default_tz_name = tz_name
        try:
            yield tz_name
        finally:
            _default_tz_name = previous


def now_utc() -> datetime:
    """Return the current UTC datetime with tzinfo."""

    return datetime.now(timezone.utc)


def now_in_timezone(tz_name: str | None = None) -> datetime:
    """Return the current datetime localized to the provided timezone."""

    tz = get_app_timezone(tz_name)
    return datetime.now(tz)


def to_epoch_seconds(dt: datetime) -> EpochSeconds:
    """Convert an aware datetime to whole seconds since the Unix epoch."""

    if dt.tzinfo is None:
        raise ValueError("Datetime must be timezone-aware before conversion")
    return EpochSeconds(int(dt.timestamp() // 1))


@dataclass(frozen=True, slots=True)
class TimeZoneContext:
    """A resolved timezone handed to parsers, evaluators and the formatter."""

    name: TimezoneName
    zone: ZoneInfo

    @classmethod
    def resolve(cls, tz_name: str | None = None) -> "TimeZoneContext":
        """Build a context for ``tz_name`` (the process default when omitted)."""

        target_name = tz_name or get_default_timezone()
        return cls(name=TimezoneName(target_name), zone=get_app_timezone(target_name))

    def observe(self, instant: int) -> datetime:
        """Return the wall-clock reading of ``instant`` in this zone."""

        return datetime.fromtimestamp(instant, tz=self.zone)

    def localize(self, naive: datetime) -> datetime:
        """Attach this zone to a wall-clock datetime (first fold when ambiguous)."""

        return naive.replace(tzinfo=self.zone, fold=0)

    def to_instant(self, naive: datetime) -> EpochSeconds:
        """Return the instant a wall-clock reading in this zone refers to."""

        return to_epoch_seconds(self.localize(naive))

    def now(self) -> datetime:
        return now_utc().astimezone(self.zone)
