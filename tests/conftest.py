from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator
from zoneinfo import ZoneInfo

import pytest

from clockwork.core.time_utils import default_timezone
from clockwork.formatting.registry import FormatRegistry


@pytest.fixture(autouse=True)
def utc_default_timezone() -> Iterator[str]:
    """Run every test with UTC as the default timezone and restore it afterwards."""

    with default_timezone("UTC") as tz_name:
        yield tz_name


@pytest.fixture
def registry() -> FormatRegistry:
    return FormatRegistry()


@pytest.fixture
def new_york() -> ZoneInfo:
    return ZoneInfo("America/New_York")


@pytest.fixture
def fixed_now() -> datetime:
    # Sunday, ISO week 24.
    return datetime(2008, 6, 15, 8, 0, 0, tzinfo=timezone.utc)
