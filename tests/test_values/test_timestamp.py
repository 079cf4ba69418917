from __future__ import annotations

from datetime import date

import pytest

from clockwork.core.errors import (
    InvalidAdjustment,
    InvalidDate,
    InvalidDateTimeFormat,
    InvalidField,
    InvalidTimezone,
)
from clockwork.core.time_utils import default_timezone
from clockwork.formatting.registry import FormatRegistry, register_format
from clockwork.values.time_of_day import TimeOfDay
from clockwork.values.timestamp import Timestamp


@pytest.fixture
def ny_morning() -> Timestamp:
    # Sunday 2008-06-15 10:00 EDT, 14:00 UTC
    return Timestamp("2008-06-15 10:00:00", "America/New_York")


def test_timestamp_should_convert_wall_time_to_utc_with_dst(ny_morning: Timestamp) -> None:
    assert ny_morning.format("Y-m-d H:i:s", "UTC") == "2008-06-15 14:00:00"
    winter = Timestamp("2008-01-15 10:00:00", "America/New_York")
    assert winter.format("Y-m-d H:i:s", "UTC") == "2008-01-15 15:00:00"


def test_timestamp_string_conversion_should_render_utc(ny_morning: Timestamp) -> None:
    assert str(ny_morning) == "2008-06-15 14:00:00"
    assert ny_morning.get_timezone() == "America/New_York"
    assert repr(ny_morning) == "Timestamp('2008-06-15 10:00:00', timezone='America/New_York')"


def test_timestamp_should_default_to_process_timezone() -> None:
    assert Timestamp("2008-06-15 10:00:00").get_timezone() == "UTC"
    with default_timezone("Europe/London"):
        london = Timestamp("2008-06-15 10:00:00")
    assert london.get_timezone() == "Europe/London"
    assert str(london) == "2008-06-15 09:00:00"


def test_timestamp_should_prefer_offset_written_in_text() -> None:
    stamp = Timestamp("2008-06-15T10:00:00+02:00", "America/New_York")
    assert str(stamp) == "2008-06-15 08:00:00"
    assert stamp.get_timezone() == "America/New_York"
    assert stamp.format("H:i") == "04:00"


def test_timestamp_should_expose_instant_and_aware_datetime(ny_morning: Timestamp) -> None:
    assert ny_morning.instant == 1213538400
    moment = ny_morning.to_datetime()
    assert (moment.hour, moment.tzinfo.key) == (10, "America/New_York")


def test_timestamp_should_reject_unknown_timezone() -> None:
    with pytest.raises(InvalidTimezone):
        Timestamp("2008-06-15 10:00:00", "Mars/Olympus_Mons")


def test_timestamp_should_reject_impossible_date() -> None:
    with pytest.raises(InvalidDate):
        Timestamp("2008-02-30")


@pytest.mark.parametrize("text", ["", "yesterday-ish", "2008-13-45", "10:00 Nowhere/Zone"])
def test_timestamp_should_reject_unreadable_text(text: str) -> None:
    with pytest.raises(InvalidDateTimeFormat):
        Timestamp(text, "UTC")


def test_timestamp_should_accept_relative_text() -> None:
    assert Timestamp("tomorrow", "Asia/Tokyo").format("H:i:s") == "00:00:00"


def test_combine_should_join_date_and_time_of_day() -> None:
    stamp = Timestamp.combine(date(2008, 6, 15), TimeOfDay("10:00"), "America/New_York")
    assert str(stamp) == "2008-06-15 14:00:00"
    assert stamp.get_timezone() == "America/New_York"
    with pytest.raises(InvalidTimezone):
        Timestamp.combine(date(2008, 6, 15), TimeOfDay("10:00"), "Nowhere/Zone")


def test_set_timezone_should_relabel_without_moving_instant(ny_morning: Timestamp) -> None:
    before = str(ny_morning)
    ny_morning.set_timezone("Europe/Paris")
    assert ny_morning.get_timezone() == "Europe/Paris"
    assert str(ny_morning) == before
    assert ny_morning.format("H:i T") == "16:00 CEST"


def test_set_timezone_should_change_how_fields_are_written(ny_morning: Timestamp) -> None:
    ny_morning.set_timezone("Europe/Paris")
    ny_morning.set_time(hour=9)
    assert str(ny_morning) == "2008-06-15 07:00:00"


def test_set_timezone_should_reject_unknown_zone(ny_morning: Timestamp) -> None:
    with pytest.raises(InvalidTimezone):
        ny_morning.set_timezone("Nowhere/Zone")
    with pytest.raises(InvalidTimezone):
        ny_morning.set_timezone("")
    assert ny_morning.get_timezone() == "America/New_York"


def test_set_date_should_rebuild_in_own_timezone() -> None:
    tokyo = Timestamp("2008-06-15 01:00:00", "Asia/Tokyo")
    assert str(tokyo) == "2008-06-14 16:00:00"
    tokyo.set_date(day=20)
    assert tokyo.format("Y-m-d H:i:s") == "2008-06-20 01:00:00"
    assert str(tokyo) == "2008-06-19 16:00:00"


def test_set_date_should_accept_numeric_strings(ny_morning: Timestamp) -> None:
    ny_morning.set_date("2010", "1", "05")
    assert ny_morning.format("Y-m-d H:i:s") == "2010-01-05 10:00:00"
    assert str(ny_morning) == "2010-01-05 15:00:00"


def test_set_date_should_refuse_rollover(ny_morning: Timestamp) -> None:
    with pytest.raises(InvalidDate):
        ny_morning.set_date(month=2, day=31)
    with pytest.raises(InvalidDate):
        ny_morning.set_date(month=6, day=31)
    assert str(ny_morning) == "2008-06-15 14:00:00"


@pytest.mark.parametrize(
    ("kwargs", "field"),
    [
        ({"year": 1900}, "year"),
        ({"year": 2039}, "year"),
        ({"month": 0}, "month"),
        ({"month": 13}, "month"),
        ({"day": 0}, "day"),
        ({"day": 32}, "day"),
        ({"day": "abc"}, "day"),
    ],
)
def test_set_date_should_reject_out_of_range_fields(ny_morning: Timestamp, kwargs: dict, field: str) -> None:
    with pytest.raises(InvalidField) as exc_info:
        ny_morning.set_date(**kwargs)
    assert exc_info.value.field == field
    assert str(ny_morning) == "2008-06-15 14:00:00"


def test_set_date_should_accept_range_limits(ny_morning: Timestamp) -> None:
    ny_morning.set_date(year=1901)
    assert ny_morning.format("Y") == "1901"
    ny_morning.set_date(year=2038)
    assert ny_morning.format("Y") == "2038"


def test_set_iso_date_should_use_iso_weeks(ny_morning: Timestamp) -> None:
    ny_morning.set_iso_date(2008, 1, 1)
    assert ny_morning.format("Y-m-d H:i:s") == "2007-12-31 10:00:00"
    ny_morning.set_iso_date(2009, 53, 1)
    assert ny_morning.format("Y-m-d") == "2009-12-28"


def test_set_iso_date_should_keep_omitted_fields(ny_morning: Timestamp) -> None:
    ny_morning.set_iso_date(day_of_week=1)
    assert ny_morning.format("Y-m-d l") == "2008-06-09 Monday"
    ny_morning.set_iso_date(week=25)
    assert ny_morning.format("Y-m-d l") == "2008-06-16 Monday"


def test_set_iso_date_should_reject_missing_week(ny_morning: Timestamp) -> None:
    with pytest.raises(InvalidDate):
        ny_morning.set_iso_date(2008, 53, 1)
    assert ny_morning.format("Y-m-d") == "2008-06-15"


@pytest.mark.parametrize(
    ("kwargs", "field"),
    [({"week": 0}, "week"), ({"week": 54}, "week"), ({"day_of_week": 0}, "day_of_week"), ({"day_of_week": 8}, "day_of_week")],
)
def test_set_iso_date_should_reject_out_of_range_fields(ny_morning: Timestamp, kwargs: dict, field: str) -> None:
    with pytest.raises(InvalidField) as exc_info:
        ny_morning.set_iso_date(**kwargs)
    assert exc_info.value.field == field


def test_set_time_should_keep_date_in_own_timezone(ny_morning: Timestamp) -> None:
    ny_morning.set_time(23, 15, 0)
    assert ny_morning.format("Y-m-d H:i:s") == "2008-06-15 23:15:00"
    assert str(ny_morning) == "2008-06-16 03:15:00"
    ny_morning.set_time(second=30)
    assert ny_morning.format("H:i:s") == "23:15:30"


def test_set_time_should_reject_invalid_fields(ny_morning: Timestamp) -> None:
    with pytest.raises(InvalidField) as exc_info:
        ny_morning.set_time(minute=75)
    assert exc_info.value.field == "minute"
    assert exc_info.value.value == 75
    assert str(ny_morning) == "2008-06-15 14:00:00"


def test_adjust_with_timezone_name_should_match_set_timezone(ny_morning: Timestamp) -> None:
    other = Timestamp("2008-06-15 10:00:00", "America/New_York")
    ny_morning.adjust("UTC")
    other.set_timezone("UTC")
    assert ny_morning.get_timezone() == other.get_timezone() == "UTC"
    assert ny_morning.instant == other.instant
    assert ny_morning.format("H:i") == "14:00"


def test_adjust_by_day_should_keep_wall_clock_across_dst() -> None:
    stamp = Timestamp("2008-03-08 12:00:00", "America/New_York")
    stamp.adjust("+1 day")
    assert stamp.format("Y-m-d H:i:s T") == "2008-03-09 12:00:00 EDT"
    assert str(stamp) == "2008-03-09 16:00:00"


def test_adjust_by_hours_should_count_elapsed_time() -> None:
    stamp = Timestamp("2008-03-08 12:00:00", "America/New_York")
    stamp.adjust("+24 hours")
    assert stamp.format("Y-m-d H:i:s") == "2008-03-09 13:00:00"


def test_adjust_should_evaluate_in_own_timezone() -> None:
    tokyo = Timestamp("2008-06-15 01:00:00", "Asia/Tokyo")
    tokyo.adjust("midnight")
    assert tokyo.format("Y-m-d H:i:s") == "2008-06-15 00:00:00"
    assert str(tokyo) == "2008-06-14 15:00:00"


def test_adjust_should_accept_calendar_expressions(ny_morning: Timestamp) -> None:
    ny_morning.adjust("next monday")
    assert ny_morning.format("Y-m-d H:i:s") == "2008-06-16 00:00:00"
    ny_morning.adjust("+1 month 2 days")
    assert ny_morning.format("Y-m-d") == "2008-07-18"


def test_adjust_should_reject_unreadable_expression(ny_morning: Timestamp) -> None:
    with pytest.raises(InvalidAdjustment):
        ny_morning.adjust("a little later")
    with pytest.raises(InvalidAdjustment):
        ny_morning.adjust("+100000 years")
    assert str(ny_morning) == "2008-06-15 14:00:00"


def test_format_with_timezone_should_not_change_stored_zone(ny_morning: Timestamp) -> None:
    assert ny_morning.format("Y-m-d H:i:s T e", "Europe/London") == "2008-06-15 15:00:00 BST Europe/London"
    assert ny_morning.get_timezone() == "America/New_York"


def test_format_with_relative_adjustment_should_not_mutate(ny_morning: Timestamp) -> None:
    assert ny_morning.format("Y-m-d H:i", "+1 day -2 hours") == "2008-06-16 08:00"
    assert ny_morning.format("Y-m-d H:i") == "2008-06-15 10:00"
    with pytest.raises(InvalidAdjustment):
        ny_morning.format("Y-m-d", "whenever")


def test_format_should_render_full_token_set(ny_morning: Timestamp) -> None:
    assert ny_morning.format("c") == "2008-06-15T10:00:00-04:00"
    assert ny_morning.format("r") == "Sun, 15 Jun 2008 10:00:00 -0400"
    assert ny_morning.format("e") == "America/New_York"
    assert ny_morning.format("U") == "1213538400"


def test_format_should_resolve_registered_names(ny_morning: Timestamp, registry: FormatRegistry) -> None:
    register_format("timestamp_test_long", "l, F jS, Y")
    registry.register("timestamp_test_long", "Y")
    assert ny_morning.format("timestamp_test_long") == "Sunday, June 15th, 2008"
    assert ny_morning.format("timestamp_test_long", registry=registry) == "2008"


def test_timestamp_should_read_spaced_compact_offset() -> None:
    stamp = Timestamp("2008-06-15 10:00:00 +0200", "UTC")
    assert str(stamp) == "2008-06-15 08:00:00"
    assert stamp.get_timezone() == "UTC"


def test_timestamp_should_reject_offset_leaving_supported_range() -> None:
    with pytest.raises(InvalidDateTimeFormat):
        Timestamp("0001-01-01 00:00:00+05:00", "UTC")


def test_timestamp_should_reject_explicit_empty_timezone() -> None:
    with pytest.raises(InvalidTimezone):
        Timestamp("2008-06-15 10:00:00", "")
    with pytest.raises(InvalidTimezone):
        Timestamp.combine(date(2008, 6, 15), TimeOfDay("10:00"), "")
