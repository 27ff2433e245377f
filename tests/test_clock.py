"""Tests for local calendar-day helpers."""

from datetime import date, datetime, timezone

import pytest

from moodjournal.analytics.clock import (
    as_day,
    local_today,
    resolve_timezone,
    sunday_index,
    to_local_date,
    week_start,
)


def test_resolve_known_zone():
    """Should resolve IANA zone names."""
    tz = resolve_timezone("Asia/Tokyo")
    assert datetime(2025, 1, 1, tzinfo=timezone.utc).astimezone(tz).hour == 9


def test_resolve_utc_alias():
    """Should accept UTC in any case."""
    assert resolve_timezone("utc") is timezone.utc


def test_resolve_unknown_zone():
    """Should raise for unknown zones."""
    with pytest.raises(ValueError, match="Unknown time zone"):
        resolve_timezone("Mars/Olympus_Mons")


def test_local_date_respects_zone():
    """Should place a timestamp on the local calendar day."""
    moment = datetime(2025, 6, 30, 23, 30, tzinfo=timezone.utc)
    assert to_local_date(moment, timezone.utc) == date(2025, 6, 30)
    assert to_local_date(moment, resolve_timezone("Asia/Tokyo")) == date(2025, 7, 1)
    assert to_local_date(moment, resolve_timezone("America/New_York")) == date(2025, 6, 30)


def test_naive_datetimes_are_utc():
    """Should interpret naive datetimes as UTC."""
    naive = datetime(2025, 6, 30, 23, 30)
    assert to_local_date(naive, resolve_timezone("Asia/Tokyo")) == date(2025, 7, 1)


def test_iso_strings_are_parsed():
    """Should parse ISO-8601 strings, including a Z suffix."""
    assert to_local_date("2025-01-05T10:00:00Z") == date(2025, 1, 5)
    assert to_local_date("2025-01-05T23:00:00-05:00") == date(2025, 1, 6)


@pytest.mark.parametrize("value", [None, "", "yesterday", 12345, object()])
def test_unusable_values(value):
    """Should return None instead of raising for unusable timestamps."""
    assert to_local_date(value) is None


def test_week_start_is_sunday():
    """Should return the Sunday on or before the day."""
    assert week_start(date(2025, 1, 5)) == date(2025, 1, 5)
    assert week_start(date(2025, 1, 8)) == date(2025, 1, 5)
    assert week_start(date(2025, 1, 11)) == date(2025, 1, 5)
    assert week_start(date(2025, 1, 12)) == date(2025, 1, 12)


def test_sunday_index():
    """Should number weekdays from Sunday = 0."""
    assert sunday_index(date(2025, 6, 1)) == 0
    assert sunday_index(date(2025, 2, 1)) == 6


def test_local_today_and_anchor():
    """Should derive today and anchors in the given zone."""
    now = datetime(2025, 3, 1, 20, 0, tzinfo=timezone.utc)
    assert local_today(timezone.utc, now) == date(2025, 3, 1)
    assert local_today(resolve_timezone("Asia/Tokyo"), now) == date(2025, 3, 2)
    assert as_day(date(2025, 3, 1)) == date(2025, 3, 1)
    assert as_day("2025-03-01T20:00:00Z", resolve_timezone("Asia/Tokyo")) == date(2025, 3, 2)
    with pytest.raises(ValueError):
        as_day("not a date")


def test_out_of_range_instants_are_unusable():
    """Should return None when shifting into the zone leaves the date range."""
    new_york = resolve_timezone("America/New_York")
    tokyo = resolve_timezone("Asia/Tokyo")

    assert to_local_date("0001-01-01T00:00:00Z", new_york) is None
    assert to_local_date(datetime.max.replace(tzinfo=timezone.utc), tokyo) is None
    assert to_local_date(datetime.min.replace(tzinfo=timezone.utc)) == date(1, 1, 1)
