"""Tests for time parsing and quarter-hour rounding."""

from datetime import date, datetime, timedelta

import pytest

from shiftguard.services.timeplan import (
    parse_time_string,
    round_to_quarter,
    weekday_index,
)


def test_parse_time_string():
    """Test time string parsing."""
    t = parse_time_string("07:30")
    assert t.hour == 7
    assert t.minute == 30

    assert parse_time_string("9:05").hour == 9


@pytest.mark.parametrize("bad", ["24:00", "12:60", "noon", "", "7.30", "07:3"])
def test_parse_time_string_rejects_invalid(bad):
    with pytest.raises(ValueError):
        parse_time_string(bad)


def test_round_remainder_below_eight_rounds_down():
    base = datetime(2025, 9, 1, 12, 0)
    for remainder in range(0, 8):
        assert round_to_quarter(base + timedelta(minutes=remainder)) == base


def test_round_remainder_eight_or_more_rounds_up():
    base = datetime(2025, 9, 1, 12, 0)
    for remainder in range(8, 15):
        assert round_to_quarter(base + timedelta(minutes=remainder)) == base + timedelta(minutes=15)


def test_round_across_hour_boundary():
    assert round_to_quarter(datetime(2025, 9, 1, 12, 53)) == datetime(2025, 9, 1, 13, 0)


def test_round_is_idempotent():
    start = datetime(2025, 9, 1, 0, 0)
    for minute in range(0, 24 * 60, 7):
        once = round_to_quarter(start + timedelta(minutes=minute))
        assert round_to_quarter(once) == once
        assert once.minute % 15 == 0


def test_round_drops_seconds():
    assert round_to_quarter(datetime(2025, 9, 1, 11, 7, 30)) == datetime(2025, 9, 1, 11, 0)


def test_weekday_index_starts_on_sunday():
    assert weekday_index(date(2025, 8, 31)) == 0  # Sunday
    assert weekday_index(date(2025, 9, 1)) == 1  # Monday
    assert weekday_index(date(2025, 9, 6)) == 6  # Saturday
