"""Time-of-day parsing, anchoring and quarter-hour rounding."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta

SLOT_MINUTES = 15

_HM_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def parse_time_string(time_str: str) -> time:
    """
    Parse a 24-hour ``HH:MM`` string.

    Raises:
        ValueError: If the string is not a valid time of day
    """
    match = _HM_RE.match(str(time_str))
    if not match:
        raise ValueError(f"Invalid time '{time_str}', expected HH:MM")
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        raise ValueError(f"Invalid time '{time_str}', expected HH:MM")
    return time(hour, minute)


def anchor(day: date, time_str: str) -> datetime:
    """Place an ``HH:MM`` string on the reference day."""
    return datetime.combine(day, parse_time_string(time_str))


def format_hm(moment: datetime) -> str:
    return moment.strftime("%H:%M")


def minutes_between(start: datetime, end: datetime) -> int:
    return int((end - start).total_seconds() // 60)


def weekday_index(day: date) -> int:
    """0 = Sunday ... 6 = Saturday, the convention of the roster store."""
    return day.isoweekday() % 7


def round_to_quarter(moment: datetime) -> datetime:
    """
    Snap a timestamp to the nearest 15-minute boundary.

    Seconds are dropped first. A remainder of 0-7 minutes rounds down,
    8-14 rounds up; already-rounded values come back unchanged.
    """
    moment = moment.replace(second=0, microsecond=0)
    remainder = moment.minute % SLOT_MINUTES
    if remainder == 0:
        return moment
    if remainder < 8:
        return moment - timedelta(minutes=remainder)
    return moment + timedelta(minutes=SLOT_MINUTES - remainder)
