"""Mandated unpaid lunch placement and paid-hours calculation."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Tuple

from shiftguard.domain.models import Shift, ShiftDraft

from .timeplan import minutes_between, round_to_quarter


def plan_lunch(start: datetime, end: datetime, threshold_hours: float, lunch_minutes: int) -> Tuple[Optional[datetime], int]:
    """
    Decide whether a lunch is mandatory and where it starts.

    A shift strictly longer than the threshold gets a break at its
    midpoint, snapped to the nearest quarter hour.

    Returns:
        (lunch_start, lunch_duration_minutes); (None, 0) when no lunch
    """
    duration = minutes_between(start, end)
    if duration / 60 <= threshold_hours:
        return None, 0
    midpoint = start + timedelta(minutes=duration / 2)
    return round_to_quarter(midpoint), lunch_minutes


class LunchInserter:
    """Turns a finished draft into the final Shift."""

    def build_shift(self, draft: ShiftDraft, store, shift_id: str) -> Shift:
        raw_hours = draft.duration_minutes / 60
        lunch_start, lunch_duration = plan_lunch(
            draft.start, draft.end, store.lunch_threshold, store.lunch_duration
        )
        paid_hours = raw_hours - lunch_duration / 60 if lunch_duration > 0 else raw_hours
        emp = draft.employee
        return Shift(
            id=shift_id,
            employee_id=emp.id,
            employee_name=emp.name,
            role=emp.role,
            start=draft.start,
            end=draft.end,
            lunch_start=lunch_start,
            lunch_duration=lunch_duration,
            paid_hours=paid_hours,
            raw_duration_hours=raw_hours,
            status=draft.status,
            notes=tuple(draft.notes),
        )


def paid_minutes(shift: Shift) -> int:
    return minutes_between(shift.start, shift.end) - shift.lunch_duration
