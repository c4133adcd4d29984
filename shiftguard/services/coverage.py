"""Concurrent-staffing counts over fixed 15-minute slots."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Sequence

from shiftguard.domain.models import CoverageSlot, Shift

from .timeplan import SLOT_MINUTES, minutes_between


@dataclass(frozen=True)
class CoverageReport:
    slots: List[CoverageSlot]
    failures: int
    min_staff: int

    @property
    def failure_hours(self) -> float:
        return self.failures * SLOT_MINUTES / 60


def analyze_coverage(
    shifts: Sequence[Shift],
    open_at: datetime,
    close_at: datetime,
    min_staff: int,
) -> CoverageReport:
    """
    Count working staff per slot of [open_at, close_at).

    A shift counts for slot [t, t+15) when it overlaps the slot and the
    employee is not on lunch at t. Slots below ``min_staff`` are failures.

    Args:
        shifts: Surviving shifts
        open_at: Start of the operating window
        close_at: End of the operating window
        min_staff: Required concurrent staff (from the NoSolo rule)

    Returns:
        CoverageReport with one slot per quarter hour
    """
    slot_count = math.ceil(minutes_between(open_at, close_at) / SLOT_MINUTES)
    slots: List[CoverageSlot] = []
    failures = 0

    for i in range(slot_count):
        t = open_at + timedelta(minutes=i * SLOT_MINUTES)
        next_t = t + timedelta(minutes=SLOT_MINUTES)
        working = [
            s for s in shifts
            if s.start < next_t and s.end > t and not s.is_on_lunch(t)
        ]
        if len(working) < min_staff:
            failures += 1
        slots.append(
            CoverageSlot(
                time=t,
                count=len(working),
                has_manager=any(s.is_manager for s in working),
            )
        )

    return CoverageReport(slots=slots, failures=failures, min_staff=min_staff)
