"""Totals, global diagnostics and final ordering."""

from __future__ import annotations

from typing import List, Sequence

from shiftguard.domain.models import ScheduleResult, Shift
from shiftguard.services.coverage import CoverageReport
from shiftguard.services.parser import PARSE_ERROR

ALL_REMOVED_ERROR = "All shifts were removed due to constraints"


def build_result(
    shifts: Sequence[Shift],
    coverage: CoverageReport,
    budget: float,
    input_text: str,
    candidate_count: int,
) -> ScheduleResult:
    """
    Assemble the ScheduleResult.

    Budget and coverage problems are reported, never corrected. The result
    is valid only when no diagnostic was produced.

    Args:
        shifts: Surviving shifts in processing order
        coverage: Slot counts for the operating window
        budget: Daily labor-hour budget
        input_text: Raw schedule text (used only to tell empty from non-empty input)
        candidate_count: Number of candidates the parser produced

    Returns:
        ScheduleResult with shifts sorted by start time
    """
    has_input = bool((input_text or "").strip())
    errors: List[str] = []

    if has_input and candidate_count == 0:
        errors.append(PARSE_ERROR)

    total_hours_used = sum(s.paid_hours for s in shifts)
    if total_hours_used > budget:
        errors.append(f"Over budget by {total_hours_used - budget:.2f} hours")

    if coverage.failures > 0:
        errors.append(
            f"Lunch Coverage: Min Staff ({coverage.min_staff}) violated for {coverage.failure_hours:g} hours"
        )

    if has_input and not shifts:
        errors.append(ALL_REMOVED_ERROR)

    return ScheduleResult(
        shifts=tuple(sorted(shifts, key=lambda s: s.start)),
        total_hours_used=total_hours_used,
        coverage=tuple(coverage.slots),
        is_valid=not errors,
        errors=tuple(errors),
    )
