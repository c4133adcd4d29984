"""Shift-length and weekly-hours compliance."""

from __future__ import annotations

import math
from datetime import timedelta
from typing import Dict

from shiftguard.domain.models import Employee, ShiftDraft, ShiftStatus

from .base import AnalysisContext, ShiftRule


def remaining_allowance_minutes(employee: Employee, paid_minutes_used: Dict[str, int]) -> float:
    """Paid minutes the employee may still work this week (may be negative)."""
    return employee.max_hours * 60 - paid_minutes_used.get(employee.id, 0)


class ComplianceAdjuster(ShiftRule):
    """
    Enforce, in order: minimum length (warning only), maximum length and
    the employee's remaining weekly allowance.

    The running total in ``ctx.paid_minutes_used`` is read here; the
    orchestrator adds this shift's final paid minutes after lunch is placed.
    """

    name = "compliance"

    def apply(self, draft: ShiftDraft, ctx: AnalysisContext) -> None:
        if draft.is_removed:
            return
        store = ctx.store
        self.check_min_length(draft, store.min_shift_length)
        self.enforce_max_length(draft, store.max_shift_length)
        self.enforce_weekly_cap(draft, ctx.paid_minutes_used)

    def check_min_length(self, draft: ShiftDraft, min_hours: float) -> None:
        hours = draft.duration_minutes / 60
        if 0 < hours < min_hours:
            draft.notes.append(f"Warning: Shift length ({hours:.1f}h) is below minimum ({min_hours:g}h)")
            if draft.status != ShiftStatus.ERROR:
                draft.status = ShiftStatus.MODIFIED

    def enforce_max_length(self, draft: ShiftDraft, max_hours: float) -> None:
        allowed = math.floor(max_hours * 60)
        if draft.duration_minutes > allowed:
            draft.end = draft.start + timedelta(minutes=allowed)
            draft.modify(f"Trimmed: Exceeds daily max shift ({max_hours:g}h)")

    def enforce_weekly_cap(self, draft: ShiftDraft, paid_minutes_used: Dict[str, int]) -> None:
        employee = draft.employee
        remaining = remaining_allowance_minutes(employee, paid_minutes_used)
        if draft.duration_minutes <= remaining:
            return
        allowed = math.floor(remaining) if remaining > 0 else 0
        if allowed <= 0:
            draft.remove(f"Removed: Max weekly hours exceeded ({employee.max_hours:g}h)")
        else:
            draft.end = draft.start + timedelta(minutes=allowed)
            draft.modify(f"Trimmed: Exceeds max weekly hours ({employee.max_hours:g}h)")
