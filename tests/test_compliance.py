"""Tests for shift-length and weekly-hours compliance."""

from conftest import MONDAY, at

from shiftguard.domain.models import ShiftDraft, ShiftStatus
from shiftguard.services.base import AnalysisContext
from shiftguard.services.constraints import ComplianceAdjuster, remaining_allowance_minutes


def _adjust(store, employee, start, end, used=None):
    ctx = AnalysisContext.build(store, [], MONDAY)
    ctx.paid_minutes_used.update(used or {})
    draft = ShiftDraft(employee=employee, start=at(start), end=at(end))
    ComplianceAdjuster().apply(draft, ctx)
    return draft


def test_short_shift_gets_warning_only(store, employees):
    draft = _adjust(store, employees[3], "09:00", "11:00")

    assert (draft.start, draft.end) == (at("09:00"), at("11:00"))
    assert draft.status == ShiftStatus.MODIFIED
    assert draft.notes == ["Warning: Shift length (2.0h) is below minimum (4h)"]


def test_long_shift_trimmed_to_max_length(store, employees):
    draft = _adjust(store, employees[2], "07:15", "21:15")

    assert draft.end == at("17:15")
    assert draft.status == ShiftStatus.MODIFIED
    assert draft.notes == ["Trimmed: Exceeds daily max shift (10h)"]


def test_shift_within_limits_unchanged(store, employees):
    draft = _adjust(store, employees[2], "09:00", "17:00")

    assert draft.status == ShiftStatus.OK
    assert draft.notes == []


def test_weekly_cap_truncates_to_remaining_allowance(store, employees):
    frank = employees[5]  # 15h cap
    draft = _adjust(store, frank, "09:00", "17:00", used={frank.id: 570})

    assert draft.end == at("14:30")
    assert draft.status == ShiftStatus.MODIFIED
    assert draft.notes == ["Trimmed: Exceeds max weekly hours (15h)"]


def test_weekly_cap_exhausted_removes_shift(store, employees):
    frank = employees[5]
    draft = _adjust(store, frank, "09:00", "17:00", used={frank.id: 900})

    assert draft.is_removed
    assert draft.status == ShiftStatus.ERROR
    assert draft.notes == ["Removed: Max weekly hours exceeded (15h)"]


def test_weekly_cap_exactly_reached_is_allowed(store, employees):
    frank = employees[5]
    draft = _adjust(store, frank, "09:00", "17:00", used={frank.id: 420})

    assert draft.status == ShiftStatus.OK
    assert draft.end == at("17:00")


def test_removed_draft_is_left_alone(store, employees):
    ctx = AnalysisContext.build(store, [], MONDAY)
    draft = ShiftDraft(employee=employees[0], start=at("09:00"), end=at("09:00"), status=ShiftStatus.ERROR)
    ComplianceAdjuster().apply(draft, ctx)

    assert draft.notes == []


def test_remaining_allowance(employees):
    eve = employees[4]
    assert remaining_allowance_minutes(eve, {}) == 1200
    assert remaining_allowance_minutes(eve, {eve.id: 1230}) == -30
