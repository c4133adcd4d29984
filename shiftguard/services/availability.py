"""Clamp shifts to store hours and trim them against unavailability windows."""

from __future__ import annotations

from shiftguard.domain.models import ShiftDraft, ShiftStatus, UnavailableConstraint

from .base import AnalysisContext, ShiftRule
from .timeplan import anchor, format_hm


class AvailabilityTrimmer(ShiftRule):
    """
    Clamp to [open, close], then apply each applicable Unavailable window.

    Windows are applied one at a time in declaration order, each against
    the window left by the previous one. Exactly one outcome per
    overlapping window:

    - window covers the whole shift, or lies strictly inside it: removed
    - window starts inside the shift and runs past its end: end trimmed
    - window ends inside the shift and began before its start: start trimmed
    """

    name = "availability"

    def apply(self, draft: ShiftDraft, ctx: AnalysisContext) -> None:
        if draft.is_removed:
            # reversed or empty input line
            draft.remove(
                f"Removed: End time ({format_hm(draft.end)}) is not after start time ({format_hm(draft.start)})"
            )
            return
        self.clamp_to_store_hours(draft, ctx)
        if draft.is_removed:
            if draft.status != ShiftStatus.ERROR:
                draft.remove(
                    f"Removed: Outside store hours ({format_hm(ctx.open_at)}-{format_hm(ctx.close_at)})"
                )
            return

        for constraint in ctx.unavailable_for(draft.employee.id):
            self.trim_against(draft, constraint, ctx)
            if draft.is_removed:
                break

    def clamp_to_store_hours(self, draft: ShiftDraft, ctx: AnalysisContext) -> None:
        if draft.start < ctx.open_at:
            draft.start = ctx.open_at
            draft.modify(f"Trimmed start to Open Time ({format_hm(ctx.open_at)})")
        if draft.end > ctx.close_at:
            draft.end = ctx.close_at
            draft.modify(f"Trimmed end to Close Time ({format_hm(ctx.close_at)})")

    def trim_against(self, draft: ShiftDraft, constraint: UnavailableConstraint, ctx: AnalysisContext) -> None:
        block_start = anchor(ctx.reference_date, constraint.start_time)
        block_end = anchor(ctx.reference_date, constraint.end_time)

        # no overlap with the current window
        if not (draft.start < block_end and draft.end > block_start):
            return

        if block_start <= draft.start and block_end >= draft.end:
            draft.remove(f"Removed: Overlaps Unavailable ({format_hm(block_start)}-{format_hm(block_end)})")
        elif draft.start < block_start < draft.end and block_end >= draft.end:
            draft.end = block_start
            draft.modify(f"Trimmed end: Unavailable starts at {format_hm(block_start)}")
        elif draft.start < block_end < draft.end and block_start <= draft.start:
            draft.start = block_end
            draft.modify(f"Trimmed start: Unavailable ends at {format_hm(block_end)}")
        else:
            # window strictly inside the shift; no split into two segments
            draft.remove(f"Removed: Overlaps Unavailable ({format_hm(block_start)}-{format_hm(block_end)})")
