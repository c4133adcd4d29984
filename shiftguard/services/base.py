"""Per-call analysis context and the interface every shift rule implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, Dict, Iterable, List

from shiftguard.domain.models import Constraint, ShiftDraft, UnavailableConstraint

from .requirements import resolve_min_staff, unavailability_by_employee
from .timeplan import anchor, weekday_index

if TYPE_CHECKING:
    from shiftguard.config import StoreConfig


@dataclass
class AnalysisContext:
    """
    Working state for a single analysis call.

    Built fresh inside every call and never shared, so concurrent calls
    stay independent. ``paid_minutes_used`` is the per-employee running
    total of paid minutes, in parse order.
    """

    store: StoreConfig
    reference_date: date
    open_at: datetime
    close_at: datetime
    weekday: int
    min_staff: int
    unavailable: Dict[str, List[UnavailableConstraint]] = field(default_factory=dict)
    paid_minutes_used: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def build(cls, store: StoreConfig, constraints: Iterable[Constraint], reference_date: date) -> "AnalysisContext":
        constraints = list(constraints)
        weekday = weekday_index(reference_date)
        return cls(
            store=store,
            reference_date=reference_date,
            open_at=anchor(reference_date, store.open_time),
            close_at=anchor(reference_date, store.close_time),
            weekday=weekday,
            min_staff=resolve_min_staff(constraints),
            unavailable=unavailability_by_employee(constraints, weekday),
        )

    def unavailable_for(self, employee_id: str) -> List[UnavailableConstraint]:
        return self.unavailable.get(employee_id, [])

    def record_paid_minutes(self, employee_id: str, minutes: int) -> None:
        self.paid_minutes_used[employee_id] = self.paid_minutes_used.get(employee_id, 0) + minutes


class ShiftRule(ABC):
    """
    One adjustment step applied to a candidate's working window.

    Rules run in a fixed order; each sees the window left by the previous one.
    """

    name: str = "rule"

    @abstractmethod
    def apply(self, draft: ShiftDraft, ctx: AnalysisContext) -> None:
        """
        Adjust ``draft`` in place, appending a note for every change.

        Args:
            draft: Working window for one candidate
            ctx: Per-call analysis context
        """
        pass
