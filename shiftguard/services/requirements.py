"""Constraint lookups for one analysis day."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List

from shiftguard.domain.models import Constraint, NoSoloConstraint, UnavailableConstraint

DEFAULT_MIN_STAFF = 2


def resolve_min_staff(constraints: Iterable[Constraint]) -> int:
    """
    Minimum concurrent staff required in every coverage slot.

    The first active NoSolo rule wins; no rule, or a rule without a
    positive count, means the default of 2.
    """
    for c in constraints:
        if isinstance(c, NoSoloConstraint) and c.is_active:
            return c.min_staff_count or DEFAULT_MIN_STAFF
    return DEFAULT_MIN_STAFF


def unavailability_by_employee(
    constraints: Iterable[Constraint],
    weekday: int,
) -> Dict[str, List[UnavailableConstraint]]:
    """
    Active Unavailable windows that apply on ``weekday``, grouped by employee.

    Declaration order is kept within each employee's list.
    """
    by_emp: Dict[str, List[UnavailableConstraint]] = defaultdict(list)
    for c in constraints:
        if not isinstance(c, UnavailableConstraint) or not c.is_active:
            continue
        if not c.applies_on(weekday):
            continue
        by_emp[c.employee_id].append(c)
    return dict(by_emp)
