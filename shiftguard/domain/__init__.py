"""Domain values and the roster/constraint store."""

from .models import (
    Constraint,
    CoverageSlot,
    Employee,
    NoSoloConstraint,
    RawCandidate,
    Role,
    ScheduleResult,
    Shift,
    ShiftDraft,
    ShiftStatus,
    UnavailableConstraint,
)
from .repositories import ConstraintRepository, EmployeeRepository

__all__ = [
    "Constraint",
    "CoverageSlot",
    "Employee",
    "NoSoloConstraint",
    "RawCandidate",
    "Role",
    "ScheduleResult",
    "Shift",
    "ShiftDraft",
    "ShiftStatus",
    "UnavailableConstraint",
    "EmployeeRepository",
    "ConstraintRepository",
]
