"""Value types shared by the parser, the per-shift rules and the aggregator."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Tuple, Union


class Role(str, Enum):
    """Staffing category. Display labels belong to the presentation layer."""

    MANAGER = "MANAGER"
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"

    @classmethod
    def parse(cls, value: str | "Role" | None) -> "Role":
        """
        Map an enum name or a free-form roster label to a Role.

        Recognises the labels produced by roster sheets and the schedule
        scanner (Mgr, Lead, FT, PT, Associate, ...). Unknown labels fall back
        to PART_TIME.
        """
        if isinstance(value, Role):
            return value
        text = str(value or "").strip().upper().replace("-", " ").replace("_", " ")
        text = " ".join(text.split())
        if text in ("MANAGER", "MGR", "LEAD"):
            return cls.MANAGER
        if text in ("FULL TIME", "FULLTIME", "FT"):
            return cls.FULL_TIME
        return cls.PART_TIME


class ShiftStatus(str, Enum):
    OK = "OK"
    MODIFIED = "MODIFIED"
    ERROR = "ERROR"


@dataclass(frozen=True)
class Employee:
    """Roster entry. Immutable for the duration of one analysis call."""

    id: str
    name: str
    role: Role
    max_hours: float
    email: Optional[str] = None
    phone: Optional[str] = None
    preferences: Optional[str] = None


@dataclass(frozen=True)
class NoSoloConstraint:
    """Minimum number of concurrently working (non-lunching) staff."""

    id: str
    is_active: bool = True
    min_staff_count: int = 2

    kind = "NO_SOLO"


@dataclass(frozen=True)
class UnavailableConstraint:
    """
    Time window during which one employee cannot work.

    ``days_of_week`` uses 0 = Sunday ... 6 = Saturday; empty means every day.
    """

    id: str
    employee_id: str
    start_time: str
    end_time: str
    days_of_week: FrozenSet[int] = frozenset()
    reason: str = ""
    is_active: bool = True

    kind = "UNAVAILABLE"

    def applies_on(self, weekday: int) -> bool:
        return not self.days_of_week or weekday in self.days_of_week


Constraint = Union[NoSoloConstraint, UnavailableConstraint]


@dataclass(frozen=True)
class RawCandidate:
    """Parser output: one matched line, anchored to the reference day."""

    employee: Employee
    start: datetime
    end: datetime
    line_number: int = 0


@dataclass
class ShiftDraft:
    """Working window for one candidate while the rules are applied."""

    employee: Employee
    start: datetime
    end: datetime
    status: ShiftStatus = ShiftStatus.OK
    notes: List[str] = field(default_factory=list)

    @property
    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() // 60)

    @property
    def is_removed(self) -> bool:
        return self.duration_minutes <= 0

    def modify(self, note: str) -> None:
        self.notes.append(note)
        self.status = ShiftStatus.MODIFIED

    def remove(self, note: str) -> None:
        self.notes.append(note)
        self.status = ShiftStatus.ERROR
        self.end = self.start


@dataclass(frozen=True)
class Shift:
    """Final, validated shift. Created once per surviving candidate."""

    id: str
    employee_id: str
    employee_name: str
    role: Role
    start: datetime
    end: datetime
    lunch_start: Optional[datetime]
    lunch_duration: int
    paid_hours: float
    raw_duration_hours: float
    status: ShiftStatus = ShiftStatus.OK
    notes: Tuple[str, ...] = ()

    @property
    def is_manager(self) -> bool:
        return self.role == Role.MANAGER

    @property
    def lunch_end(self) -> Optional[datetime]:
        if self.lunch_start is None:
            return None
        return self.lunch_start + timedelta(minutes=self.lunch_duration)

    def is_on_lunch(self, moment: datetime) -> bool:
        if self.lunch_start is None:
            return False
        return self.lunch_start <= moment < self.lunch_end

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "employee_id": self.employee_id,
            "employee_name": self.employee_name,
            "role": self.role.value,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "lunch_start": self.lunch_start.isoformat() if self.lunch_start else None,
            "lunch_duration": self.lunch_duration,
            "paid_hours": self.paid_hours,
            "raw_duration_hours": self.raw_duration_hours,
            "status": self.status.value,
            "notes": list(self.notes),
        }


@dataclass(frozen=True)
class CoverageSlot:
    time: datetime
    count: int
    has_manager: bool

    def to_dict(self) -> Dict:
        return {"time": self.time.isoformat(), "count": self.count, "has_manager": self.has_manager}


@dataclass(frozen=True)
class ScheduleResult:
    """Engine output: sorted shifts, totals, coverage and diagnostics."""

    shifts: Tuple[Shift, ...]
    total_hours_used: float
    coverage: Tuple[CoverageSlot, ...]
    is_valid: bool
    errors: Tuple[str, ...]

    def to_dict(self) -> Dict:
        return {
            "shifts": [s.to_dict() for s in self.shifts],
            "total_hours_used": self.total_hours_used,
            "coverage": [slot.to_dict() for slot in self.coverage],
            "is_valid": self.is_valid,
            "errors": list(self.errors),
        }
