"""CSV export utilities for analysis results and the roster."""

from __future__ import annotations

from pathlib import Path

import pandas as pd
from sqlalchemy.orm import Session

from shiftguard.domain.models import ScheduleResult
from shiftguard.domain.repositories import EmployeeRepository

SHIFT_COLUMNS = [
    "id",
    "employee_id",
    "employee_name",
    "role",
    "start",
    "end",
    "lunch_start",
    "lunch_duration",
    "raw_duration_hours",
    "paid_hours",
    "status",
    "notes",
]


def shifts_frame(result: ScheduleResult) -> pd.DataFrame:
    """One row per shift; notes joined with '; '."""
    rows = []
    for s in result.shifts:
        rows.append(
            {
                "id": s.id,
                "employee_id": s.employee_id,
                "employee_name": s.employee_name,
                "role": s.role.value,
                "start": pd.Timestamp(s.start),
                "end": pd.Timestamp(s.end),
                "lunch_start": pd.Timestamp(s.lunch_start) if s.lunch_start else pd.NaT,
                "lunch_duration": s.lunch_duration,
                "raw_duration_hours": s.raw_duration_hours,
                "paid_hours": s.paid_hours,
                "status": s.status.value,
                "notes": "; ".join(s.notes),
            }
        )
    return pd.DataFrame(rows, columns=SHIFT_COLUMNS)


def coverage_frame(result: ScheduleResult) -> pd.DataFrame:
    """One row per 15-minute coverage slot."""
    return pd.DataFrame(
        [{"time": pd.Timestamp(c.time), "count": c.count, "has_manager": c.has_manager} for c in result.coverage],
        columns=["time", "count", "has_manager"],
    )


def export_shifts_csv(result: ScheduleResult, csv_path: str | Path) -> int:
    """
    Export result shifts to CSV.

    Returns:
        Number of shifts exported
    """
    df = shifts_frame(result)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} shifts to {csv_path}")
    return len(df)


def export_coverage_csv(result: ScheduleResult, csv_path: str | Path) -> int:
    """
    Export coverage slots to CSV.

    Returns:
        Number of slots exported
    """
    df = coverage_frame(result)
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} coverage slots to {csv_path}")
    return len(df)


def export_employees_csv(session: Session, csv_path: str | Path) -> int:
    """
    Export the stored roster to CSV.

    Returns:
        Number of employees exported
    """
    employees = EmployeeRepository.get_all(session)
    df = pd.DataFrame(
        [
            {
                "id": e.id,
                "name": e.name,
                "role": e.role.value,
                "max_hours": e.max_hours,
                "email": e.email,
                "phone": e.phone,
                "preferences": e.preferences,
            }
            for e in employees
        ],
        columns=["id", "name", "role", "max_hours", "email", "phone", "preferences"],
    )
    df.to_csv(csv_path, index=False)
    print(f"[INFO] Exported {len(df)} employees to {csv_path}")
    return len(df)
