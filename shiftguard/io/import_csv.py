"""CSV import utilities for roster and constraint data."""

from __future__ import annotations

from pathlib import Path
from typing import List

import pandas as pd
from sqlalchemy.orm import Session

from shiftguard.config import constraint_from_dict, employee_from_dict, validate_constraints
from shiftguard.domain.models import Constraint, Employee
from shiftguard.domain.repositories import ConstraintRepository, EmployeeRepository

TRUE_VALUES = ["TRUE", "T", "1", "YES", "Y"]


def _read_frame(csv_path: str | Path) -> pd.DataFrame:
    df = pd.read_csv(csv_path, dtype=str)
    # Normalize column names
    df.columns = df.columns.str.lower().str.strip()
    return df


def _cell(row: pd.Series, column: str):
    value = row.get(column)
    if value is None or pd.isna(value):
        return None
    value = str(value).strip()
    return value or None


def read_employees_csv(csv_path: str | Path) -> List[Employee]:
    """
    Read a roster CSV into Employee values.

    Expected columns: id, name, role, max_hours, and optionally email, phone,
    preferences. Roles accept free-form labels (Mgr, FT, PT, ...); a blank
    max_hours falls back to 40 for managers and 30 otherwise.

    Args:
        csv_path: Path to roster CSV

    Returns:
        Employees in file order
    """
    df = _read_frame(csv_path)
    employees = []
    for _, row in df.iterrows():
        max_hours = _cell(row, "max_hours")
        employees.append(
            employee_from_dict(
                {
                    "id": _cell(row, "id"),
                    "name": _cell(row, "name"),
                    "role": _cell(row, "role"),
                    "max_hours": float(max_hours) if max_hours is not None else None,
                    "email": _cell(row, "email"),
                    "phone": _cell(row, "phone"),
                    "preferences": _cell(row, "preferences"),
                }
            )
        )
    return employees


def read_constraints_csv(csv_path: str | Path) -> List[Constraint]:
    """
    Read a constraints CSV into Constraint values, keeping file order.

    Expected columns: type (NO_SOLO or UNAVAILABLE) and, as applicable, id,
    is_active, min_staff_count, employee_id, start_time, end_time,
    days_of_week (semicolon-separated, 0=Sunday), reason.
    """
    df = _read_frame(csv_path)
    constraints = []
    for i, (_, row) in enumerate(df.iterrows(), start=1):
        active = _cell(row, "is_active")
        min_staff = _cell(row, "min_staff_count")
        days = _cell(row, "days_of_week")
        constraints.append(
            constraint_from_dict(
                {
                    "id": _cell(row, "id"),
                    "type": _cell(row, "type"),
                    "is_active": active is None or active.upper() in TRUE_VALUES,
                    "min_staff_count": int(float(min_staff)) if min_staff is not None else None,
                    "employee_id": _cell(row, "employee_id"),
                    "start_time": _cell(row, "start_time"),
                    "end_time": _cell(row, "end_time"),
                    "days_of_week": [int(d) for d in days.split(";") if d.strip()] if days else [],
                    "reason": _cell(row, "reason"),
                },
                default_id=f"c{i}",
            )
        )
    validate_constraints(constraints)
    return constraints


def import_employees_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import employees from CSV into the store.

    Returns:
        Number of employees imported
    """
    employees = read_employees_csv(csv_path)
    EmployeeRepository.bulk_create(session, employees)
    print(f"[INFO] Imported {len(employees)} employees from {csv_path}")
    return len(employees)


def import_constraints_csv(session: Session, csv_path: str | Path) -> int:
    """
    Import constraints from CSV into the store.

    Returns:
        Number of constraints imported
    """
    constraints = read_constraints_csv(csv_path)
    ConstraintRepository.bulk_create(session, constraints)
    print(f"[INFO] Imported {len(constraints)} constraints from {csv_path}")
    return len(constraints)
