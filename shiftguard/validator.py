from __future__ import annotations

from collections import defaultdict
from typing import Dict, Sequence

import pandas as pd

from .config import StoreConfig
from .domain.models import Employee, ScheduleResult
from .io.export_csv import coverage_frame, shifts_frame
from .services.lunch import paid_minutes
from .services.timeplan import anchor, minutes_between


def validate_result(result: ScheduleResult, employees: Sequence[Employee], store: StoreConfig) -> None:
    # Referential integrity
    emp_lookup = {e.id: e for e in employees}
    unknown = {s.employee_id for s in result.shifts} - set(emp_lookup)
    if unknown:
        raise ValueError(f"Result references unknown employee ids: {sorted(unknown)}")

    starts = [s.start for s in result.shifts]
    if starts != sorted(starts):
        raise ValueError("Shifts are not ordered by start time")

    max_minutes = store.max_shift_length * 60
    paid_by_emp: Dict[str, int] = defaultdict(int)
    for s in result.shifts:
        duration = minutes_between(s.start, s.end)
        if duration <= 0:
            raise ValueError(f"Shift {s.id} has non-positive length: {s.start} - {s.end}")

        # Store hours window on the shift's own day
        open_at = anchor(s.start.date(), store.open_time)
        close_at = anchor(s.start.date(), store.close_time)
        if s.start < open_at or s.end > close_at:
            raise ValueError(
                f"Shift {s.id} ({s.employee_name}) outside store hours {store.open_time}-{store.close_time}"
            )
        if duration > max_minutes:
            raise ValueError(f"Shift {s.id} ({s.employee_name}) exceeds max shift length {store.max_shift_length:g}h")

        expected = s.raw_duration_hours - (s.lunch_duration / 60 if s.lunch_duration > 0 else 0)
        if abs(s.paid_hours - expected) > 1e-9 or s.paid_hours < 0:
            raise ValueError(f"Shift {s.id} paid hours {s.paid_hours} inconsistent with lunch deduction")

        paid_by_emp[s.employee_id] += paid_minutes(s)

    # Weekly hours cap, compared in whole minutes
    for emp_id, minutes in paid_by_emp.items():
        emp = emp_lookup[emp_id]
        if minutes > emp.max_hours * 60:
            raise ValueError(
                f"Employee {emp_id} ({emp.name}) exceeds max weekly hours: {minutes / 60:.2f}h > {emp.max_hours:g}h"
            )

    total = sum(s.paid_hours for s in result.shifts)
    if abs(total - result.total_hours_used) > 1e-9:
        raise ValueError(f"total_hours_used {result.total_hours_used} does not match shift sum {total}")
    if result.is_valid != (len(result.errors) == 0):
        raise ValueError("is_valid flag disagrees with the error list")


def summarize_result(result: ScheduleResult) -> str:
    if not result.shifts and not result.errors:
        return "No shifts."
    shifts = shifts_frame(result)
    coverage = coverage_frame(result)

    lines = []
    if not shifts.empty:
        view = shifts.assign(
            start=shifts["start"].dt.strftime("%H:%M"),
            end=shifts["end"].dt.strftime("%H:%M"),
            lunch=shifts["lunch_start"].dt.strftime("%H:%M").fillna("-"),
        )[["employee_name", "role", "start", "end", "lunch", "paid_hours", "status"]]
        lines.append("Shifts:")
        lines.append(view.to_string(index=False))
        lines.append("")

        hours = shifts.groupby("employee_name")["paid_hours"].sum().sort_values(ascending=False)
        lines.append("Paid hours per employee:")
        lines.append(hours.to_string())
        lines.append("")

        notes = shifts[shifts["notes"] != ""][["employee_name", "notes"]]
        if not notes.empty:
            lines.append("Adjustments:")
            lines.append(notes.to_string(index=False))
            lines.append("")

    if not coverage.empty:
        hourly = (
            coverage.assign(has_manager=coverage["has_manager"].astype(int))
            .set_index("time")
            .resample("60min")
            .min()
            .rename(columns={"count": "min_staff", "has_manager": "manager_all_hour"})
        )
        hourly["manager_all_hour"] = hourly["manager_all_hour"].astype(bool)
        hourly.index = hourly.index.strftime("%H:%M")
        lines.append("Staffing per hour (lowest slot count):")
        lines.append(hourly.to_string())
        lines.append("")

    lines.append(f"Total paid hours: {result.total_hours_used:.2f}")
    if result.errors:
        lines.append("Errors:")
        lines.extend(f"- {e}" for e in result.errors)
    else:
        lines.append("Schedule is valid.")
    return "\n".join(lines)
