"""Tests for CSV import/export."""

from pathlib import Path

import pandas as pd
import pytest

from shiftguard.config import ConfigurationError
from shiftguard.domain.models import NoSoloConstraint, Role, UnavailableConstraint
from shiftguard.domain.repositories import ConstraintRepository, EmployeeRepository
from shiftguard.engine.orchestrator import analyze_schedule
from shiftguard.io.export_csv import (
    SHIFT_COLUMNS,
    coverage_frame,
    export_employees_csv,
    export_shifts_csv,
    shifts_frame,
)
from shiftguard.io.import_csv import (
    import_constraints_csv,
    import_employees_csv,
    read_constraints_csv,
    read_employees_csv,
)

DATA = Path(__file__).parents[1] / "data"


def test_read_roster_labels():
    employees = read_employees_csv(DATA / "roster.csv")

    roles = {e.name: e.role for e in employees}
    assert roles["Alice"] == Role.MANAGER
    assert roles["Bob"] == Role.MANAGER
    assert roles["Charlie"] == Role.FULL_TIME
    assert roles["David"] == Role.FULL_TIME
    assert roles["Frank"] == Role.PART_TIME

    grace = employees[-1]
    assert grace.max_hours == 30
    assert employees[2].preferences == "Prefers mornings"
    assert employees[0].phone is None


def test_read_constraints_keeps_order():
    constraints = read_constraints_csv(DATA / "constraints.csv")

    assert [c.id for c in constraints] == ["default-no-solo", "eve-school"]
    assert isinstance(constraints[0], NoSoloConstraint)
    school = constraints[1]
    assert isinstance(school, UnavailableConstraint)
    assert school.employee_id == "5"
    assert school.days_of_week == frozenset({1, 2, 3, 4, 5})
    assert school.reason == "School"


def test_read_constraints_rejects_bad_time(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("type,employee_id,start_time,end_time\nUNAVAILABLE,1,noon,13:00\n")
    with pytest.raises(ConfigurationError):
        read_constraints_csv(path)


def test_inactive_flag(tmp_path):
    path = tmp_path / "flags.csv"
    path.write_text("type,is_active,min_staff_count\nNO_SOLO,false,3\nNO_SOLO,yes,\n")
    first, second = read_constraints_csv(path)

    assert first.is_active is False
    assert first.min_staff_count == 3
    assert second.is_active is True
    assert second.min_staff_count == 2
    assert (first.id, second.id) == ("c1", "c2")


@pytest.mark.integration
def test_import_into_store(db_session):
    assert import_employees_csv(db_session, DATA / "roster.csv") == 7
    assert import_constraints_csv(db_session, DATA / "constraints.csv") == 2

    assert len(EmployeeRepository.get_all(db_session)) == 7
    assert [c.id for c in ConstraintRepository.get_all(db_session)] == ["default-no-solo", "eve-school"]

    # re-import replaces rows instead of duplicating them
    import_employees_csv(db_session, DATA / "roster.csv")
    assert len(EmployeeRepository.get_all(db_session)) == 7


@pytest.mark.integration
def test_export_roster(db_session, tmp_path):
    import_employees_csv(db_session, DATA / "roster.csv")
    out = tmp_path / "roster_out.csv"

    assert export_employees_csv(db_session, out) == 7
    df = pd.read_csv(out, dtype=str)
    assert list(df["name"]) == ["Alice", "Bob", "Charlie", "David", "Eve", "Frank", "Grace"]
    assert df.loc[0, "role"] == "MANAGER"


def test_export_shifts(store, employees, ref_date, tmp_path):
    result = analyze_schedule(
        "Alice: 07:00 - 15:00\nEve: 10:00 - 12:00", store, employees, reference_date=ref_date
    )
    out = tmp_path / "shifts.csv"

    assert export_shifts_csv(result, out) == 2
    df = pd.read_csv(out)
    assert list(df.columns) == SHIFT_COLUMNS
    assert list(df["employee_name"]) == ["Alice", "Eve"]
    assert df.loc[0, "notes"] == "Trimmed start to Open Time (07:15)"
    assert df.loc[1, "status"] == "MODIFIED"


def test_frames(store, employees, ref_date):
    result = analyze_schedule("Bob: 09:00 - 17:00", store, employees, reference_date=ref_date)

    shifts = shifts_frame(result)
    assert shifts.loc[0, "lunch_start"] == pd.Timestamp(ref_date.isoformat() + " 13:00")
    coverage = coverage_frame(result)
    assert len(coverage) == 56
    assert coverage["count"].max() == 1
