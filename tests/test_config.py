"""Tests for store configuration loading and validation."""

import json
from dataclasses import replace
from pathlib import Path

import pytest

from shiftguard.config import (
    ConfigurationError,
    StoreConfig,
    constraint_from_dict,
    employee_from_dict,
    load_config,
    validate_constraints,
)
from shiftguard.domain.models import NoSoloConstraint, Role, UnavailableConstraint

REPO_ROOT = Path(__file__).parents[1]

STORE = {
    "budget": 35,
    "open_time": "07:15",
    "close_time": "21:15",
    "min_shift_length": 4,
    "max_shift_length": 10,
    "lunch_threshold": 5,
    "lunch_duration": 30,
}


def test_shipped_config_loads():
    cfg = load_config(REPO_ROOT / "shiftguard_config.yaml")

    assert cfg.store.open_time == "07:15"
    assert cfg.store.budget == 35
    assert [e.name for e in cfg.employees][:2] == ["Alice", "Bob"]
    assert cfg.employees[2].role == Role.FULL_TIME
    assert isinstance(cfg.constraints[0], NoSoloConstraint)
    school = cfg.constraints[1]
    assert isinstance(school, UnavailableConstraint)
    assert school.days_of_week == frozenset({1, 2, 3, 4, 5})
    assert cfg.db_url is None


def test_json_config_with_default_ids(tmp_path):
    path = tmp_path / "store.json"
    path.write_text(
        json.dumps(
            {
                "store": STORE,
                "constraints": [
                    {"type": "NO_SOLO", "min_staff_count": 3},
                    {"type": "UNAVAILABLE", "employee_id": 1, "start_time": "08:00", "end_time": "09:00"},
                ],
            }
        )
    )
    cfg = load_config(path)

    assert [c.id for c in cfg.constraints] == ["c1", "c2"]
    assert cfg.constraints[0].min_staff_count == 3
    assert cfg.constraints[1].employee_id == "1"
    assert cfg.employees == []


def test_missing_store_section(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("employees: []\n")
    with pytest.raises(ConfigurationError, match="store"):
        load_config(path)


def test_missing_store_fields():
    data = dict(STORE)
    del data["budget"]
    with pytest.raises(ConfigurationError, match="budget"):
        StoreConfig.from_dict(data)


def test_non_numeric_store_value():
    with pytest.raises(ConfigurationError):
        StoreConfig.from_dict({**STORE, "budget": "lots"})


@pytest.mark.parametrize(
    "changes",
    [
        {"open_time": "7am"},
        {"close_time": "24:00"},
        {"close_time": "07:00"},
        {"budget": -1},
        {"max_shift_length": 0},
        {"min_shift_length": 12},
        {"lunch_threshold": 0.25},
    ],
)
def test_store_validation_rejects(changes):
    store = replace(StoreConfig.from_dict(STORE), **changes)
    with pytest.raises(ConfigurationError):
        store.validate()


def test_config_error_is_value_error():
    assert issubclass(ConfigurationError, ValueError)


def test_employee_defaults():
    manager = employee_from_dict({"id": 8, "name": " Hank ", "role": "Lead"})
    assert manager.id == "8"
    assert manager.name == "Hank"
    assert manager.role == Role.MANAGER
    assert manager.max_hours == 40

    associate = employee_from_dict({"id": "9", "name": "Ivy", "role": "Associate"})
    assert associate.role == Role.PART_TIME
    assert associate.max_hours == 30


def test_constraint_from_dict():
    no_solo = constraint_from_dict({"type": "no_solo"}, default_id="c1")
    assert no_solo == NoSoloConstraint(id="c1", is_active=True, min_staff_count=2)

    with pytest.raises(ConfigurationError, match="Unknown constraint type"):
        constraint_from_dict({"type": "DOUBLE_SHIFT"}, default_id="c2")


def test_validate_constraints():
    good = UnavailableConstraint(id="u1", employee_id="1", start_time="8:00", end_time="09:30", days_of_week=frozenset({0, 6}))
    validate_constraints([good, NoSoloConstraint(id="n1")])

    with pytest.raises(ConfigurationError, match="weekdays"):
        validate_constraints([replace(good, days_of_week=frozenset({7}))])
    with pytest.raises(ConfigurationError, match="u1"):
        validate_constraints([replace(good, end_time="9.30")])
    with pytest.raises(ConfigurationError, match="after start_time"):
        validate_constraints([replace(good, start_time="10:00")])
    with pytest.raises(ConfigurationError, match="min_staff_count"):
        validate_constraints([NoSoloConstraint(id="n2", min_staff_count=-1)])
    with pytest.raises(ConfigurationError):
        validate_constraints(["NO_SOLO"])
