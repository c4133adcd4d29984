"""Store configuration: dataclasses, validation and YAML/JSON loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, List, Optional

import yaml

from shiftguard.domain.models import Constraint, Employee, NoSoloConstraint, Role, UnavailableConstraint
from shiftguard.services.timeplan import parse_time_string


class ConfigurationError(ValueError):
    """The caller misconfigured the engine (not a data-level problem)."""


@dataclass(frozen=True)
class StoreConfig:
    """
    Operating hours and labor rules for one store.

    Lengths, thresholds and budget are in hours; ``lunch_duration`` is in
    minutes; open/close are ``HH:MM`` 24-hour strings.
    """

    budget: float
    open_time: str
    close_time: str
    min_shift_length: float
    max_shift_length: float
    lunch_threshold: float
    lunch_duration: int

    @classmethod
    def from_dict(cls, data: Dict) -> "StoreConfig":
        if not isinstance(data, dict):
            raise ConfigurationError("Store config must be a mapping")
        names = [f.name for f in fields(cls)]
        missing = [name for name in names if data.get(name) is None]
        if missing:
            raise ConfigurationError(f"Store config missing required fields: {', '.join(missing)}")
        try:
            cfg = cls(
                budget=float(data["budget"]),
                open_time=str(data["open_time"]),
                close_time=str(data["close_time"]),
                min_shift_length=float(data["min_shift_length"]),
                max_shift_length=float(data["max_shift_length"]),
                lunch_threshold=float(data["lunch_threshold"]),
                lunch_duration=int(data["lunch_duration"]),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid store config value: {e}") from e
        cfg.validate()
        return cfg

    def validate(self) -> None:
        """
        Check the configuration before any data is processed.

        Raises:
            ConfigurationError: If a field is missing or out of range
        """
        for f in fields(self):
            if getattr(self, f.name) is None:
                raise ConfigurationError(f"Store config field '{f.name}' is required")
        try:
            open_t = parse_time_string(self.open_time)
            close_t = parse_time_string(self.close_time)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        if close_t <= open_t:
            raise ConfigurationError(
                f"close_time ({self.close_time}) must be after open_time ({self.open_time})"
            )
        for name in ("budget", "min_shift_length", "lunch_threshold", "lunch_duration"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must not be negative")
        if self.max_shift_length <= 0:
            raise ConfigurationError("max_shift_length must be positive")
        if self.min_shift_length > self.max_shift_length:
            raise ConfigurationError(
                f"min_shift_length ({self.min_shift_length}h) exceeds max_shift_length ({self.max_shift_length}h)"
            )
        if self.lunch_duration / 60 > self.lunch_threshold:
            raise ConfigurationError(
                f"lunch_duration ({self.lunch_duration} min) is longer than lunch_threshold ({self.lunch_threshold}h)"
            )

    def to_dict(self) -> Dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass
class SchedulerConfig:
    """Everything a config file can carry: store rules, default roster and constraints."""

    store: StoreConfig
    employees: List[Employee] = field(default_factory=list)
    constraints: List[Constraint] = field(default_factory=list)
    db_url: Optional[str] = None


def validate_constraints(constraints: List[Constraint]) -> None:
    """Reject Unavailable constraints whose window cannot be read or is empty."""
    for c in constraints:
        if isinstance(c, UnavailableConstraint):
            try:
                start = parse_time_string(c.start_time)
                end = parse_time_string(c.end_time)
            except ValueError as e:
                raise ConfigurationError(f"Constraint {c.id}: {e}") from e
            if end <= start:
                raise ConfigurationError(f"Constraint {c.id}: end_time must be after start_time")
            bad_days = [d for d in c.days_of_week if d not in range(7)]
            if bad_days:
                raise ConfigurationError(f"Constraint {c.id}: invalid weekdays {sorted(bad_days)}")
        elif isinstance(c, NoSoloConstraint):
            if c.min_staff_count is not None and c.min_staff_count < 0:
                raise ConfigurationError(f"Constraint {c.id}: min_staff_count must not be negative")
        else:
            raise ConfigurationError(f"Unknown constraint type: {type(c).__name__}")


def employee_from_dict(data: Dict) -> Employee:
    role = Role.parse(data.get("role"))
    max_hours = data.get("max_hours")
    if max_hours is None:
        max_hours = 40 if role == Role.MANAGER else 30
    return Employee(
        id=str(data["id"]),
        name=str(data["name"]).strip(),
        role=role,
        max_hours=float(max_hours),
        email=data.get("email"),
        phone=data.get("phone"),
        preferences=data.get("preferences"),
    )


def constraint_from_dict(data: Dict, default_id: str) -> Constraint:
    kind = str(data.get("type", "")).upper()
    cid = str(data.get("id") or default_id)
    is_active = bool(data.get("is_active", True))
    if kind == "NO_SOLO":
        return NoSoloConstraint(
            id=cid,
            is_active=is_active,
            min_staff_count=int(data.get("min_staff_count") or 2),
        )
    if kind == "UNAVAILABLE":
        return UnavailableConstraint(
            id=cid,
            employee_id=str(data["employee_id"]),
            start_time=str(data["start_time"]),
            end_time=str(data["end_time"]),
            days_of_week=frozenset(int(d) for d in data.get("days_of_week") or []),
            reason=str(data.get("reason") or ""),
            is_active=is_active,
        )
    raise ConfigurationError(f"Unknown constraint type '{data.get('type')}'")


def load_config(path: str | Path) -> SchedulerConfig:
    """
    Load a scheduler configuration from YAML or JSON.

    Args:
        path: Path to a ``.yaml``/``.yml`` or ``.json`` file

    Returns:
        Validated SchedulerConfig

    Raises:
        ConfigurationError: If the file is malformed or the store section is invalid
    """
    path = Path(path)
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() == ".json":
        raw = json.loads(text)
    else:
        raw = yaml.safe_load(text)
    if not isinstance(raw, dict) or "store" not in raw:
        raise ConfigurationError(f"{path}: missing 'store' section")

    store = StoreConfig.from_dict(raw["store"])
    try:
        employees = [employee_from_dict(e) for e in raw.get("employees") or []]
        constraints = [
            constraint_from_dict(c, default_id=f"c{i}")
            for i, c in enumerate(raw.get("constraints") or [], start=1)
        ]
    except ConfigurationError:
        raise
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"{path}: invalid entry: {e}") from e
    validate_constraints(constraints)

    return SchedulerConfig(
        store=store,
        employees=employees,
        constraints=constraints,
        db_url=raw.get("db_url"),
    )
