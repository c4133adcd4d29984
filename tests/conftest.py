"""Pytest configuration and shared fixtures."""

from datetime import date, datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from shiftguard.config import StoreConfig
from shiftguard.domain.db import Base
from shiftguard.domain.models import Employee, NoSoloConstraint, Role

MONDAY = date(2025, 9, 1)


def pytest_configure(config):
    """Configure pytest."""
    # Add custom markers
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests (deselect with '-m \"not integration\"')"
    )
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )


def at(hm: str, day: date = MONDAY) -> datetime:
    """Timestamp on the test reference day."""
    hour, minute = (int(x) for x in hm.split(":"))
    return datetime(day.year, day.month, day.day, hour, minute)


@pytest.fixture
def ref_date():
    return MONDAY


@pytest.fixture
def store():
    """Default store rules: 07:15-21:15, 35h budget."""
    return StoreConfig(
        budget=35,
        open_time="07:15",
        close_time="21:15",
        min_shift_length=4,
        max_shift_length=10,
        lunch_threshold=5,
        lunch_duration=30,
    )


@pytest.fixture
def employees():
    return [
        Employee(id="1", name="Alice", role=Role.MANAGER, max_hours=40, email="alice@store.com"),
        Employee(id="2", name="Bob", role=Role.MANAGER, max_hours=40),
        Employee(id="3", name="Charlie", role=Role.FULL_TIME, max_hours=38, phone="555-0101"),
        Employee(id="4", name="David", role=Role.FULL_TIME, max_hours=38),
        Employee(id="5", name="Eve", role=Role.PART_TIME, max_hours=20),
        Employee(id="6", name="Frank", role=Role.PART_TIME, max_hours=15),
        Employee(id="7", name="Grace", role=Role.PART_TIME, max_hours=25),
    ]


@pytest.fixture
def no_solo():
    return NoSoloConstraint(id="default-no-solo", is_active=True, min_staff_count=2)


@pytest.fixture
def db_session():
    """Create in-memory database session for testing."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine)
    session = SessionLocal()
    yield session
    session.close()
