"""SQLAlchemy tables for the roster/constraint store and database utilities."""

from __future__ import annotations

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, relationship, sessionmaker

DEFAULT_DB_URL = "sqlite:///shiftguard.db"


class Base(DeclarativeBase):
    """Base class for all tables."""
    pass


class EmployeeRecord(Base):
    """Stored roster entry."""

    __tablename__ = "employees"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    role = Column(String(20), nullable=False)  # MANAGER, FULL_TIME, PART_TIME
    max_hours = Column(Float, nullable=False)
    email = Column(String(200), nullable=True)
    phone = Column(String(50), nullable=True)
    preferences = Column(Text, nullable=True)

    constraints = relationship("ConstraintRecord", back_populates="employee")

    def __repr__(self) -> str:
        return f"<EmployeeRecord(id={self.id}, name='{self.name}', role='{self.role}')>"


class ConstraintRecord(Base):
    """Stored NoSolo or Unavailable constraint."""

    __tablename__ = "constraints"

    id = Column(String(36), primary_key=True)
    type = Column(String(20), nullable=False)  # NO_SOLO, UNAVAILABLE
    is_active = Column(Boolean, nullable=False, default=True)
    position = Column(Integer, nullable=False, default=0)  # declaration order

    # NO_SOLO
    min_staff_count = Column(Integer, nullable=True)

    # UNAVAILABLE
    employee_id = Column(String(36), ForeignKey("employees.id"), nullable=True)
    start_time = Column(String(5), nullable=True)  # HH:MM
    end_time = Column(String(5), nullable=True)
    days_of_week = Column(String(20), nullable=True)  # Semicolon-separated, 0=Sunday
    reason = Column(String(200), nullable=True)

    employee = relationship("EmployeeRecord", back_populates="constraints")

    def __repr__(self) -> str:
        return f"<ConstraintRecord(id={self.id}, type={self.type}, active={self.is_active})>"


def create_db_engine(db_url: str = DEFAULT_DB_URL, echo: bool = False):
    """Create SQLAlchemy engine."""
    return create_engine(db_url, echo=echo)


def init_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Initialize database and create all tables."""
    engine = create_db_engine(db_url)
    Base.metadata.create_all(engine)
    print(f"[INFO] Database initialized: {db_url}")


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    """Get a new database session."""
    SessionFactory = sessionmaker(bind=create_db_engine(db_url))
    return SessionFactory()


def reset_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Drop all tables and recreate (WARNING: deletes all data!)."""
    engine = create_db_engine(db_url)
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    print(f"[WARN] Database reset: {db_url}")
