"""Repository classes for the roster/constraint store.

Repositories hand out domain values, never ORM rows, so the engine cannot
mutate what is stored.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.orm import Session

from .db import ConstraintRecord, EmployeeRecord
from .models import Constraint, Employee, NoSoloConstraint, Role, UnavailableConstraint


def _employee_to_domain(row: EmployeeRecord) -> Employee:
    return Employee(
        id=row.id,
        name=row.name,
        role=Role.parse(row.role),
        max_hours=float(row.max_hours),
        email=row.email,
        phone=row.phone,
        preferences=row.preferences,
    )


def _constraint_to_domain(row: ConstraintRecord) -> Constraint:
    if row.type == NoSoloConstraint.kind:
        return NoSoloConstraint(
            id=row.id,
            is_active=bool(row.is_active),
            min_staff_count=row.min_staff_count or 2,
        )
    days = frozenset(int(d) for d in (row.days_of_week or "").split(";") if d.strip())
    return UnavailableConstraint(
        id=row.id,
        employee_id=row.employee_id,
        start_time=row.start_time,
        end_time=row.end_time,
        days_of_week=days,
        reason=row.reason or "",
        is_active=bool(row.is_active),
    )


def _constraint_to_record(constraint: Constraint, position: int) -> ConstraintRecord:
    if isinstance(constraint, NoSoloConstraint):
        return ConstraintRecord(
            id=constraint.id,
            type=NoSoloConstraint.kind,
            is_active=constraint.is_active,
            position=position,
            min_staff_count=constraint.min_staff_count,
        )
    return ConstraintRecord(
        id=constraint.id,
        type=UnavailableConstraint.kind,
        is_active=constraint.is_active,
        position=position,
        employee_id=constraint.employee_id,
        start_time=constraint.start_time,
        end_time=constraint.end_time,
        days_of_week=";".join(str(d) for d in sorted(constraint.days_of_week)),
        reason=constraint.reason or None,
    )


class EmployeeRepository:
    """Repository for roster data access."""

    @staticmethod
    def get_all(session: Session) -> List[Employee]:
        """Get all employees."""
        rows = session.query(EmployeeRecord).order_by(EmployeeRecord.id).all()
        return [_employee_to_domain(r) for r in rows]

    @staticmethod
    def get_by_id(session: Session, employee_id: str) -> Optional[Employee]:
        """Get employee by ID."""
        row = session.query(EmployeeRecord).filter(EmployeeRecord.id == employee_id).first()
        return _employee_to_domain(row) if row else None

    @staticmethod
    def get_by_role(session: Session, role: Role) -> List[Employee]:
        """Get all employees with a specific role."""
        rows = session.query(EmployeeRecord).filter(EmployeeRecord.role == Role.parse(role).value).all()
        return [_employee_to_domain(r) for r in rows]

    @staticmethod
    def create(session: Session, employee: Employee) -> Employee:
        """Create a new employee."""
        EmployeeRepository.bulk_create(session, [employee])
        return employee

    @staticmethod
    def bulk_create(session: Session, employees: List[Employee]) -> None:
        """Create or replace multiple employees."""
        for emp in employees:
            session.merge(
                EmployeeRecord(
                    id=emp.id,
                    name=emp.name,
                    role=emp.role.value,
                    max_hours=emp.max_hours,
                    email=emp.email,
                    phone=emp.phone,
                    preferences=emp.preferences,
                )
            )
        session.commit()

    @staticmethod
    def delete(session: Session, employee_id: str) -> int:
        """Delete an employee and their constraints. Returns number of deleted employees."""
        session.query(ConstraintRecord).filter(ConstraintRecord.employee_id == employee_id).delete(
            synchronize_session=False
        )
        count = session.query(EmployeeRecord).filter(EmployeeRecord.id == employee_id).delete(
            synchronize_session=False
        )
        session.commit()
        return count


class ConstraintRepository:
    """Repository for constraint data access."""

    @staticmethod
    def get_all(session: Session) -> List[Constraint]:
        """Get all constraints in declaration order."""
        rows = session.query(ConstraintRecord).order_by(ConstraintRecord.position, ConstraintRecord.id).all()
        return [_constraint_to_domain(r) for r in rows]

    @staticmethod
    def get_by_employee(session: Session, employee_id: str) -> List[Constraint]:
        """Get all Unavailable constraints owned by an employee."""
        rows = (
            session.query(ConstraintRecord)
            .filter(ConstraintRecord.employee_id == employee_id)
            .order_by(ConstraintRecord.position, ConstraintRecord.id)
            .all()
        )
        return [_constraint_to_domain(r) for r in rows]

    @staticmethod
    def bulk_create(session: Session, constraints: List[Constraint]) -> None:
        """Append constraints after the ones already stored, keeping their order."""
        last = session.query(ConstraintRecord).count()
        for offset, constraint in enumerate(constraints):
            session.merge(_constraint_to_record(constraint, position=last + offset))
        session.commit()

    @staticmethod
    def set_active(session: Session, constraint_id: str, is_active: bool) -> None:
        """Toggle a constraint on or off."""
        session.query(ConstraintRecord).filter(ConstraintRecord.id == constraint_id).update(
            {ConstraintRecord.is_active: is_active}, synchronize_session=False
        )
        session.commit()
