"""
Employee roster access.

The roster is the payroll engine's employee-data provider: routers and the
payroll service read it through here and get engine-ready `Employee`
schemas back, in roster (insertion) order.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy.orm import Session

from paydesk.core.exceptions import DuplicateEntityError, NotFoundError
from paydesk.models.employee import Employee
from paydesk.schemas import employee as employee_schemas

logger = logging.getLogger(__name__)


def list_employees(db: Session, department: Optional[str] = None) -> List[employee_schemas.Employee]:
    query = db.query(Employee)
    if department:
        query = query.filter(Employee.department == department)
    return [employee_schemas.Employee.model_validate(e) for e in query.order_by(Employee.row_id).all()]


def get_employee(db: Session, employee_id: str) -> employee_schemas.Employee:
    employee = db.query(Employee).filter(Employee.id == employee_id).first()
    if not employee:
        raise NotFoundError("Employee", employee_id)
    return employee_schemas.Employee.model_validate(employee)


def employee_exists(db: Session, employee_id: str) -> bool:
    return db.query(Employee.row_id).filter(Employee.id == employee_id).first() is not None


def create_employee(db: Session, payload: employee_schemas.EmployeeCreate) -> employee_schemas.Employee:
    """
    Add an employee to the roster.

    Args:
        db: Database session
        payload: New employee; an id is generated when none is supplied

    Returns:
        The stored employee
    """
    employee_id = payload.id or uuid.uuid4().hex[:8]
    if employee_exists(db, employee_id):
        raise DuplicateEntityError("Employee", employee_id)

    employee = Employee(
        id=employee_id,
        name=payload.name,
        role=payload.role,
        department=payload.department,
        email=payload.email,
        salary=payload.salary
    )
    db.add(employee)
    try:
        db.commit()
        db.refresh(employee)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Added employee {employee.id} ({employee.role}, {employee.department})")
    return employee_schemas.Employee.model_validate(employee)
