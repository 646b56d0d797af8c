from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from paydesk.database import get_db
from paydesk.schemas.employee import Employee, EmployeeCreate
from paydesk.services import employee_service

router = APIRouter(
    prefix="/employees",
    tags=["employees"]
)


@router.get("", response_model=List[Employee])
def list_employees(department: Optional[str] = None, db: Session = Depends(get_db)):
    """Roster in payroll order, optionally narrowed to one department."""
    return employee_service.list_employees(db, department=department)


@router.get("/{employee_id}", response_model=Employee)
def get_employee(employee_id: str, db: Session = Depends(get_db)):
    return employee_service.get_employee(db, employee_id)


@router.post("", response_model=Employee, status_code=201)
def create_employee(payload: EmployeeCreate, db: Session = Depends(get_db)):
    return employee_service.create_employee(db, payload)
