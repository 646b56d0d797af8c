"""
Payroll Router

Handles HTTP endpoints for payroll runs, stored records and the two ledgers.
All business logic is delegated to the service layer.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from paydesk.core.schemas import ApiResponse
from paydesk.database import get_db
from paydesk.schemas.payroll import (
    GeneratePayrollRequest,
    Loan,
    LoanCreate,
    OvertimeCreate,
    OvertimeRecord,
    OvertimeStatus,
    PayrollRecord,
    PayrollRun,
    PayrollSummary,
    StatusUpdateRequest,
)
from paydesk.services import ledger_service, payroll_service


router = APIRouter(
    prefix="/payroll",
    tags=["payroll"]
)


@router.post("/generate", response_model=ApiResponse[PayrollRun])
def generate_payroll(request: GeneratePayrollRequest, db: Session = Depends(get_db)):
    """
    Run payroll for the whole roster for one period.

    Employees with invalid inputs are reported in `data.errors`; everyone
    else gets a record. Re-running a period replaces its records.
    """
    run = payroll_service.generate_payroll_run(
        db,
        request.period_start,
        request.period_end,
        initial_status=request.initial_status,
        adjustments=request.adjustments
    )
    return ApiResponse.ok(run, metadata={
        "processed": run.processed,
        "rejected": len(run.errors)
    })


@router.get("/records", response_model=List[PayrollRecord])
def list_payroll_records(
    period_start: Optional[str] = None,
    period_end: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    List stored payroll records, optionally for one period.
    """
    return payroll_service.list_records(db, period_start, period_end)


@router.get("/records/{record_id}", response_model=PayrollRecord)
def get_payroll_record(record_id: str, db: Session = Depends(get_db)):
    return payroll_service.get_record(db, record_id)


@router.patch("/records/{record_id}/status", response_model=PayrollRecord)
def update_payroll_status(
    record_id: str,
    payload: StatusUpdateRequest,
    db: Session = Depends(get_db)
):
    """
    Advance a record along Draft -> Pending -> Paid.
    """
    return payroll_service.update_record_status(
        db, record_id, payload.status, payment_date=payload.payment_date
    )


@router.get("/summary", response_model=PayrollSummary)
def get_payroll_summary(
    period_start: Optional[str] = None,
    period_end: Optional[str] = None,
    db: Session = Depends(get_db)
):
    """
    Totals (gross, deductions, net) and status counts over stored records.
    """
    return payroll_service.get_payroll_summary(db, period_start, period_end)


# --- Loans ---

@router.get("/loans", response_model=List[Loan])
def list_loans(
    employee_id: Optional[str] = None,
    active_only: bool = False,
    db: Session = Depends(get_db)
):
    return ledger_service.list_loans(db, employee_id=employee_id, active_only=active_only)


@router.post("/loans", response_model=Loan, status_code=201)
def add_loan(payload: LoanCreate, db: Session = Depends(get_db)):
    return ledger_service.add_loan(db, payload)


# --- Overtime ---

@router.get("/overtime", response_model=List[OvertimeRecord])
def list_overtime(
    status: Optional[OvertimeStatus] = None,
    employee_id: Optional[str] = None,
    db: Session = Depends(get_db)
):
    return ledger_service.list_overtime(db, status=status, employee_id=employee_id)


@router.post("/overtime", response_model=OvertimeRecord, status_code=201)
def file_overtime(payload: OvertimeCreate, db: Session = Depends(get_db)):
    """
    File an overtime claim. It is not paid until approved.
    """
    return ledger_service.file_overtime(db, payload)


@router.post("/overtime/{overtime_id}/approve", response_model=OvertimeRecord)
def approve_overtime(overtime_id: str, db: Session = Depends(get_db)):
    return ledger_service.approve_overtime(db, overtime_id)


@router.post("/overtime/{overtime_id}/reject", response_model=OvertimeRecord)
def reject_overtime(overtime_id: str, db: Session = Depends(get_db)):
    return ledger_service.reject_overtime(db, overtime_id)
