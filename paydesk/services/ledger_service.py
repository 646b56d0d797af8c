"""
Overtime & Loan Ledgers

Stores the two ledgers the payroll engine reads. Overtime goes through a
small approval workflow (Pending -> Approved | Rejected); only approved
overtime is paid. Loans are read-only for payroll: generating a run never
touches a loan's remaining balance.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from paydesk.core.exceptions import LedgerStateError, NotFoundError
from paydesk.models.loan import Loan
from paydesk.models.overtime import OvertimeRecord
from paydesk.schemas import payroll as payroll_schemas
from paydesk.schemas.payroll import LoanStatus, OvertimeStatus
from paydesk.services.employee_service import employee_exists

logger = logging.getLogger(__name__)


def _commit(db: Session, *rows) -> None:
    try:
        db.commit()
        for row in rows:
            db.refresh(row)
    except Exception:
        db.rollback()
        raise


# --- Loans ---

def list_loans(
    db: Session,
    employee_id: Optional[str] = None,
    active_only: bool = False
) -> List[payroll_schemas.Loan]:
    query = db.query(Loan)
    if employee_id:
        query = query.filter(Loan.employee_id == employee_id)
    if active_only:
        query = query.filter(Loan.status == LoanStatus.ACTIVE.value)
    return [payroll_schemas.Loan.model_validate(loan) for loan in query.order_by(Loan.created_at, Loan.id).all()]


def add_loan(db: Session, payload: payroll_schemas.LoanCreate) -> payroll_schemas.Loan:
    """
    Register a new active loan for an employee.

    Args:
        db: Database session
        payload: Loan terms; remaining balance defaults to the full principal

    Returns:
        The stored loan
    """
    if not employee_exists(db, payload.employee_id):
        raise NotFoundError("Employee", payload.employee_id)

    loan = Loan(
        id=uuid.uuid4().hex[:12],
        employee_id=payload.employee_id,
        type=payload.type.value,
        total_amount=payload.total_amount,
        remaining_balance=payload.remaining_balance if payload.remaining_balance is not None else payload.total_amount,
        monthly_amortization=payload.monthly_amortization,
        start_date=payload.start_date,
        end_date=payload.end_date,
        status=LoanStatus.ACTIVE.value
    )
    db.add(loan)
    _commit(db, loan)
    logger.info(f"Loan {loan.id} ({loan.type}) added for employee {loan.employee_id}")
    return payroll_schemas.Loan.model_validate(loan)


# --- Overtime ---

def list_overtime(
    db: Session,
    status: Optional[OvertimeStatus] = None,
    employee_id: Optional[str] = None
) -> List[payroll_schemas.OvertimeRecord]:
    query = db.query(OvertimeRecord)
    if status:
        query = query.filter(OvertimeRecord.status == status.value)
    if employee_id:
        query = query.filter(OvertimeRecord.employee_id == employee_id)
    rows = query.order_by(OvertimeRecord.work_date, OvertimeRecord.id).all()
    return [payroll_schemas.OvertimeRecord.model_validate(r) for r in rows]


def file_overtime(db: Session, payload: payroll_schemas.OvertimeCreate) -> payroll_schemas.OvertimeRecord:
    """File an overtime claim. Claims start Pending and are not paid until approved."""
    if not employee_exists(db, payload.employee_id):
        raise NotFoundError("Employee", payload.employee_id)

    record = OvertimeRecord(
        id=f"ot-{uuid.uuid4().hex[:10]}",
        employee_id=payload.employee_id,
        work_date=payload.work_date,
        hours=payload.hours,
        rate_multiplier=payload.rate_multiplier,
        reason=payload.reason,
        status=OvertimeStatus.PENDING.value
    )
    db.add(record)
    _commit(db, record)
    logger.info(f"Overtime {record.id} filed for employee {record.employee_id}: {record.hours}h x{record.rate_multiplier}")
    return payroll_schemas.OvertimeRecord.model_validate(record)


def _decide_overtime(db: Session, overtime_id: str, decision: OvertimeStatus) -> payroll_schemas.OvertimeRecord:
    record = db.query(OvertimeRecord).filter(OvertimeRecord.id == overtime_id).first()
    if not record:
        raise NotFoundError("Overtime record", overtime_id)

    if record.status == decision.value:
        return payroll_schemas.OvertimeRecord.model_validate(record)
    if record.status != OvertimeStatus.PENDING.value:
        raise LedgerStateError(
            f"Overtime {overtime_id} is already {record.status} and cannot be {decision.value.lower()}",
            details={"id": overtime_id, "status": record.status}
        )

    record.status = decision.value
    record.decided_at = datetime.now(timezone.utc)
    _commit(db, record)
    logger.info(f"Overtime {overtime_id} {decision.value.lower()}")
    return payroll_schemas.OvertimeRecord.model_validate(record)


def approve_overtime(db: Session, overtime_id: str) -> payroll_schemas.OvertimeRecord:
    return _decide_overtime(db, overtime_id, OvertimeStatus.APPROVED)


def reject_overtime(db: Session, overtime_id: str) -> payroll_schemas.OvertimeRecord:
    return _decide_overtime(db, overtime_id, OvertimeStatus.REJECTED)


def load_ledgers(db: Session) -> Tuple[List[payroll_schemas.OvertimeRecord], List[payroll_schemas.Loan]]:
    """Snapshot of both ledgers as the engine consumes them: approved overtime and active loans."""
    return (
        list_overtime(db, status=OvertimeStatus.APPROVED),
        list_loans(db, active_only=True),
    )
