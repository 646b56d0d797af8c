"""
Payroll Service Layer

Thin adapter between storage and the pure payroll engine.

Architecture:
- Router -> Service (this module) -> Engine / Models
- The engine computes; this module loads its inputs, stores its output and
  owns the record lifecycle (Draft -> Pending -> Paid)
- Generating a period replaces whatever was stored for exactly that period
"""

import logging
from collections import Counter
from datetime import date
from typing import Dict, List, Mapping, Optional

from sqlalchemy.orm import Session

from paydesk.core.exceptions import InvalidPeriodError, InvalidStatusTransitionError, NotFoundError
from paydesk.engine.generator import generate_payroll
from paydesk.engine.period import Period
from paydesk.engine.policy import PayrollPolicy
from paydesk.models.payroll import PayrollRecord
from paydesk.schemas import payroll as payroll_schemas
from paydesk.schemas.payroll import EarningsAdjustment, PayrollStatus
from paydesk.services import employee_service, ledger_service

logger = logging.getLogger(__name__)


def _resolve_period(period_start: Optional[str], period_end: Optional[str]) -> Optional[Period]:
    if period_start is None and period_end is None:
        return None
    if period_start is None or period_end is None:
        raise InvalidPeriodError("Both period_start and period_end are required to filter by period")
    return Period.from_strings(period_start, period_end)


def _record_to_row(record: payroll_schemas.PayrollRecord) -> PayrollRecord:
    values = record.model_dump()
    values["status"] = record.status.value
    return PayrollRecord(**values)


def _get_row(db: Session, record_id: str) -> PayrollRecord:
    row = db.query(PayrollRecord).filter(PayrollRecord.id == record_id).first()
    if not row:
        raise NotFoundError("Payroll record", record_id)
    return row


def generate_payroll_run(
    db: Session,
    period_start: str,
    period_end: str,
    initial_status: PayrollStatus = PayrollStatus.DRAFT,
    adjustments: Optional[Mapping[str, EarningsAdjustment]] = None,
    policy: Optional[PayrollPolicy] = None
) -> payroll_schemas.PayrollRun:
    """
    Generate and store payroll for the whole roster for one period.

    Args:
        db: Database session
        period_start: First day of the period (YYYY-MM-DD)
        period_end: Last day of the period (YYYY-MM-DD)
        initial_status: Status every new record starts in
        adjustments: Optional allowances/bonuses/late deductions per employee id
        policy: Policy override; defaults to the configured policy

    Returns:
        The engine's PayrollRun (stored records plus per-employee rejections)
    """
    period = Period.from_strings(period_start, period_end)

    roster = employee_service.list_employees(db)
    overtime, loans = ledger_service.load_ledgers(db)

    run = generate_payroll(
        roster,
        overtime,
        loans,
        period,
        policy=policy,
        initial_status=initial_status,
        adjustments=adjustments
    )

    replaced = db.query(PayrollRecord).filter(
        PayrollRecord.period_start == period.start,
        PayrollRecord.period_end == period.end
    ).delete(synchronize_session="fetch")

    db.add_all([_record_to_row(r) for r in run.records])
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise

    if replaced:
        logger.info(f"Replaced {replaced} existing payroll records for {period.label}")
    logger.info(f"Stored {run.processed} payroll records for {period.label}")
    return run


def list_records(
    db: Session,
    period_start: Optional[str] = None,
    period_end: Optional[str] = None
) -> List[payroll_schemas.PayrollRecord]:
    period = _resolve_period(period_start, period_end)
    query = db.query(PayrollRecord)
    if period:
        query = query.filter(
            PayrollRecord.period_start == period.start,
            PayrollRecord.period_end == period.end
        )
    rows = query.order_by(PayrollRecord.period_start.desc(), PayrollRecord.row_id).all()
    return [payroll_schemas.PayrollRecord.model_validate(r) for r in rows]


def get_record(db: Session, record_id: str) -> payroll_schemas.PayrollRecord:
    return payroll_schemas.PayrollRecord.model_validate(_get_row(db, record_id))


def update_record_status(
    db: Session,
    record_id: str,
    status: PayrollStatus,
    payment_date: Optional[date] = None
) -> payroll_schemas.PayrollRecord:
    """
    Advance a stored record one step along Draft -> Pending -> Paid.

    Only status and payment date change; amounts are never recomputed.
    Marking a record Paid stamps the payment date (today unless given).
    """
    row = _get_row(db, record_id)
    current = PayrollStatus(row.status)
    if not current.can_transition_to(status):
        raise InvalidStatusTransitionError(current.value, status.value)

    row.status = status.value
    if status == PayrollStatus.PAID:
        row.payment_date = payment_date or date.today()
    try:
        db.commit()
        db.refresh(row)
    except Exception:
        db.rollback()
        raise

    logger.info(f"Payroll record {record_id} moved {current.value} -> {status.value}")
    return payroll_schemas.PayrollRecord.model_validate(row)


def get_payroll_summary(
    db: Session,
    period_start: Optional[str] = None,
    period_end: Optional[str] = None
) -> payroll_schemas.PayrollSummary:
    """
    Aggregate stored records, optionally for a single period.
    """
    records = list_records(db, period_start, period_end)
    by_status: Dict[str, int] = {s.value: 0 for s in PayrollStatus}
    by_status.update(Counter(r.status.value for r in records))

    period = _resolve_period(period_start, period_end)
    return payroll_schemas.PayrollSummary(
        period_start=period.start if period else None,
        period_end=period.end if period else None,
        headcount=len(records),
        total_gross=sum(r.gross_pay for r in records),
        total_deductions=sum(r.total_deductions for r in records),
        total_net=sum(r.net_pay for r in records),
        by_status=by_status
    )
