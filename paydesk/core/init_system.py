import logging
from datetime import date

from paydesk.core.config import settings
from paydesk.database import session_scope
from paydesk.models.employee import Employee
from paydesk.models.loan import Loan
from paydesk.models.overtime import OvertimeRecord
from paydesk.schemas.payroll import LoanStatus, LoanType, OvertimeStatus

logger = logging.getLogger(__name__)

# GrowthPoint Construction demo roster: (id, name, role, department, monthly salary)
DEMO_ROSTER = [
    ("1", "Richard Steel", "Project Manager", "Operations", 65000.0),
    ("2", "Sarah Concrete", "Senior Civil Engineer", "Engineering & Design", 55000.0),
    ("3", "Mike Hammer", "Site Foreman", "Operations", 32000.0),
    ("4", "Emily Safety", "Safety Officer", "Safety & Compliance", 28000.0),
    ("5", "David Brick", "Master Mason", "Operations", 22000.0),
    ("6", "Lisa Draft", "Architect", "Engineering & Design", 48000.0),
    ("7", "Tom Voltage", "Lead Electrician", "Operations", 26000.0),
    ("8", "Jerry Crane", "Heavy Equipment Operator", "Equipment Management", 24000.0),
    ("9", "Fiona Supply", "Procurement Specialist", "Procurement", 30000.0),
    ("10", "Bob Builder", "General Laborer", "Operations", 15000.0),
]

# (id, employee_id, type, total, remaining, monthly amortization, start, end)
DEMO_LOANS = [
    ("1", "1", LoanType.SSS, 15000.0, 12000.0, 1000.0, date(2023, 1, 1), date(2024, 3, 1)),
    ("2", "3", LoanType.COMPANY, 25000.0, 18000.0, 1500.0, date(2024, 6, 1), date(2026, 2, 1)),
    ("3", "7", LoanType.CASH_ADVANCE, 5000.0, 2500.0, 500.0, date(2025, 9, 1), date(2026, 4, 1)),
]

# (id, employee_id, work date, hours, multiplier, reason, status)
DEMO_OVERTIME = [
    ("ot1", "1", date(2025, 11, 18), 3, 1.25, "Project deadline - site inspection", OvertimeStatus.APPROVED),
    ("ot2", "3", date(2025, 11, 20), 4, 1.25, "Emergency concrete pouring", OvertimeStatus.APPROVED),
    ("ot3", "5", date(2025, 11, 19), 2.5, 1.25, "Wall completion before inspection", OvertimeStatus.APPROVED),
    ("ot4", "7", date(2025, 11, 22), 5, 1.5, "Electrical installation on holiday", OvertimeStatus.APPROVED),
    ("ot5", "8", date(2025, 11, 21), 3.5, 1.25, "Equipment operation for urgent delivery", OvertimeStatus.APPROVED),
    ("ot6", "2", date(2025, 11, 23), 2, 1.25, "Structural design review", OvertimeStatus.PENDING),
    ("ot7", "10", date(2025, 11, 24), 4, 1.3, "Weekend site cleanup", OvertimeStatus.PENDING),
    ("ot8", "6", date(2025, 11, 25), 3, 1.25, "Blueprint revision deadline", OvertimeStatus.PENDING),
]


def _demo_rows():
    employees = [
        Employee(id=emp_id, name=name, role=role, department=dept, salary=salary,
                 email=f"{name.lower().replace(' ', '.')}@growthpoint.com")
        for emp_id, name, role, dept, salary in DEMO_ROSTER
    ]
    loans = [
        Loan(id=loan_id, employee_id=emp_id, type=loan_type.value, total_amount=total,
             remaining_balance=remaining, monthly_amortization=amortization,
             start_date=start, end_date=end, status=LoanStatus.ACTIVE.value)
        for loan_id, emp_id, loan_type, total, remaining, amortization, start, end in DEMO_LOANS
    ]
    overtime = [
        OvertimeRecord(id=ot_id, employee_id=emp_id, work_date=work_date, hours=hours,
                       rate_multiplier=multiplier, reason=reason, status=status.value)
        for ot_id, emp_id, work_date, hours, multiplier, reason, status in DEMO_OVERTIME
    ]
    return employees + loans + overtime


def init_system_data():
    """
    Seeds the demo roster and ledgers into an empty database.
    Skipped when SEED_DEMO_DATA is off or any employee already exists.
    """
    if not settings.seed_demo_data:
        return
    with session_scope() as db:
        employee_count = db.query(Employee).count()
        if employee_count:
            logger.info(f"Roster has {employee_count} employee(s), skipping demo seed")
            return

        try:
            db.add_all(_demo_rows())
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(f"Error during demo data seeding: {str(e)}", exc_info=True)
            return
        logger.info(f"Seeded {len(DEMO_ROSTER)} employees, {len(DEMO_LOANS)} loans, {len(DEMO_OVERTIME)} overtime records")
