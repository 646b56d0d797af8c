from sqlalchemy import Column, Integer, String, Float, Date, DateTime, Index
from sqlalchemy.sql import func
from paydesk.database import Base
from paydesk.schemas.payroll import PayrollStatus

class PayrollRecord(Base):
    __tablename__ = "payroll_records"
    __table_args__ = (
        Index("ix_payroll_records_period", "period_start", "period_end"),
    )

    row_id = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, index=True, nullable=False)
    employee_id = Column(String, index=True)

    # Denormalized so a payslip survives roster edits
    employee_name = Column(String)
    position = Column(String)
    department = Column(String)

    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)

    # Earnings
    basic_salary = Column(Float, nullable=False)
    overtime_pay = Column(Float, default=0.0)
    allowances = Column(Float, default=0.0)
    bonuses = Column(Float, default=0.0)
    gross_pay = Column(Float, nullable=False)

    # Deductions
    sss_contribution = Column(Float, default=0.0)
    philhealth_contribution = Column(Float, default=0.0)
    pagibig_contribution = Column(Float, default=0.0)
    withholding_tax = Column(Float, default=0.0)
    loans = Column(Float, default=0.0)
    late_deductions = Column(Float, default=0.0)

    net_pay = Column(Float, nullable=False)
    status = Column(String, default=PayrollStatus.DRAFT.value, index=True)
    payment_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
