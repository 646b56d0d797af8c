from sqlalchemy import Column, String, Date, Float, DateTime
from sqlalchemy.sql import func
from paydesk.database import Base
from paydesk.schemas.payroll import LoanStatus

class Loan(Base):
    __tablename__ = "loans"

    id = Column(String, primary_key=True, index=True)
    employee_id = Column(String, index=True)
    type = Column(String, nullable=False)  # LoanType value
    total_amount = Column(Float, nullable=False)
    remaining_balance = Column(Float, nullable=False)
    monthly_amortization = Column(Float, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(String, default=LoanStatus.ACTIVE.value, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
