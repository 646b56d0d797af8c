from sqlalchemy import Column, String, Date, Float, DateTime
from sqlalchemy.sql import func
from paydesk.database import Base
from paydesk.schemas.payroll import OvertimeStatus

class OvertimeRecord(Base):
    __tablename__ = "overtime_records"

    id = Column(String, primary_key=True, index=True)
    employee_id = Column(String, index=True)  # Not a foreign key: unknown employees are skipped by payroll
    work_date = Column(Date, nullable=False)
    hours = Column(Float, nullable=False)
    rate_multiplier = Column(Float, nullable=False, default=1.25)
    reason = Column(String, default="")
    status = Column(String, default=OvertimeStatus.PENDING.value, index=True)
    decided_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
