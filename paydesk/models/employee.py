from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.sql import func
from paydesk.database import Base

class Employee(Base):
    __tablename__ = "employees"

    # Surrogate key keeps roster (insertion) order; `id` is the business identifier
    row_id = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    role = Column(String, nullable=False)
    department = Column(String, index=True, nullable=False)
    email = Column(String, nullable=True)
    salary = Column(Float, nullable=False, default=0.0)  # monthly base, PHP
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Employee {self.id}: {self.name}>"
