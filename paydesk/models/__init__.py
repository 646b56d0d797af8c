# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import employee, overtime, loan, payroll

# Explicit class exports for cleaner imports
from .employee import Employee
from .overtime import OvertimeRecord
from .loan import Loan
from .payroll import PayrollRecord

__all__ = [
    "Employee",
    "OvertimeRecord",
    "Loan",
    "PayrollRecord",
]
