import enum
import uuid
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PayrollStatus(str, enum.Enum):
    DRAFT = "Draft"
    PENDING = "Pending"
    PAID = "Paid"

    def can_transition_to(self, target: "PayrollStatus") -> bool:
        """Lifecycle is strictly Draft -> Pending -> Paid, one step at a time."""
        order = list(PayrollStatus)
        return order.index(target) == order.index(self) + 1


class OvertimeStatus(str, enum.Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LoanType(str, enum.Enum):
    SSS = "SSS"
    PAG_IBIG = "Pag-IBIG"
    COMPANY = "Company"
    CASH_ADVANCE = "Cash Advance"


class LoanStatus(str, enum.Enum):
    ACTIVE = "Active"
    PAID = "Paid"


# --- Ledger entries ---

class OvertimeRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    employee_id: str
    work_date: date
    hours: float
    rate_multiplier: float = 1.25
    reason: str = ""
    status: OvertimeStatus = OvertimeStatus.PENDING


class OvertimeCreate(BaseModel):
    employee_id: str
    work_date: date
    hours: float = Field(..., gt=0, le=24, allow_inf_nan=False)
    rate_multiplier: float = Field(1.25, ge=1.0, allow_inf_nan=False)
    reason: str = Field(..., min_length=1, max_length=500)


class Loan(BaseModel):
    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    employee_id: str
    type: LoanType
    total_amount: float
    remaining_balance: float
    monthly_amortization: float
    start_date: date
    end_date: date
    status: LoanStatus = LoanStatus.ACTIVE


class LoanCreate(BaseModel):
    employee_id: str
    type: LoanType
    total_amount: float = Field(..., gt=0, allow_inf_nan=False)
    remaining_balance: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    monthly_amortization: float = Field(..., gt=0, allow_inf_nan=False)
    start_date: date
    end_date: date

    @model_validator(mode="after")
    def check_terms(self) -> "LoanCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        if self.remaining_balance is not None and self.remaining_balance > self.total_amount:
            raise ValueError("remaining_balance cannot exceed total_amount")
        return self


# --- Payroll run ---

class EarningsAdjustment(BaseModel):
    """Externally supplied per-employee amounts for one run; all default to zero."""
    allowances: float = Field(0.0, ge=0, allow_inf_nan=False)
    bonuses: float = Field(0.0, ge=0, allow_inf_nan=False)
    late_deductions: float = Field(0.0, ge=0, allow_inf_nan=False)


class PayrollRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    employee_id: str
    employee_name: str
    position: str
    department: str
    period_start: date
    period_end: date

    # Earnings
    basic_salary: float
    overtime_pay: float = 0.0
    allowances: float = 0.0
    bonuses: float = 0.0
    gross_pay: float

    # Deductions
    sss_contribution: float = 0.0
    philhealth_contribution: float = 0.0
    pagibig_contribution: float = 0.0
    withholding_tax: float = 0.0
    loans: float = 0.0
    late_deductions: float = 0.0

    net_pay: float
    status: PayrollStatus = PayrollStatus.DRAFT
    payment_date: Optional[date] = None

    @property
    def government_deductions(self) -> float:
        return self.sss_contribution + self.philhealth_contribution + self.pagibig_contribution

    @property
    def total_deductions(self) -> float:
        return (
            self.sss_contribution
            + self.philhealth_contribution
            + self.pagibig_contribution
            + self.withholding_tax
            + self.loans
            + self.late_deductions
        )


class EmployeeValidationIssue(BaseModel):
    employee_id: str
    employee_name: str
    messages: List[str]


class PayrollRun(BaseModel):
    period_start: date
    period_end: date
    records: List[PayrollRecord] = []
    errors: List[EmployeeValidationIssue] = []

    @property
    def processed(self) -> int:
        return len(self.records)


# --- API bodies ---

class GeneratePayrollRequest(BaseModel):
    # Kept as strings so malformed dates surface as INVALID_PERIOD, not a 422
    period_start: str
    period_end: str
    initial_status: PayrollStatus = PayrollStatus.DRAFT
    adjustments: Dict[str, EarningsAdjustment] = {}


class StatusUpdateRequest(BaseModel):
    status: PayrollStatus
    # Only meaningful when marking a record Paid
    payment_date: Optional[date] = None

    @model_validator(mode="after")
    def payment_date_only_when_paid(self) -> "StatusUpdateRequest":
        if self.payment_date is not None and self.status != PayrollStatus.PAID:
            raise ValueError(f"payment_date can only be set when moving to {PayrollStatus.PAID.value}")
        return self


class PayrollSummary(BaseModel):
    period_start: Optional[date] = None
    period_end: Optional[date] = None
    headcount: int
    total_gross: float
    total_deductions: float
    total_net: float
    by_status: Dict[str, int]
