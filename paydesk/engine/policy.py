"""
Payroll Policy

Every rate, floor, ceiling and bracket the engine applies lives here, so a
different jurisdiction or pay cycle is a different PayrollPolicy instance
rather than a code change.

Defaults follow simplified Philippine schedules:
- SSS (social insurance): 4.5% employee share between a ₱4,250 floor and a
  ₱29,750 ceiling, fixed ₱180 / ₱1,350 outside that range
- PhilHealth (health insurance): 5% premium on a basis clamped to
  ₱10,000-₱100,000, employee pays half
- Pag-IBIG (housing fund): 2% up to ₱5,000, flat ₱100 above
- Withholding tax: TRAIN-law annual schedule, applied to an annualized
  semi-monthly figure
"""

from functools import lru_cache
from typing import Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from paydesk.core.config import PayrollSettings, settings


class SSSSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    floor: float = 4250.0
    ceiling: float = 29750.0
    minimum: float = 180.0
    maximum: float = 1350.0
    rate: float = 0.045


class PhilHealthSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    floor: float = 10000.0
    ceiling: float = 100000.0
    rate: float = 0.05
    employee_share: float = 0.5


class PagIbigSchedule(BaseModel):
    model_config = ConfigDict(frozen=True)

    threshold: float = 5000.0
    rate: float = 0.02
    cap: float = 100.0


class TaxBracket(BaseModel):
    """Annual bracket: income above `threshold` pays `base_tax` plus `rate` of the excess."""
    model_config = ConfigDict(frozen=True)

    threshold: float = Field(..., ge=0)
    base_tax: float = Field(0.0, ge=0)
    rate: float = Field(0.0, ge=0, lt=1)


TRAIN_TAX_BRACKETS: Tuple[TaxBracket, ...] = (
    TaxBracket(threshold=0, base_tax=0, rate=0.0),
    TaxBracket(threshold=250_000, base_tax=0, rate=0.20),
    TaxBracket(threshold=400_000, base_tax=30_000, rate=0.25),
    TaxBracket(threshold=800_000, base_tax=130_000, rate=0.30),
    TaxBracket(threshold=2_000_000, base_tax=490_000, rate=0.32),
    TaxBracket(threshold=8_000_000, base_tax=2_410_000, rate=0.35),
)


class PayrollPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    working_days_per_month: int = Field(22, gt=0)
    hours_per_day: int = Field(8, gt=0)
    periods_per_year: int = Field(24, gt=0)
    cutoff_day: int = Field(25, ge=1, le=31)

    sss: SSSSchedule = SSSSchedule()
    philhealth: PhilHealthSchedule = PhilHealthSchedule()
    pagibig: PagIbigSchedule = PagIbigSchedule()
    tax_brackets: Tuple[TaxBracket, ...] = TRAIN_TAX_BRACKETS

    # When False the tax base only nets out contributions actually withheld
    # in the run; when True it always nets out the month's contributions.
    deduct_unwithheld_contributions_from_tax_base: bool = False

    @field_validator("tax_brackets")
    @classmethod
    def brackets_must_be_ascending(cls, brackets: Tuple[TaxBracket, ...]) -> Tuple[TaxBracket, ...]:
        if not brackets:
            raise ValueError("at least one tax bracket is required")
        if brackets[0].threshold != 0:
            raise ValueError("the first tax bracket must start at zero income")
        thresholds = [b.threshold for b in brackets]
        if any(lo >= hi for lo, hi in zip(thresholds, thresholds[1:])):
            raise ValueError("tax bracket thresholds must be strictly ascending")
        return brackets

    def bracket_for(self, annual_income: float) -> TaxBracket:
        for bracket in reversed(self.tax_brackets):
            if annual_income > bracket.threshold:
                return bracket
        return self.tax_brackets[0]

    @classmethod
    def from_settings(cls, payroll_settings: PayrollSettings) -> "PayrollPolicy":
        return cls(
            working_days_per_month=payroll_settings.working_days_per_month,
            hours_per_day=payroll_settings.hours_per_day,
            periods_per_year=payroll_settings.periods_per_year,
            cutoff_day=payroll_settings.cutoff_day,
            deduct_unwithheld_contributions_from_tax_base=(
                payroll_settings.deduct_unwithheld_contributions_from_tax_base
            ),
        )


@lru_cache(maxsize=1)
def default_policy() -> PayrollPolicy:
    return PayrollPolicy.from_settings(settings.payroll)
