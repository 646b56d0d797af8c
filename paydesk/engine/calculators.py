"""
Payroll Calculators

Five independent, stateless functions. Each takes a monthly salary (or, for
withholding tax, a per-period taxable income) and the policy to apply, and
returns an amount in currency units. None of them reads shared state, so they
can be tested or swapped one at a time without touching the run generator.
"""

import math
from typing import Iterable, Optional

from paydesk.engine.policy import PayrollPolicy, default_policy
from paydesk.schemas.payroll import OvertimeRecord, OvertimeStatus


def _round_half_up(amount: float) -> float:
    return float(math.floor(amount + 0.5))


def hourly_rate(monthly_salary: float, policy: Optional[PayrollPolicy] = None) -> float:
    policy = policy or default_policy()
    return monthly_salary / policy.working_days_per_month / policy.hours_per_day


def overtime_pay(
    monthly_salary: float,
    overtime_records: Iterable[OvertimeRecord],
    policy: Optional[PayrollPolicy] = None,
) -> float:
    """
    Total pay for the approved overtime of one employee.

    Pending and rejected records contribute nothing. Records are not
    filtered by date: every approved record handed in is paid.
    """
    rate = hourly_rate(monthly_salary, policy)
    return sum(
        (ot.hours * rate * ot.rate_multiplier for ot in overtime_records if ot.status == OvertimeStatus.APPROVED),
        0.0,
    )


def sss_contribution(salary: float, policy: Optional[PayrollPolicy] = None) -> float:
    """
    Employee share of the SSS contribution for the month.

    Examples (default policy):
        20,000 -> 900    3,000 -> 180 (minimum)    50,000 -> 1,350 (maximum)
    """
    schedule = (policy or default_policy()).sss
    if salary <= schedule.floor:
        return schedule.minimum
    if salary >= schedule.ceiling:
        return schedule.maximum
    return _round_half_up(salary * schedule.rate)


def philhealth_contribution(salary: float, policy: Optional[PayrollPolicy] = None) -> float:
    """
    Employee share of the PhilHealth premium.

    The salary is clamped into [floor, ceiling] before the premium rate is
    applied; the employee pays `employee_share` of the total premium.
    """
    schedule = (policy or default_policy()).philhealth
    basis = min(max(salary, schedule.floor), schedule.ceiling)
    return basis * schedule.rate * schedule.employee_share


def pagibig_contribution(salary: float, policy: Optional[PayrollPolicy] = None) -> float:
    schedule = (policy or default_policy()).pagibig
    if salary > schedule.threshold:
        return schedule.cap
    return salary * schedule.rate


def withholding_tax(taxable_income: float, policy: Optional[PayrollPolicy] = None) -> float:
    """
    Withholding tax for one pay period.

    The per-period taxable income is annualized (x periods_per_year) to pick
    the bracket; the bracket's base tax and threshold are then scaled back to
    a single period, so consecutive brackets meet without a jump.

    Examples (default policy, semi-monthly):
        10,000 -> 0    20,000 -> 2,083.33
    """
    policy = policy or default_policy()
    periods = policy.periods_per_year
    bracket = policy.bracket_for(taxable_income * periods)
    tax = bracket.base_tax / periods + (taxable_income - bracket.threshold / periods) * bracket.rate
    return max(0.0, tax)
