"""
Payroll Run Generator

Turns a roster, the overtime and loan ledgers and a pay period into one
PayrollRecord per payable employee. Pure: inputs are only read, every record
is freshly built, nothing is persisted or mutated.

Per employee:
1. basic = monthly salary / 2 (semi-monthly, no proration)
2. overtime pay from approved overtime
3. gross = basic + overtime + allowances + bonuses
4. SSS / PhilHealth / Pag-IBIG withheld only on the month-end cut-off run
5. loans = half the monthly amortization of each active loan
6. taxable income = gross - contributions netted out of the tax base
7. withholding tax on taxable income, floored at zero
8. net = gross - every deduction
"""

import logging
import math
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from paydesk.core.logging import payroll_period_context
from paydesk.engine import calculators
from paydesk.engine.period import Period
from paydesk.engine.policy import PayrollPolicy, default_policy
from paydesk.schemas.employee import Employee
from paydesk.schemas.payroll import (
    EarningsAdjustment,
    EmployeeValidationIssue,
    Loan,
    LoanStatus,
    OvertimeRecord,
    OvertimeStatus,
    PayrollRecord,
    PayrollRun,
    PayrollStatus,
)

logger = logging.getLogger(__name__)

_NO_ADJUSTMENT = EarningsAdjustment()


def _group_by_employee(entries: Iterable, roster_ids: set) -> Dict[str, list]:
    # Entries pointing at employees outside the roster are dropped here
    grouped: Dict[str, list] = defaultdict(list)
    for entry in entries:
        if entry.employee_id in roster_ids:
            grouped[entry.employee_id].append(entry)
    return grouped


def validate_employee_inputs(
    employee: Employee,
    overtime: Sequence[OvertimeRecord],
    loans: Sequence[Loan],
) -> List[str]:
    """Return the reasons this employee cannot be paid; empty when the inputs are usable."""
    problems = []
    if not math.isfinite(employee.salary):
        problems.append(f"Monthly salary must be a finite amount (got {employee.salary})")
    elif employee.salary < 0:
        problems.append(f"Monthly salary must not be negative (got {employee.salary:.2f})")

    for ot in overtime:
        if ot.status != OvertimeStatus.APPROVED:
            continue
        if not math.isfinite(ot.hours):
            problems.append(f"Overtime {ot.id} has non-finite hours ({ot.hours})")
        elif ot.hours < 0:
            problems.append(f"Overtime {ot.id} has negative hours ({ot.hours})")
        if not math.isfinite(ot.rate_multiplier) or ot.rate_multiplier <= 0:
            problems.append(f"Overtime {ot.id} needs a positive rate multiplier (got {ot.rate_multiplier})")

    for loan in loans:
        if loan.status != LoanStatus.ACTIVE:
            continue
        if not math.isfinite(loan.monthly_amortization):
            problems.append(f"Loan {loan.id} has a non-finite monthly amortization ({loan.monthly_amortization})")
        elif loan.monthly_amortization < 0:
            problems.append(f"Loan {loan.id} has a negative monthly amortization ({loan.monthly_amortization:.2f})")

    return problems


def loan_deduction(loans: Iterable[Loan]) -> float:
    return sum((loan.monthly_amortization / 2 for loan in loans if loan.status == LoanStatus.ACTIVE), 0.0)


def build_payroll_record(
    employee: Employee,
    overtime: Sequence[OvertimeRecord],
    loans: Sequence[Loan],
    period: Period,
    policy: PayrollPolicy,
    status: PayrollStatus = PayrollStatus.DRAFT,
    adjustment: Optional[EarningsAdjustment] = None,
) -> PayrollRecord:
    adjustment = adjustment or _NO_ADJUSTMENT
    salary = employee.salary

    basic = salary / 2
    ot_pay = calculators.overtime_pay(salary, overtime, policy)
    gross = basic + ot_pay + adjustment.allowances + adjustment.bonuses

    sss = calculators.sss_contribution(salary, policy)
    philhealth = calculators.philhealth_contribution(salary, policy)
    pagibig = calculators.pagibig_contribution(salary, policy)

    withheld = period.is_month_end_cutoff(policy.cutoff_day)
    if withheld or policy.deduct_unwithheld_contributions_from_tax_base:
        taxable = gross - sss - philhealth - pagibig
    else:
        taxable = gross
    if not withheld:
        sss = philhealth = pagibig = 0.0

    tax = max(0.0, calculators.withholding_tax(taxable, policy))
    loans_total = loan_deduction(loans)

    total_deductions = sss + philhealth + pagibig + tax + loans_total + adjustment.late_deductions

    return PayrollRecord(
        employee_id=employee.id,
        employee_name=employee.name,
        position=employee.role,
        department=employee.department,
        period_start=period.start,
        period_end=period.end,
        basic_salary=basic,
        overtime_pay=ot_pay,
        allowances=adjustment.allowances,
        bonuses=adjustment.bonuses,
        gross_pay=gross,
        sss_contribution=sss,
        philhealth_contribution=philhealth,
        pagibig_contribution=pagibig,
        withholding_tax=tax,
        loans=loans_total,
        late_deductions=adjustment.late_deductions,
        net_pay=gross - total_deductions,
        status=status,
        payment_date=period.end if status == PayrollStatus.PAID else None,
    )


def generate_payroll(
    roster: Sequence[Employee],
    overtime_ledger: Iterable[OvertimeRecord],
    loan_ledger: Iterable[Loan],
    period: Period,
    policy: Optional[PayrollPolicy] = None,
    initial_status: PayrollStatus = PayrollStatus.DRAFT,
    adjustments: Optional[Mapping[str, EarningsAdjustment]] = None,
) -> PayrollRun:
    """
    Generate payroll for every employee in the roster.

    Records come back in roster order. Employees with invalid inputs are left
    out of `records` and listed in `errors`; the rest of the run still
    completes.
    """
    policy = policy or default_policy()
    adjustments = adjustments or {}
    roster_ids = {emp.id for emp in roster}
    overtime_by_emp = _group_by_employee(overtime_ledger, roster_ids)
    loans_by_emp = _group_by_employee(loan_ledger, roster_ids)

    run = PayrollRun(period_start=period.start, period_end=period.end, records=[], errors=[])

    with payroll_period_context(period.label):
        for emp in roster:
            overtime = overtime_by_emp.get(emp.id, [])
            loans = loans_by_emp.get(emp.id, [])

            problems = validate_employee_inputs(emp, overtime, loans)
            if problems:
                logger.warning(f"Skipping employee {emp.id}: {'; '.join(problems)}")
                run.errors.append(EmployeeValidationIssue(
                    employee_id=emp.id,
                    employee_name=emp.name,
                    messages=problems
                ))
                continue

            run.records.append(build_payroll_record(
                emp, overtime, loans, period, policy,
                status=initial_status,
                adjustment=adjustments.get(emp.id)
            ))

        logger.info(
            f"Generated {run.processed} payroll records ({len(run.errors)} rejected), "
            f"cutoff run: {period.is_month_end_cutoff(policy.cutoff_day)}"
        )

    return run
