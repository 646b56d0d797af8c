import pytest
from datetime import date
from pydantic import ValidationError

from paydesk.engine import calculators
from paydesk.engine.policy import PayrollPolicy, TaxBracket
from paydesk.schemas.payroll import OvertimeRecord, OvertimeStatus

POLICY = PayrollPolicy()


def _ot(hours, multiplier=1.25, status=OvertimeStatus.APPROVED, ot_id="ot"):
    return OvertimeRecord(
        id=ot_id, employee_id="1", work_date=date(2025, 11, 18),
        hours=hours, rate_multiplier=multiplier, status=status
    )


@pytest.mark.parametrize("salary, expected", [
    (5000, 225), (12000, 540), (20000, 900), (29000, 1305),
])
def test_sss_standard_rate_between_floor_and_ceiling(salary, expected):
    """Test that the employee share is 4.5% rounded to the peso."""
    assert calculators.sss_contribution(salary, POLICY) == expected


@pytest.mark.parametrize("salary", [0, 3000, 4250])
def test_sss_minimum_at_or_below_floor(salary):
    assert calculators.sss_contribution(salary, POLICY) == 180


@pytest.mark.parametrize("salary", [29750, 50000, 1_000_000])
def test_sss_maximum_at_or_above_ceiling(salary):
    assert calculators.sss_contribution(salary, POLICY) == 1350


def test_sss_rounds_to_nearest_peso():
    """4,310 x 4.5% = 193.95 -> 194; 10,001 x 4.5% = 450.045 -> 450."""
    assert calculators.sss_contribution(4310, POLICY) == 194
    assert calculators.sss_contribution(10001, POLICY) == 450


@pytest.mark.parametrize("salary, expected", [
    (8000, 250.0), (10000, 250.0), (25000, 625.0), (100000, 2500.0), (150000, 2500.0),
])
def test_philhealth_is_half_of_clamped_premium(salary, expected):
    """Test PhilHealth employee share = 5% x clamp(salary, 10k, 100k) / 2."""
    basis = min(max(salary, 10000), 100000)
    assert calculators.philhealth_contribution(salary, POLICY) == pytest.approx(basis * 0.05 / 2)
    assert calculators.philhealth_contribution(salary, POLICY) == pytest.approx(expected)


@pytest.mark.parametrize("salary, expected", [
    (3000, 60.0), (5000, 100.0), (5000.01, 100.0), (20000, 100.0),
])
def test_pagibig_contribution(salary, expected):
    assert calculators.pagibig_contribution(salary, POLICY) == pytest.approx(expected)


def test_pagibig_never_exceeds_cap():
    for salary in (0, 4999, 5001, 80000, 10 ** 9):
        assert calculators.pagibig_contribution(salary, POLICY) <= POLICY.pagibig.cap


def test_overtime_pay_zero_without_approved_records():
    assert calculators.overtime_pay(30000, [], POLICY) == 0
    pending = [_ot(4, status=OvertimeStatus.PENDING), _ot(2, status=OvertimeStatus.REJECTED)]
    assert calculators.overtime_pay(30000, pending, POLICY) == 0


def test_overtime_pay_uses_22_day_8_hour_rate():
    """Test hours x (salary / 22 / 8) x multiplier, summed over approved records."""
    records = [_ot(3, 1.25, ot_id="a"), _ot(5, 1.5, ot_id="b"), _ot(10, 2.0, OvertimeStatus.PENDING, "c")]
    hourly = 44000 / 22 / 8
    assert calculators.hourly_rate(44000, POLICY) == pytest.approx(250.0)
    assert calculators.overtime_pay(44000, records, POLICY) == pytest.approx(3 * hourly * 1.25 + 5 * hourly * 1.5)


def test_withholding_tax_exempt_bracket():
    assert calculators.withholding_tax(0, POLICY) == 0
    assert calculators.withholding_tax(10000, POLICY) == 0
    assert calculators.withholding_tax(250000 / 24, POLICY) == 0


def test_withholding_tax_graduated_brackets():
    # 480k annual: 30,000/24 + 25% of the excess over 400k/24
    assert calculators.withholding_tax(20000, POLICY) == pytest.approx(1250 + (20000 - 400000 / 24) * 0.25)
    # 300k annual: 20% of the excess over 250k/24
    assert calculators.withholding_tax(12500, POLICY) == pytest.approx((12500 - 250000 / 24) * 0.20)


def test_withholding_tax_covers_top_brackets():
    """Incomes above 2M a year are taxed, not dropped to zero."""
    taxable = 3_000_000 / 24
    assert calculators.withholding_tax(taxable, POLICY) == pytest.approx(490000 / 24 + (taxable - 2_000_000 / 24) * 0.32)
    taxable = 400_000
    assert calculators.withholding_tax(taxable, POLICY) == pytest.approx(2_410_000 / 24 + (taxable - 8_000_000 / 24) * 0.35)


def test_withholding_tax_is_monotonic():
    previous = -1.0
    income = 0.0
    while income <= 450_000:
        tax = calculators.withholding_tax(income, POLICY)
        assert tax >= previous - 1e-9
        previous = tax
        income += 125.0


def test_withholding_tax_continuous_at_bracket_boundaries():
    for bracket in POLICY.tax_brackets[1:]:
        boundary = bracket.threshold / 24
        below = calculators.withholding_tax(boundary - 0.001, POLICY)
        above = calculators.withholding_tax(boundary + 0.001, POLICY)
        assert above - below == pytest.approx(0, abs=0.01)


def test_withholding_tax_follows_policy_periods():
    """A monthly cycle annualizes by 12 instead of 24."""
    monthly = PayrollPolicy(periods_per_year=12)
    assert calculators.withholding_tax(20000, monthly) == 0
    assert calculators.withholding_tax(40000, monthly) == pytest.approx(30000 / 12 + (40000 - 400000 / 12) * 0.25)


def test_policy_rejects_unordered_brackets():
    with pytest.raises(ValidationError):
        PayrollPolicy(tax_brackets=(
            TaxBracket(threshold=0),
            TaxBracket(threshold=400000, base_tax=30000, rate=0.25),
            TaxBracket(threshold=250000, rate=0.20),
        ))


def test_policy_requires_zero_starting_bracket():
    with pytest.raises(ValidationError):
        PayrollPolicy(tax_brackets=(TaxBracket(threshold=1000, rate=0.1),))
