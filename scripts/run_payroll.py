"""
Batch payroll run for one period.

Usage:
    python -m scripts.run_payroll 2025-11-16 2025-11-30
"""
import sys

from paydesk.core.exceptions import AppException
from paydesk.database import init_db, session_scope
from paydesk.services import payroll_service


def run(period_start: str, period_end: str) -> int:
    init_db()
    with session_scope() as db:
        try:
            result = payroll_service.generate_payroll_run(db, period_start, period_end)
        except AppException as e:
            print(f"Payroll run failed: {e.message}")
            return 1

    print(f"Payroll {period_start} to {period_end}: {result.processed} record(s)")
    for record in result.records:
        print(
            f" - {record.employee_id:>4} {record.employee_name:<24} "
            f"gross {record.gross_pay:>12,.2f}  gov't {record.government_deductions:>9,.2f}  "
            f"deductions {record.total_deductions:>10,.2f}  net {record.net_pay:>12,.2f}"
        )
    for issue in result.errors:
        print(f" ! {issue.employee_id} {issue.employee_name}: {'; '.join(issue.messages)}")
    return 0


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("Usage: python -m scripts.run_payroll <period_start> <period_end>")
        sys.exit(2)
    sys.exit(run(sys.argv[1], sys.argv[2]))
