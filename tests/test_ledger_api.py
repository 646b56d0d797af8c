import pytest

MONTH_END = {"period_start": "2025-11-16", "period_end": "2025-11-30"}


def _file_overtime(client, employee_id="2", hours=2.5, **extra):
    return client.post("/api/payroll/overtime", json={
        "employee_id": employee_id,
        "work_date": "2025-11-24",
        "hours": hours,
        "reason": "Slab pour ran late",
        **extra
    })


def test_list_overtime_filters(client, roster):
    assert len(client.get("/api/payroll/overtime").json()) == 3

    approved = client.get("/api/payroll/overtime", params={"status": "Approved"}).json()
    assert {o["id"] for o in approved} == {"ot1", "ot9"}

    mine = client.get("/api/payroll/overtime", params={"employee_id": "2"}).json()
    assert [o["id"] for o in mine] == ["ot2"]


def test_file_overtime_starts_pending(client, roster):
    response = _file_overtime(client)
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "Pending"
    assert data["rate_multiplier"] == 1.25
    assert data["id"].startswith("ot-")


def test_file_overtime_for_unknown_employee(client, roster):
    response = _file_overtime(client, employee_id="404")
    assert response.status_code == 404
    assert response.json()["errors"][0]["code"] == "NOT_FOUND"


@pytest.mark.parametrize("extra", [{"hours": 0}, {"hours": 30}, {"rate_multiplier": 0.5}, {"reason": ""}])
def test_file_overtime_validation(client, roster, extra):
    response = _file_overtime(client, **extra)
    assert response.status_code == 422


def test_approved_overtime_is_paid_in_next_run(client, roster):
    before = client.post("/api/payroll/generate", json=MONTH_END).json()["data"]["records"][1]
    assert before["overtime_pay"] == 0

    response = client.post("/api/payroll/overtime/ot2/approve")
    assert response.status_code == 200
    assert response.json()["status"] == "Approved"

    after = client.post("/api/payroll/generate", json=MONTH_END).json()["data"]["records"][1]
    assert after["overtime_pay"] == pytest.approx(2 * 20000 / 22 / 8 * 1.25)


def test_overtime_decisions_are_final(client, roster):
    assert client.post("/api/payroll/overtime/ot2/reject").json()["status"] == "Rejected"
    # repeating the same decision is a no-op
    assert client.post("/api/payroll/overtime/ot2/reject").status_code == 200

    response = client.post("/api/payroll/overtime/ot2/approve")
    assert response.status_code == 409
    assert response.json()["errors"][0]["code"] == "LEDGER_STATE"


def test_decide_unknown_overtime(client, roster):
    assert client.post("/api/payroll/overtime/nope/approve").status_code == 404


def test_list_loans(client, roster):
    assert len(client.get("/api/payroll/loans").json()) == 2
    active = client.get("/api/payroll/loans", params={"active_only": True}).json()
    assert [loan["id"] for loan in active] == ["L1"]


def test_add_loan_is_deducted_from_next_run(client, roster):
    response = client.post("/api/payroll/loans", json={
        "employee_id": "2",
        "type": "Cash Advance",
        "total_amount": 6000,
        "monthly_amortization": 2000,
        "start_date": "2025-11-01",
        "end_date": "2026-01-31"
    })
    assert response.status_code == 201
    loan = response.json()
    assert loan["status"] == "Active"
    assert loan["remaining_balance"] == 6000

    sarah = client.post("/api/payroll/generate", json=MONTH_END).json()["data"]["records"][1]
    assert sarah["loans"] == pytest.approx(1000)
    assert sarah["net_pay"] == pytest.approx(7500)

    # generating payroll never touches the balance
    stored = client.get("/api/payroll/loans", params={"employee_id": "2"}).json()
    assert stored[0]["remaining_balance"] == 6000


def test_add_loan_rejects_inconsistent_terms(client, roster):
    response = client.post("/api/payroll/loans", json={
        "employee_id": "2",
        "type": "SSS",
        "total_amount": 5000,
        "remaining_balance": 9000,
        "monthly_amortization": 500,
        "start_date": "2025-11-01",
        "end_date": "2025-10-01"
    })
    assert response.status_code == 422


def test_add_loan_for_unknown_employee(client, roster):
    response = client.post("/api/payroll/loans", json={
        "employee_id": "404",
        "type": "Company",
        "total_amount": 5000,
        "monthly_amortization": 500,
        "start_date": "2025-11-01",
        "end_date": "2026-10-01"
    })
    assert response.status_code == 404


def _post_raw(client, url, body):
    return client.post(url, content=body, headers={"Content-Type": "application/json"})


def test_ledgers_reject_non_finite_numbers(client, roster):
    overtime = _post_raw(client, "/api/payroll/overtime", (
        '{"employee_id": "2", "work_date": "2025-11-24", "hours": 2,'
        ' "rate_multiplier": 1e999, "reason": "Night pour"}'
    ))
    assert overtime.status_code == 422

    loan = _post_raw(client, "/api/payroll/loans", (
        '{"employee_id": "2", "type": "Company", "total_amount": 1e999,'
        ' "monthly_amortization": 500, "start_date": "2025-11-01", "end_date": "2026-10-01"}'
    ))
    assert loan.status_code == 422
