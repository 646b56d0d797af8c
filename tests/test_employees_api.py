def test_list_employees_in_roster_order(client, roster):
    response = client.get("/api/employees")
    assert response.status_code == 200
    assert [e["id"] for e in response.json()] == ["1", "2", "3"]


def test_list_employees_by_department(client, roster):
    response = client.get("/api/employees", params={"department": "Operations"})
    assert [e["name"] for e in response.json()] == ["Richard Steel", "Bob Builder"]


def test_get_employee(client, roster):
    response = client.get("/api/employees/2")
    assert response.status_code == 200
    assert response.json()["role"] == "Senior Civil Engineer"

    missing = client.get("/api/employees/404")
    assert missing.status_code == 404
    assert missing.json()["success"] is False


def test_create_employee(client, roster):
    response = client.post("/api/employees", json={
        "name": "Mario Welder",
        "role": "Welder",
        "department": "Operations",
        "salary": 18000
    })
    assert response.status_code == 201
    created = response.json()
    assert created["id"]
    assert [e["id"] for e in client.get("/api/employees").json()][-1] == created["id"]


def test_create_employee_with_taken_id(client, roster):
    response = client.post("/api/employees", json={
        "id": "1", "name": "Imposter", "role": "Foreman", "department": "Operations", "salary": 30000
    })
    assert response.status_code == 409
    assert response.json()["errors"][0]["code"] == "DUPLICATE_ENTITY"


def test_create_employee_validation(client, roster):
    negative = client.post("/api/employees", json={
        "name": "Bad Pay", "role": "Laborer", "department": "Operations", "salary": -1
    })
    assert negative.status_code == 422

    unknown_dept = client.post("/api/employees", json={
        "name": "Lost", "role": "Laborer", "department": "Marketing", "salary": 15000
    })
    assert unknown_dept.status_code == 422
    assert unknown_dept.json()["errors"][0]["field"] == "department"


def test_create_employee_rejects_infinite_salary(client, roster):
    # 1e999 parses to float("inf")
    response = client.post(
        "/api/employees",
        content='{"name": "Overflow", "role": "Laborer", "department": "Operations", "salary": 1e999}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["errors"][0]["field"] == "salary"

    run = client.post("/api/payroll/generate", json={"period_start": "2025-11-16", "period_end": "2025-11-30"})
    assert run.status_code == 200
    assert run.json()["metadata"] == {"processed": 3, "rejected": 0}
