from __future__ import annotations

from datetime import date

from src.tobacco_workforce.tobacco_workforce.core.enums import Role


def _seed(schedules_repo, make_item, make_schedule):
    schedules_repo.create(
        make_schedule("SCH-1", date(2026, 3, 2), [make_item("ITEM-1", task="Stripping", employee_ids=("EMP-1",))])
    )


def test_login_sets_role_from_account(client):
    resp = client.post("/login", json={"email": "supervisor@example.com", "password": "admin123"})

    assert resp.status_code == 200
    assert resp.get_json()["role"] == "admin"
    assert client.get("/me").get_json()["email"] == "supervisor@example.com"

    client.post("/logout")
    assert client.get("/me").status_code == 401


def test_bad_login_is_401(client):
    resp = client.post("/login", json={"email": "clerk@example.com", "password": "nope"})

    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Invalid email or password"}


def test_endpoints_require_login(client):
    assert client.get("/employees").status_code == 401


def test_regular_user_cannot_unlock(login_as):
    client = login_as(Role.USER)

    resp = client.post("/work-entries/unlock", json={"schedule_id": "S", "item_id": "I", "employee_id": "E"})

    assert resp.status_code == 403


def test_create_schedule_and_conflict(login_as):
    client = login_as(Role.ADMIN)
    body = {"date": "2026-03-02", "items": [{"task": "Stripping", "employee_ids": ["EMP-1"], "target_mass": 200}]}

    created = client.post("/schedules", json=body)
    assert created.status_code == 201
    assert created.get_json()["items"][0]["target_mass"] == 200

    clash = client.post("/schedules", json={"date": "2026-03-02", "items": [{"task": "Machine", "employee_ids": ["EMP-1"]}]})
    assert clash.status_code == 400
    assert "already assigned to another task on this date" in clash.get_json()["error"]

    check = client.get("/schedules/assignment-check?employee_id=EMP-1&date=2026-03-02").get_json()
    assert check["assigned"] is True


def test_unknown_schedule_is_404(login_as):
    resp = login_as(Role.USER).get("/schedules/SCH-NOPE")

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Schedule not found"}


def test_invalid_date_is_400(login_as):
    resp = login_as(Role.ADMIN).post("/schedules", json={"date": "02/03/2026", "items": []})

    assert resp.status_code == 400


def test_record_lock_unlock_flow(login_as, schedules_repo, make_item, make_schedule):
    _seed(schedules_repo, make_item, make_schedule)
    client = login_as(Role.ADMIN)
    triple = {"schedule_id": "SCH-1", "item_id": "ITEM-1", "employee_id": "EMP-1"}

    added = client.post(
        "/work-entries",
        json={
            **triple,
            "quantity": 40,
            "payload": {"kind": "scales", "scale_entries": [{"in_value": 45, "out_value": 40, "sticks": 2}]},
        },
    )
    assert added.status_code == 201
    assert added.get_json()["total_sticks"] == 2.0

    assert client.post("/work-entries/lock", json=triple).get_json() == {"locked": 1}
    rejected = client.post("/work-entries", json={**triple, "quantity": 1})
    assert rejected.status_code == 400
    assert rejected.get_json()["error"] == "This worker has been locked for this task"

    locked = client.get("/work-entries/locked").get_json()
    assert locked[0]["task"] == "Stripping"

    assert client.post("/work-entries/unlock", json=triple).get_json() == {"unlocked": True}
    entries = client.get("/schedules/SCH-1/employees/EMP-1/entries").get_json()
    assert [e["locked"] for e in entries] == [False]


def test_drafts_round_trip(login_as, schedules_repo, make_item, make_schedule):
    _seed(schedules_repo, make_item, make_schedule)
    client = login_as(Role.USER)

    saved = client.put("/drafts/SCH-1/ITEM-1/EMP-1", json={"scale_entries": [{"in_value": 12}]}).get_json()
    assert saved["key"] == "stripping-progress-SCH-1-ITEM-1-EMP-1"

    assert client.get("/drafts/SCH-1/ITEM-1/EMP-1").get_json()["data"] == {"scale_entries": [{"in_value": 12}]}
    assert client.delete("/drafts/SCH-1/ITEM-1/EMP-1").get_json() == {"cleared": True}
    assert client.get("/drafts/SCH-1/ITEM-1/EMP-1").get_json() is None


def test_payroll_endpoint(login_as, schedules_repo, make_item, make_schedule):
    _seed(schedules_repo, make_item, make_schedule)
    client = login_as(Role.ADMIN)
    client.put("/pay-rates", json={"Stripping": 2.5})
    triple = {"schedule_id": "SCH-1", "item_id": "ITEM-1", "employee_id": "EMP-1"}
    client.post("/work-entries", json={**triple, "quantity": 100})

    report = client.get("/payroll?start=2026-03-02&end=2026-03-02").get_json()

    assert report["employees"][0]["full_name"] == "Thandi Moyo"
    assert report["employees"][0]["total_amount"] == 250.0
    assert client.get("/pay-rates").get_json() == {"Stripping": 2.5}


def test_payroll_is_admin_only(login_as):
    assert login_as(Role.USER).get("/payroll?start=2026-03-02&end=2026-03-02").status_code == 403


def test_employee_crud(login_as):
    client = login_as(Role.ADMIN)

    created = client.post("/employees", json={"name": "Sipho", "surname": "Dube"})
    assert created.status_code == 201
    employee_id = created.get_json()["id"]

    assert client.get("/employees?q=dube").get_json()[0]["id"] == employee_id
    assert client.delete(f"/employees/{employee_id}").get_json() == {"ok": True}
    assert client.get(f"/employees/{employee_id}").status_code == 404


def test_single_rate_and_schedule_entries(login_as, schedules_repo, make_item, make_schedule):
    _seed(schedules_repo, make_item, make_schedule)
    client = login_as(Role.ADMIN)

    rates = client.put("/pay-rates/Grading", json={"rate": 0.3}).get_json()
    assert rates["Grading"] == 0.3
    assert rates["Machine"] == 0.12

    client.post("/work-entries", json={"schedule_id": "SCH-1", "item_id": "ITEM-1", "employee_id": "EMP-1", "quantity": 5, "lock": True})
    entries = client.get("/schedules/SCH-1/entries").get_json()
    assert [(e["quantity"], e["locked"]) for e in entries] == [(5.0, True)]


def test_regular_user_on_admin_endpoint_gets_json_403(login_as):
    resp = login_as(Role.USER).get("/payroll?start=2026-03-01&end=2026-03-31")

    assert resp.status_code == 403
    assert resp.get_json() == {"error": "Admin access required"}


def test_malformed_schedule_items_are_400(login_as):
    client = login_as(Role.ADMIN)

    bad_mass = client.post(
        "/schedules", json={"date": "2026-03-02", "items": [{"task": "Stripping", "employee_ids": ["EMP-1"], "target_mass": "abc"}]}
    )
    assert bad_mass.status_code == 400
    assert "Malformed schedule item" in bad_mass.get_json()["error"]

    not_objects = client.post("/schedules", json={"date": "2026-03-02", "items": ["x"]})
    assert not_objects.status_code == 400
    assert not_objects.get_json() == {"error": "Each schedule item must be an object"}


def test_malformed_work_entry_payload_is_400(login_as, schedules_repo, make_item, make_schedule):
    _seed(schedules_repo, make_item, make_schedule)
    client = login_as(Role.ADMIN)
    triple = {"schedule_id": "SCH-1", "item_id": "ITEM-1", "employee_id": "EMP-1"}

    resp = client.post("/work-entries", json={**triple, "quantity": 1, "payload": ["x"]})

    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Payload must be an object"}

    resp = client.post("/work-entries", json={**triple, "quantity": "nan"})
    assert resp.status_code == 400
