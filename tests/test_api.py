from __future__ import annotations

from timeclock.core.enums import PunchType


def _pin_login(client, pin):
    return client.post("/api/auth/login", json={"pin": pin})


def test_pin_login_and_punch_flow(client, alice):
    resp = _pin_login(client, "111111")
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["success"] is True
    assert body["data"]["name"] == "Alice Martin"
    assert body["data"]["avatar"] == "AM"

    resp = client.get("/api/punches/today")
    assert resp.get_json()["data"] == {"record": None, "next": "entry"}

    resp = client.post("/api/punches", json={"type": "entry"})
    assert resp.status_code == 201
    assert resp.get_json()["message"] == "Entry registered"

    resp = client.post("/api/punches", json={"type": "entry"})
    assert resp.status_code == 400
    assert resp.get_json() == {"success": False, "message": "Entry already registered today"}

    today = client.get("/api/punches/today").get_json()["data"]
    assert today["next"] == PunchType.LUNCH_START.value
    assert today["record"]["entry"] is not None

    history = client.get("/api/me/history?days=3").get_json()["data"]
    assert len(history) == 1


def test_bad_pin_and_bad_body(client, alice):
    resp = _pin_login(client, "000000")
    assert resp.status_code == 401
    assert resp.get_json()["success"] is False

    resp = client.post("/api/auth/login", data="not json")
    assert resp.status_code == 400


def test_unknown_punch_type(client, alice):
    _pin_login(client, "111111")
    resp = client.post("/api/punches", json={"type": "coffee"})
    assert resp.status_code == 400
    assert "Invalid punch type" in resp.get_json()["message"]


def test_endpoints_require_the_right_session(client, alice):
    assert client.post("/api/punches", json={"type": "entry"}).status_code == 401
    assert client.get("/api/admin/employees").status_code == 401

    _pin_login(client, "111111")
    assert client.get("/api/admin/employees").status_code == 403
    assert client.get("/api/auth/admin").status_code == 401

    client.post("/api/auth/logout")
    assert client.get("/api/notifications").status_code == 401


def test_admin_login(client):
    resp = client.post("/api/auth/admin", json={"username": "admin", "password": "wrong"})
    assert resp.status_code == 401

    resp = client.post("/api/auth/admin", json={"username": "admin", "password": "admin123"})
    assert resp.status_code == 200
    assert client.get("/api/auth/admin").get_json()["data"]["username"] == "admin"


def test_admin_employee_crud(admin_client):
    resp = admin_client.post("/api/admin/employees", json={"name": "Zoe Park", "dept": "IT", "hourly_rate": 30})
    assert resp.status_code == 201
    emp = resp.get_json()["data"]
    assert len(emp["pin"]) == 6

    resp = admin_client.post("/api/admin/employees", json={"name": "Dup", "pin": emp["pin"]})
    assert resp.status_code == 409

    resp = admin_client.post(f"/api/admin/employees/{emp['employee_id']}/weekly-off-days", json={"day_of_week": 0})
    assert resp.get_json()["data"] == [0]

    resp = admin_client.post("/api/admin/employees/import", json={"employees": [{"name": "Ann"}, {"name": ""}]})
    assert resp.get_json()["data"]["count"] == 1

    assert admin_client.delete(f"/api/admin/employees/{emp['employee_id']}").status_code == 200
    assert admin_client.get(f"/api/admin/employees/{emp['employee_id']}").status_code == 404


def test_correction_request_round_trip(client, container, alice):
    _pin_login(client, "111111")
    resp = client.post(
        "/api/requests",
        json={"type": "correction", "date": "2026-03-02", "field": "entry", "requested_time": "08:10", "reason": "Late badge"},
    )
    assert resp.status_code == 201
    request_id = resp.get_json()["data"]["request_id"]

    client.post("/api/auth/admin", json={"username": "admin", "password": "admin123"})
    resp = client.post(f"/api/admin/requests/corrections/{request_id}/approve", json={"admin_comment": "ok"})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["status"] == "approved"

    resp = client.post(f"/api/admin/requests/corrections/{request_id}/reject")
    assert resp.status_code == 400

    _pin_login(client, "111111")
    body = client.get("/api/notifications?unread=1").get_json()
    assert body["unread"] == 1
    nid = body["data"][0]["notification_id"]
    assert client.patch(f"/api/notifications/{nid}", json={"read": True}).get_json()["data"]["read"] is True


def test_time_off_conflict_maps_to_409(admin_client, alice):
    payload = {"employee_id": alice.employee_id, "start_date": "2026-03-10", "end_date": "2026-03-12", "type": "vacation"}
    assert admin_client.post("/api/admin/timeoffs", json=payload).status_code == 201
    resp = admin_client.post("/api/admin/timeoffs", json=payload)
    assert resp.status_code == 409
    assert resp.get_json()["success"] is False


def test_report_export_csv(admin_client, alice):
    resp = admin_client.get("/api/admin/reports/export?month=2026-03")
    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "timesheet_20260301_20260331.csv" in resp.headers["Content-Disposition"]

    resp = admin_client.get("/api/admin/reports?month=2026-13")
    assert resp.status_code == 400


def test_inverted_period_is_rejected(admin_client):
    for path in ("/api/admin/analytics", "/api/admin/reports", "/api/admin/reports/export"):
        resp = admin_client.get(f"{path}?start=2026-02-01&end=2026-01-01")
        assert resp.status_code == 400
        assert resp.get_json() == {"success": False, "message": "Start date cannot be after end date"}

    assert admin_client.get("/api/admin/analytics?start=2026-01-01&end=2026-01-31").status_code == 200


def test_wrongly_typed_json_fields_are_400(admin_client, alice):
    base = {"employee_id": alice.employee_id, "start_date": "2026-01-01", "end_date": "2026-01-02", "type": "vacation"}

    for bad in ({"start_date": 20260101}, {"employee_id": "abc"}, {"employee_id": [1]}, {"type": ["vacation"]}):
        resp = admin_client.post("/api/admin/timeoffs", json={**base, **bad})
        assert resp.status_code == 400, bad
        assert resp.get_json()["success"] is False

    resp = admin_client.post(
        "/api/admin/overtime",
        json={"employee_id": str(alice.employee_id), "date": "2026-01-05", "hours": "nan", "reason": "Stock"},
    )
    assert resp.status_code == 400

    timeoff_id = admin_client.post("/api/admin/timeoffs", json={**base, "status": "pending"}).get_json()["data"]["timeoff_id"]
    resp = admin_client.post(f"/api/admin/timeoffs/{timeoff_id}/approve", json={"admin_comment": 42})
    assert resp.status_code == 200
    assert resp.get_json()["data"]["admin_comment"] == "42"


def test_mark_notification_with_string_flag(client, container, alice):
    nid = container.notification_service.notify(alice.employee_id, "Hello", "Welcome")
    _pin_login(client, "111111")

    assert client.patch(f"/api/notifications/{nid}", json={"read": "true"}).get_json()["data"]["read"] is True
    assert client.patch(f"/api/notifications/{nid}", json={"read": "false"}).get_json()["data"]["read"] is False
    assert client.patch(f"/api/notifications/{nid}", json={"read": "soon"}).status_code == 400


def test_unexpected_error_is_500(admin_client, container, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("db down")

    monkeypatch.setattr(container.dashboard_service, "stats", boom)
    resp = admin_client.get("/api/admin/dashboard-stats")
    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Internal server error"}
