from __future__ import annotations

from datetime import date

import pytest

from src.leave_management.leave_management.main import create_app

YEAR = date.today().year


@pytest.fixture()
def app():
    return create_app("config.testing")


def _client(app, username=None, password=None):
    client = app.test_client()
    if username:
        resp = client.post("/api/login", json={"username": username, "password": password})
        assert resp.status_code == 200
    return client


def _leave_type_id(client, name):
    return next(t["id"] for t in client.get("/api/leave-types").get_json() if t["name"] == name)


def _apply(client, leave_type_id, start, end, **extra):
    body = {"leave_type_id": leave_type_id, "start_date": start, "end_date": end, "reason": "Trip", **extra}
    return client.post("/api/leave-applications", json=body)


def test_login_rejects_bad_credentials(app):
    client = app.test_client()
    resp = client.post("/api/login", json={"username": "employee", "password": "nope"})
    assert resp.status_code == 401
    assert client.get("/api/leave-applications").status_code == 401


def test_apply_approve_flow(app):
    employee = _client(app, "employee", "employee123")
    hr = _client(app, "hr", "hr12345")
    sick = _leave_type_id(employee, "Sick Leave")

    resp = _apply(employee, sick, f"{YEAR}-03-04", f"{YEAR}-03-06")
    assert resp.status_code == 201
    application = resp.get_json()
    assert application["status"] == "pending"
    assert application["total_days"] == 3

    resp = hr.patch(f"/api/leave-applications/{application['id']}", json={"status": "Approved", "comments": "ok"})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "approved"

    balances = employee.get("/api/leave-quotas").get_json()
    assert next(b for b in balances if b["leave_type_id"] == sick)["remaining_quota"] == 7

    resp = hr.patch(f"/api/leave-applications/{application['id']}", json={"status": "rejected"})
    assert resp.status_code == 409


def test_validation_errors_map_to_400(app):
    employee = _client(app, "employee", "employee123")
    casual = _leave_type_id(employee, "Casual Leave")

    assert _apply(employee, casual, f"{YEAR}-05-10", f"{YEAR}-05-01").status_code == 400
    assert _apply(employee, casual, f"{YEAR}-05-01", f"{YEAR}-05-09").status_code == 400
    assert _apply(employee, casual, "not-a-date", f"{YEAR}-05-09").status_code == 400
    assert employee.post("/api/leave-applications", json=["x"]).status_code == 400

    assert _apply(employee, casual, f"{YEAR}-05-01", f"{YEAR}-05-02").status_code == 201
    resp = _apply(employee, casual, f"{YEAR}-05-02", f"{YEAR}-05-03")
    assert resp.status_code == 400
    assert resp.get_json()["error"] == "OverlappingRequestError"


def test_employee_cannot_decide_or_cancel_others(app):
    employee = _client(app, "employee", "employee123")
    hr = _client(app, "hr", "hr12345")
    paid = _leave_type_id(employee, "Paid Leave")

    application_id = _apply(employee, paid, f"{YEAR}-08-12", f"{YEAR}-08-13").get_json()["id"]
    assert employee.patch(f"/api/leave-applications/{application_id}", json={"status": "approved"}).status_code == 403
    assert hr.patch(f"/api/leave-applications/{application_id}/cancel").status_code == 403

    resp = employee.patch(f"/api/leave-applications/{application_id}/cancel")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "cancelled"
    assert employee.patch(f"/api/leave-applications/{application_id}/cancel").status_code == 409
    assert hr.get("/api/leave-applications/999").status_code == 404


def test_admin_lists_and_reports(app):
    employee = _client(app, "employee", "employee123")
    admin = _client(app, "admin", "admin123")
    paid = _leave_type_id(employee, "Paid Leave")
    _apply(employee, paid, f"{YEAR}-10-01", f"{YEAR}-10-02")

    pending = admin.get("/api/leave-applications/all?status=pending").get_json()
    assert len(pending) == 1
    assert admin.get("/api/leave-applications/all?status=bogus").status_code == 400
    assert employee.get("/api/leave-applications/all").status_code == 403

    report = admin.get(f"/api/reports/leave-utilization?year={YEAR}").get_json()
    assert len(report) == 3
    assert all(len(r["leave_utilization"]) == 3 for r in report)


def test_onboard_and_adjust_quota(app):
    hr = _client(app, "hr", "hr12345")
    resp = hr.post(
        "/api/employees",
        json={"full_name": "Jane Doe", "username": "jane", "password": "secret1", "department": "Finance"},
    )
    assert resp.status_code == 201
    employee_id = resp.get_json()["employee_id"]

    paid = _leave_type_id(hr, "Paid Leave")
    resp = hr.put(f"/api/employees/{employee_id}/leave-quotas/{paid}", json={"year": YEAR, "total_quota": 22.5})
    assert resp.status_code == 200
    assert resp.get_json()["remaining_quota"] == 22.5

    resp = hr.post(f"/api/employees/{employee_id}/leave-quotas", json={"year": YEAR})
    assert resp.status_code == 200
    assert resp.get_json()["created"] == 0

    resp = hr.post(f"/api/employees/{employee_id}/leave-quotas", json={"year": YEAR + 1, "overrides": {str(paid): 25}})
    assert resp.status_code == 201
    assert resp.get_json()["created"] == 3

    jane = _client(app, "jane", "secret1")
    assert jane.get(f"/api/leave-quotas?employee_id={employee_id}").status_code == 200
    assert jane.get("/api/leave-quotas?employee_id=1").status_code == 403


def _raw_json(client, method, url, body):
    return client.open(url, method=method, data=body, content_type="application/json")


def test_quota_routes_reject_non_finite_and_oversized_totals(app):
    hr = _client(app, "hr", "hr12345")
    employee = _client(app, "employee", "employee123")
    casual = _leave_type_id(hr, "Casual Leave")
    url = f"/api/employees/3/leave-quotas/{casual}"

    for token in ("NaN", "Infinity", "10000", "2.3"):
        resp = _raw_json(hr, "PUT", url, f'{{"year": {YEAR}, "total_quota": {token}}}')
        assert resp.status_code == 400, token

    for token in ('"Infinity"', "Infinity", "NaN"):
        resp = _raw_json(hr, "POST", "/api/employees/3/leave-quotas", f'{{"year": {YEAR + 1}, "overrides": {{"1": {token}}}}}')
        assert resp.status_code == 400, token

    # The balance still caps what can be taken.
    assert _apply(employee, casual, f"{YEAR}-01-06", f"{YEAR}-02-04").status_code == 400
    balances = employee.get(f"/api/leave-quotas?year={YEAR}").get_json()
    assert next(b for b in balances if b["leave_type_id"] == casual)["total_quota"] == 5


def test_unexpected_errors_return_json_500(app, monkeypatch):
    container = app.extensions["leave_container"]
    hr = _client(app, "hr", "hr12345")

    def boom(*args, **kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr(container.quota_service, "list_balances", boom)
    monkeypatch.setattr(container.quota_service, "utilization_report", boom)
    monkeypatch.setattr(container.leave_service, "list_for_employee", boom)
    monkeypatch.setattr(container.leave_service, "list_all", boom)
    monkeypatch.setattr(container.leave_service, "get", boom)
    monkeypatch.setattr(container.directory_service, "onboard_employee", boom)

    requests = [
        hr.get("/api/leave-quotas"),
        hr.get("/api/reports/leave-utilization"),
        hr.get("/api/leave-applications"),
        hr.get("/api/leave-applications/all"),
        hr.get("/api/leave-applications/1"),
        hr.post("/api/employees", json={"full_name": "X", "username": "x", "password": "secret1"}),
    ]
    for resp in requests:
        assert resp.status_code == 500
        assert resp.get_json()["error"] == "ServerError"
