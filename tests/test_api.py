from __future__ import annotations

from datetime import date

import pytest

from attendance_tracker.core.enums import AttendanceStatus
from attendance_tracker.main import create_app

EMPLOYEE = {"X-Employee-Id": "2"}
MANAGER = {"X-Employee-Id": "1"}


@pytest.fixture
def client(container):
    app = create_app(container, settings_module="attendance_tracker.settings.testing")
    return app.test_client()


def test_check_in_and_out(client, clock):
    resp = client.post("/api/attendance/checkin", headers=EMPLOYEE)
    assert resp.status_code == 201
    assert resp.get_json()["status"] == "present"
    assert resp.get_json()["checkInTime"] == "2024-05-15T09:15:00.000"

    clock.advance(hours=3)
    resp = client.post("/api/attendance/checkout", headers=EMPLOYEE)
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "half-day"
    assert resp.get_json()["totalHours"] == 3.0


def test_double_check_in_is_a_client_error(client):
    client.post("/api/attendance/checkin", headers=EMPLOYEE)
    resp = client.post("/api/attendance/checkin", headers=EMPLOYEE)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "already_checked_in"


def test_check_out_without_check_in(client):
    resp = client.post("/api/attendance/checkout", headers=EMPLOYEE)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "not_checked_in"


def test_today_before_check_in(client):
    resp = client.get("/api/attendance/today", headers=EMPLOYEE)

    assert resp.get_json() == {"status": "not-checked-in"}


@pytest.mark.parametrize("headers", [{}, {"X-Employee-Id": "abc"}, {"X-Employee-Id": "999"}])
def test_missing_or_unknown_identity(client, headers):
    resp = client.get("/api/attendance/today", headers=headers)

    assert resp.status_code == 401
    assert resp.get_json()["error"] == "unauthenticated"


@pytest.mark.parametrize(
    "path",
    [
        "/api/attendance/all",
        "/api/attendance/summary",
        "/api/attendance/today-status",
        "/api/attendance/weekly-trend",
        "/api/attendance/export",
        "/api/dashboard/manager",
        "/api/employees",
    ],
)
def test_manager_routes_reject_employees(client, path):
    resp = client.get(path, headers=EMPLOYEE)

    assert resp.status_code == 403
    assert resp.get_json()["error"] == "forbidden"


def test_my_summary_validates_month(client):
    resp = client.get("/api/attendance/my-summary?month=13&year=2024", headers=EMPLOYEE)

    assert resp.status_code == 400
    assert resp.get_json()["error"] == "validation_error"


def test_blank_month_and_year_mean_current_month(client, attendance_repo):
    attendance_repo.add(2, date(2024, 5, 2), AttendanceStatus.PRESENT, total_hours=8)

    summary = client.get("/api/attendance/my-summary?month=&year=", headers=EMPLOYEE)
    history = client.get("/api/attendance/my-history?month=&year=", headers=EMPLOYEE)

    assert summary.status_code == 200
    assert (summary.get_json()["month"], summary.get_json()["year"]) == (5, 2024)
    assert [d["date"] for d in history.get_json()] == ["2024-05-02"]


def test_my_summary(client, attendance_repo):
    attendance_repo.add(2, date(2024, 5, 2), AttendanceStatus.LATE, total_hours=7.5)

    resp = client.get("/api/attendance/my-summary", headers=EMPLOYEE)

    body = resp.get_json()
    assert body["late"] == 1
    assert body["workingDays"] == 11
    assert body["absent"] == 10


def test_today_status_for_manager(client, attendance_repo):
    attendance_repo.add(2, date(2024, 5, 15), AttendanceStatus.PRESENT)

    resp = client.get("/api/attendance/today-status", headers=MANAGER)

    assert resp.status_code == 200
    assert resp.get_json()["summary"] == {"total": 5, "present": 1, "late": 0, "notCheckedIn": 4}


def test_list_attendance_rejects_unknown_status(client):
    resp = client.get("/api/attendance/all?status=sick", headers=MANAGER)

    assert resp.status_code == 400


def test_employee_attendance_unknown_employee(client):
    resp = client.get("/api/attendance/employee/999", headers=MANAGER)

    assert resp.status_code == 404
    assert resp.get_json()["error"] == "not_found"


def test_export_csv(client, attendance_repo):
    attendance_repo.add(3, date(2024, 5, 2), AttendanceStatus.PRESENT, total_hours=8)

    resp = client.get(
        "/api/attendance/export?startDate=2024-05-01&endDate=2024-05-31&employeeId=all",
        headers=MANAGER,
    )

    assert resp.status_code == 200
    assert resp.mimetype == "text/csv"
    assert "attachment" in resp.headers["Content-Disposition"]
    lines = resp.get_data(as_text=True).splitlines()
    assert lines[0].startswith("Date,Employee ID,Name")
    assert lines[1] == "2024-05-02,EMP002,Bob Smith,Engineering,N/A,N/A,present,8.00"


def test_export_rejects_bad_date(client):
    resp = client.get("/api/attendance/export?startDate=2024-13-01&endDate=2024-05-31", headers=MANAGER)

    assert resp.status_code == 400


def test_profile_update(client):
    resp = client.put("/api/me/profile", json={"department": "Platform"}, headers=EMPLOYEE)

    assert resp.status_code == 200
    assert resp.get_json()["department"] == "Platform"
    assert client.get("/api/me/profile", headers=EMPLOYEE).get_json()["department"] == "Platform"


def test_dashboards(client):
    employee = client.get("/api/dashboard/employee", headers=EMPLOYEE).get_json()
    manager = client.get("/api/dashboard/manager", headers=MANAGER).get_json()

    assert employee["today"]["status"] == "not-checked-in"
    assert manager["totalEmployees"] == 5
    assert len(manager["weeklyTrend"]) == 7
