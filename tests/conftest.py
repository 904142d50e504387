from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Mapping, Optional

import pytest

from attendance_tracker.attendance.model import AttendanceDay, AttendanceRow
from attendance_tracker.attendance.repository import WRITABLE_FIELDS
from attendance_tracker.common.datetime_utils import FixedClock
from attendance_tracker.container import build_services
from attendance_tracker.core.enums import AttendanceStatus, Role
from attendance_tracker.employees.model import Employee


class InMemoryEmployees:
    def __init__(self, employees=()):
        self._by_id: dict[int, Employee] = {e.user_id: e for e in employees}

    def add(self, employee: Employee) -> Employee:
        self._by_id[employee.user_id] = employee
        return employee

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        return self._by_id.get(int(user_id))

    def find_employees(self, *, role=None, employee_code=None):
        items = [
            e
            for e in self._by_id.values()
            if (role is None or e.role == role) and (employee_code is None or e.employee_code == employee_code)
        ]
        items.sort(key=lambda e: e.employee_code)
        return items

    def update_profile(self, user_id: int, *, name, email, department) -> bool:
        current = self._by_id.get(int(user_id))
        if not current:
            return False
        self._by_id[current.user_id] = replace(current, name=name, email=email, department=department)
        return True


class InMemoryAttendance:
    """Keyed on (user_id, work_date), mirroring the unique index."""

    def __init__(self, employees: Optional[InMemoryEmployees] = None):
        self._by_user_date: dict[tuple[int, date], AttendanceDay] = {}
        self._employees = employees
        self._id = 0

    def add(
        self,
        user_id: int,
        work_date: date,
        status: AttendanceStatus,
        *,
        check_in_time: Optional[datetime] = None,
        check_out_time: Optional[datetime] = None,
        total_hours: float = 0.0,
    ) -> AttendanceDay:
        self._id += 1
        rec = AttendanceDay(
            attendance_id=self._id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            status=status,
            total_hours=total_hours,
        )
        self._by_user_date[(user_id, work_date)] = rec
        return rec

    def find_attendance_day(self, user_id: int, work_date: date) -> Optional[AttendanceDay]:
        return self._by_user_date.get((user_id, work_date))

    def upsert_attendance_day(
        self,
        *,
        user_id: int,
        work_date: date,
        fields: Mapping[str, Any],
        only_if_null: Optional[str] = None,
    ) -> AttendanceDay:
        assert set(fields) <= set(WRITABLE_FIELDS)
        existing = self._by_user_date.get((user_id, work_date))
        if existing is None:
            self._id += 1
            rec = AttendanceDay(
                attendance_id=self._id,
                user_id=user_id,
                work_date=work_date,
                check_in_time=fields.get("check_in_time"),
                check_out_time=fields.get("check_out_time"),
                status=fields.get("status", AttendanceStatus.PRESENT),
                total_hours=fields.get("total_hours", 0.0),
            )
        elif only_if_null is not None and getattr(existing, only_if_null) is not None:
            return existing
        else:
            rec = replace(existing, **fields)
        self._by_user_date[(user_id, work_date)] = rec
        return rec

    def _filter(self, *, user_id=None, start_date=None, end_date=None, status=None):
        items = [
            r
            for r in self._by_user_date.values()
            if (user_id is None or r.user_id == user_id)
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
            and (status is None or r.status == status)
        ]
        items.sort(key=lambda r: (r.work_date, r.user_id))
        return items

    def query_attendance_days(self, *, user_id=None, start_date=None, end_date=None, status=None):
        return self._filter(user_id=user_id, start_date=start_date, end_date=end_date, status=status)

    def query_attendance_rows(self, *, user_id=None, start_date=None, end_date=None, status=None):
        rows = []
        for r in self._filter(user_id=user_id, start_date=start_date, end_date=end_date, status=status):
            emp = self._employees.get_by_id(r.user_id)
            if emp is None:
                continue
            rows.append(
                AttendanceRow(
                    day=r,
                    employee_code=emp.employee_code,
                    name=emp.name,
                    department=emp.department,
                    email=emp.email,
                )
            )
        # Reverse the natural order so services have to sort explicitly.
        rows.reverse()
        return rows


def make_employee(user_id: int, code: str, department: str, *, role: Role = Role.EMPLOYEE, name: str = "") -> Employee:
    return Employee(
        user_id=user_id,
        name=name or f"Employee {code}",
        employee_code=code,
        department=department,
        role=role,
        email=f"{code.lower()}@company.com",
    )


@pytest.fixture
def fixed_now() -> datetime:
    # Wednesday
    return datetime(2024, 5, 15, 9, 15, 0)


@pytest.fixture
def clock(fixed_now) -> FixedClock:
    return FixedClock(fixed_now)


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees(
        [
            make_employee(1, "MGR001", "Management", role=Role.MANAGER, name="John Manager"),
            make_employee(2, "EMP001", "Engineering", name="Alice Johnson"),
            make_employee(3, "EMP002", "Engineering", name="Bob Smith"),
            make_employee(4, "EMP003", "HR", name="Carol Williams"),
            make_employee(5, "EMP004", "Sales", name="David Brown"),
            make_employee(6, "EMP005", "Engineering", name="Eva Martinez"),
        ]
    )


@pytest.fixture
def attendance_repo(employees_repo) -> InMemoryAttendance:
    return InMemoryAttendance(employees_repo)


@pytest.fixture
def container(employees_repo, attendance_repo, clock):
    return build_services(employees_repo=employees_repo, attendance_repo=attendance_repo, clock=clock)
