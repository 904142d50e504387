from __future__ import annotations

import pytest

from attendance_tracker.core.enums import Role
from attendance_tracker.core.exceptions import NotFoundError, ValidationError
from attendance_tracker.employees.service import EmployeeService


@pytest.fixture
def svc(employees_repo) -> EmployeeService:
    return EmployeeService(employees_repo)


def test_get_profile(svc):
    emp = svc.get_profile(2)

    assert emp.employee_code == "EMP001"
    assert emp.as_dict() == {
        "id": 2,
        "name": "Alice Johnson",
        "email": "emp001@company.com",
        "employeeId": "EMP001",
        "department": "Engineering",
        "role": "employee",
    }


def test_get_profile_unknown(svc):
    with pytest.raises(NotFoundError):
        svc.get_profile(42)


def test_get_by_code(svc):
    assert svc.get_by_code("EMP003").name == "Carol Williams"

    with pytest.raises(NotFoundError):
        svc.get_by_code("EMP404")


def test_roster_excludes_managers(svc):
    roster = svc.list_roster()

    assert [e.employee_code for e in roster] == ["EMP001", "EMP002", "EMP003", "EMP004", "EMP005"]
    assert all(e.role == Role.EMPLOYEE for e in roster)


def test_update_profile_partial(svc):
    updated = svc.update_profile(2, department="  Platform ")

    assert updated.department == "Platform"
    assert updated.name == "Alice Johnson"
    assert updated.email == "emp001@company.com"


def test_update_profile_clears_email(svc):
    assert svc.update_profile(2, email="").email is None


@pytest.mark.parametrize(
    "kwargs",
    [
        {"name": "   "},
        {"email": "not-an-email"},
    ],
)
def test_update_profile_rejects_bad_input(svc, kwargs):
    with pytest.raises(ValidationError):
        svc.update_profile(2, **kwargs)

    assert svc.get_profile(2).name == "Alice Johnson"
