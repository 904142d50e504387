from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty
from ..core.enums import Role
from ..core.exceptions import NotFoundError, ValidationError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: look up employees and manage their profile."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get_profile(self, user_id: int) -> Employee:
        employee = self._employees.get_by_id(int(user_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def get_by_code(self, employee_code: str) -> Employee:
        matches = self._employees.find_employees(employee_code=employee_code)
        if not matches:
            raise NotFoundError(f"No employee with code {employee_code}")
        return matches[0]

    def list_roster(self) -> list[Employee]:
        roster = list(self._employees.find_employees(role=Role.EMPLOYEE))
        roster.sort(key=lambda e: e.employee_code)
        return roster

    def update_profile(
        self,
        user_id: int,
        *,
        name: Optional[str] = None,
        email: Optional[str] = None,
        department: Optional[str] = None,
    ) -> Employee:
        current = self.get_profile(user_id)

        new_name = require_non_empty(name, "Name") if name is not None else current.name
        new_email = current.email
        if email is not None:
            new_email = email.strip() or None
            if new_email and "@" not in new_email:
                raise ValidationError("Email is not valid")
        new_department = department.strip() if department is not None else current.department

        self._employees.update_profile(
            current.user_id,
            name=new_name,
            email=new_email,
            department=new_department,
        )
        logger.info("Profile updated for employee %s", current.employee_code)
        return self.get_profile(current.user_id)
