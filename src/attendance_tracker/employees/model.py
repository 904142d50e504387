from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: plain data object (no DB access code). `department` is a free-text
    label, not a reference to a department table.
    """

    user_id: int
    name: str
    employee_code: str
    department: str
    role: Role = Role.EMPLOYEE
    email: Optional[str] = None

    def as_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "email": self.email,
            "employeeId": self.employee_code,
            "department": self.department,
            "role": self.role.value,
        }
