from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def find_employees(
        self,
        *,
        role: Optional[Role] = None,
        employee_code: Optional[str] = None,
    ) -> Sequence[Employee]:
        raise NotImplementedError

    def update_profile(
        self,
        user_id: int,
        *,
        name: str,
        email: Optional[str],
        department: str,
    ) -> bool:
        raise NotImplementedError
