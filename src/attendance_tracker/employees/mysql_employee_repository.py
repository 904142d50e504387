from __future__ import annotations

from typing import Optional, Sequence

import mysql.connector

from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "user_id, name, email, employee_code, department, role"


def _to_employee(row: dict) -> Employee:
    return Employee(
        user_id=int(row["user_id"]),
        name=row["name"],
        email=row.get("email"),
        employee_code=row["employee_code"],
        department=row.get("department") or "",
        role=Role(row["role"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE user_id=%s", (int(user_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def find_employees(
        self,
        *,
        role: Optional[Role] = None,
        employee_code: Optional[str] = None,
    ) -> Sequence[Employee]:
        clauses: list[str] = []
        params: list[object] = []

        if role is not None:
            clauses.append("role=%s")
            params.append(role.value)
        if employee_code is not None:
            clauses.append("employee_code=%s")
            params.append(employee_code)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM employees
                {where}
                ORDER BY employee_code ASC
                """,
                tuple(params),
            )
            return [_to_employee(r) for r in fetchall(cur)]

    def update_profile(
        self,
        user_id: int,
        *,
        name: str,
        email: Optional[str],
        department: str,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            try:
                cur.execute(
                    """
                    UPDATE employees
                    SET name=%s, email=%s, department=%s
                    WHERE user_id=%s
                    """,
                    (name, email, department, int(user_id)),
                )
            except mysql.connector.IntegrityError as e:
                raise ValidationError("Email is already in use") from e
            return cur.rowcount > 0
