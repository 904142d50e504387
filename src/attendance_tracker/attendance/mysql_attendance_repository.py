from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_float
from .model import AttendanceDay, AttendanceRow
from .repository import WRITABLE_FIELDS, AttendanceRepository

_DAY_COLUMNS = "ar.attendance_id, ar.user_id, ar.work_date, ar.check_in_time, ar.check_out_time, ar.status, ar.total_hours"


def _to_day(r: dict) -> AttendanceDay:
    return AttendanceDay(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=to_float(r.get("total_hours")),
    )


def _build_where(
    *,
    user_id: Optional[int],
    start_date: Optional[date],
    end_date: Optional[date],
    status: Optional[AttendanceStatus],
) -> tuple[str, list[object]]:
    clauses: list[str] = []
    params: list[object] = []

    if user_id is not None:
        clauses.append("ar.user_id=%s")
        params.append(int(user_id))
    if start_date is not None:
        clauses.append("ar.work_date >= %s")
        params.append(start_date)
    if end_date is not None:
        clauses.append("ar.work_date <= %s")
        params.append(end_date)
    if status is not None:
        clauses.append("ar.status=%s")
        params.append(status.value)

    where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
    return where, params


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_attendance_day(self, user_id: int, work_date: date) -> Optional[AttendanceDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_DAY_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date=%s
                """,
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_day(r) if r else None

    def upsert_attendance_day(
        self,
        *,
        user_id: int,
        work_date: date,
        fields: Mapping[str, Any],
        only_if_null: Optional[str] = None,
    ) -> AttendanceDay:
        unknown = set(fields) - set(WRITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Unsupported attendance fields: {sorted(unknown)}")
        if only_if_null is not None and only_if_null not in fields:
            raise ValueError("only_if_null must name one of the written fields")

        # MySQL applies assignments left to right, so the guard column goes last.
        columns = [c for c in WRITABLE_FIELDS if c in fields and c != only_if_null]
        if only_if_null is not None:
            columns.append(only_if_null)

        values = [fields[c].value if isinstance(fields[c], AttendanceStatus) else fields[c] for c in columns]

        # Row alias form (MySQL 8.0.19+); unqualified names refer to the stored row.
        if only_if_null is not None:
            assignments = ", ".join(
                f"{c}=IF({only_if_null} IS NULL, incoming.{c}, {c})" for c in columns
            )
        else:
            assignments = ", ".join(f"{c}=incoming.{c}" for c in columns)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records(user_id, work_date, {", ".join(columns)})
                VALUES(%s, %s, {", ".join(["%s"] * len(columns))}) AS incoming
                ON DUPLICATE KEY UPDATE {assignments}
                """,
                (int(user_id), work_date, *values),
            )
            cur.execute(
                f"""
                SELECT {_DAY_COLUMNS}
                FROM attendance_records ar
                WHERE ar.user_id=%s AND ar.work_date=%s
                """,
                (int(user_id), work_date),
            )
            return _to_day(fetchone(cur))

    def query_attendance_days(
        self,
        *,
        user_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceDay]:
        where, params = _build_where(user_id=user_id, start_date=start_date, end_date=end_date, status=status)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_DAY_COLUMNS}
                FROM attendance_records ar
                {where}
                ORDER BY ar.work_date ASC, ar.user_id ASC
                """,
                tuple(params),
            )
            return [_to_day(r) for r in fetchall(cur)]

    def query_attendance_rows(
        self,
        *,
        user_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRow]:
        where, params = _build_where(user_id=user_id, start_date=start_date, end_date=end_date, status=status)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {_DAY_COLUMNS},
                    e.employee_code, e.name, e.department, e.email
                FROM attendance_records ar
                JOIN employees e ON e.user_id = ar.user_id
                {where}
                ORDER BY ar.work_date ASC, e.employee_code ASC
                """,
                tuple(params),
            )
            rows = fetchall(cur)

            return [
                AttendanceRow(
                    day=_to_day(r),
                    employee_code=r["employee_code"],
                    name=r["name"],
                    department=r.get("department") or "",
                    email=r.get("email"),
                )
                for r in rows
            ]
