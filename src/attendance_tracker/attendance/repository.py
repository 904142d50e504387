from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceDay, AttendanceRow

# Columns the service layer may write through upsert_attendance_day.
WRITABLE_FIELDS = ("check_in_time", "check_out_time", "status", "total_hours")


class AttendanceRepository(Protocol):
    def find_attendance_day(self, user_id: int, work_date: date) -> Optional[AttendanceDay]:
        raise NotImplementedError

    def upsert_attendance_day(
        self,
        *,
        user_id: int,
        work_date: date,
        fields: Mapping[str, Any],
        only_if_null: Optional[str] = None,
    ) -> AttendanceDay:
        """Insert or update the (user_id, work_date) row atomically.

        When `only_if_null` names a column, an existing row is only updated
        while that column is still NULL. Returns the stored row.
        """

        raise NotImplementedError

    def query_attendance_days(
        self,
        *,
        user_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceDay]:
        raise NotImplementedError

    def query_attendance_rows(
        self,
        *,
        user_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRow]:
        raise NotImplementedError
