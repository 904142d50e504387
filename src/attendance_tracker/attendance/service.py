from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import Clock, SystemClock, hours_between, month_bounds, truncate_to_millis
from ..common.validators import require_date_range, require_month, require_year
from ..core.enums import AttendanceStatus
from ..core.exceptions import (
    AlreadyCheckedInError,
    AlreadyCheckedOutError,
    NotCheckedInError,
    NotFoundError,
    ValidationError,
)
from ..employees.repository import EmployeeRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceDay, AttendanceRow
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Classifies check-in/check-out events into one AttendanceDay per employee per day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Optional[Clock] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock or SystemClock()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _now(self, now: Optional[datetime]) -> datetime:
        return truncate_to_millis(now or self._clock.now())

    def _require_employee(self, user_id: int):
        employee = self._employees.get_by_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def check_in(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceDay:
        now = self._now(now)
        today = now.date()
        employee = self._require_employee(user_id)

        existing = self._attendance.find_attendance_day(user_id, today)
        if existing and existing.check_in_time is not None:
            logger.warning("Rejected second check-in for %s on %s", employee.employee_code, today)
            raise AlreadyCheckedInError("Already checked in today")

        strategy = self._factory.for_checkin(now=now)
        decision = strategy.decide_checkin(now=now)

        record = self._attendance.upsert_attendance_day(
            user_id=user_id,
            work_date=today,
            fields={"check_in_time": now, "status": decision.status},
            only_if_null="check_in_time",
        )
        # A concurrent check-in won the row.
        if record.check_in_time != now:
            logger.warning("Concurrent check-in detected for %s on %s", employee.employee_code, today)
            raise AlreadyCheckedInError("Already checked in today")

        logger.info("Check-in %s at %s (%s)", employee.employee_code, now.isoformat(), record.status.value)
        return record

    def check_out(self, user_id: int, *, now: Optional[datetime] = None) -> AttendanceDay:
        now = self._now(now)
        today = now.date()
        employee = self._require_employee(user_id)

        record = self._attendance.find_attendance_day(user_id, today)
        if not record or record.check_in_time is None:
            raise NotCheckedInError("You have not checked in today")
        if record.check_out_time is not None:
            logger.warning("Rejected second check-out for %s on %s", employee.employee_code, today)
            raise AlreadyCheckedOutError("Already checked out today")
        if now < record.check_in_time:
            raise ValidationError("Check-out cannot be earlier than check-in")

        worked_hours = hours_between(record.check_in_time, now)
        strategy = self._factory.for_checkout(current_status=record.status, worked_hours=worked_hours)
        decision = strategy.decide_checkout(now=now, current=record.status, worked_hours=worked_hours)

        updated = self._attendance.upsert_attendance_day(
            user_id=user_id,
            work_date=today,
            fields={"check_out_time": now, "total_hours": worked_hours, "status": decision.status},
            only_if_null="check_out_time",
        )
        if updated.check_out_time != now:
            raise AlreadyCheckedOutError("Already checked out today")

        logger.info(
            "Check-out %s at %s (%.2fh, %s)",
            employee.employee_code,
            now.isoformat(),
            worked_hours,
            updated.status.value,
        )
        return updated

    def get_today_record(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[AttendanceDay]:
        """Get today's attendance record for a user"""
        return self._attendance.find_attendance_day(user_id, self._now(now).date())

    def get_history(
        self,
        user_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list[AttendanceDay]:
        start, end = self._resolve_month(month, year, now)
        days = list(self._attendance.query_attendance_days(user_id=user_id, start_date=start, end_date=end))
        days.sort(key=lambda d: d.work_date, reverse=True)
        return days

    def get_employee_attendance(
        self,
        user_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> list[AttendanceRow]:
        self._require_employee(user_id)
        start, end = self._resolve_month(month, year, now)
        rows = list(self._attendance.query_attendance_rows(user_id=user_id, start_date=start, end_date=end))
        rows.sort(key=lambda r: r.day.work_date, reverse=True)
        return rows

    def list_attendance(
        self,
        *,
        on_date: Optional[date] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
        employee_code: Optional[str] = None,
    ) -> list[AttendanceRow]:
        """Manager listing; a single date wins over a range."""

        if on_date is not None:
            start = end = on_date
        elif start is not None and end is not None:
            require_date_range(start, end)
        else:
            start = end = None

        user_id = None
        if employee_code:
            matches = self._employees.find_employees(employee_code=employee_code)
            if not matches:
                raise NotFoundError(f"No employee with code {employee_code}")
            user_id = matches[0].user_id

        rows = list(
            self._attendance.query_attendance_rows(user_id=user_id, start_date=start, end_date=end, status=status)
        )
        rows.sort(key=lambda r: (r.day.work_date, r.day.check_in_time or datetime.min), reverse=True)
        return rows

    def _resolve_month(self, month: Optional[int], year: Optional[int], now: Optional[datetime]) -> tuple[date, date]:
        current = self._now(now)
        target_month = require_month(month) if month else current.month
        target_year = require_year(year) if year else current.year
        return month_bounds(target_year, target_month)
