from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import Clock, SystemClock
from ..core.constants import DEFAULT_TREND_DAYS, NOT_CHECKED_IN
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import NotFoundError
from ..employees.repository import EmployeeRepository
from .service import AttendanceReportService


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="milliseconds") if value else None


class DashboardService:
    """Composes the employee and manager dashboards from the report service."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        reports: AttendanceReportService,
        *,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._reports = reports
        self._clock = clock or SystemClock()

    def employee_dashboard(self, user_id: int, *, now: Optional[datetime] = None) -> dict:
        now = now or self._clock.now()
        today = now.date()

        employee = self._employees.get_by_id(user_id)
        if not employee:
            raise NotFoundError("Employee not found")

        record = self._attendance.find_attendance_day(user_id, today)
        summary = self._reports.summarize_employee_month(user_id, month=now.month, year=now.year, now=now)

        # Window spans today and the seven days before it.
        recent = list(
            self._attendance.query_attendance_days(
                user_id=user_id,
                start_date=today - timedelta(days=DEFAULT_TREND_DAYS),
                end_date=today,
            )
        )
        recent.sort(key=lambda d: d.work_date, reverse=True)

        monthly = summary.as_dict()
        for key in ("month", "year", "workingDays"):
            monthly.pop(key)

        return {
            "today": {
                "status": record.status.value if record else NOT_CHECKED_IN,
                "checkInTime": _iso(record.check_in_time) if record else None,
                "checkOutTime": _iso(record.check_out_time) if record else None,
                "totalHours": record.total_hours if record else 0,
            },
            "monthlyStats": monthly,
            "recentAttendance": [d.as_dict() for d in recent],
            "user": {
                "name": employee.name,
                "employeeId": employee.employee_code,
                "department": employee.department,
            },
        }

    def manager_dashboard(self, *, now: Optional[datetime] = None) -> dict:
        now = now or self._clock.now()
        today = now.date()

        roster = list(self._employees.find_employees(role=Role.EMPLOYEE))
        by_user = {d.user_id: d for d in self._attendance.query_attendance_days(start_date=today, end_date=today)}

        today_stats = {"present": 0, "late": 0, "halfDay": 0, "absent": 0}
        late_arrivals: list[dict] = []
        absent_employees: list[dict] = []

        for emp in roster:
            day = by_user.get(emp.user_id)
            if day is None:
                today_stats["absent"] += 1
                absent_employees.append(
                    {"name": emp.name, "employeeId": emp.employee_code, "department": emp.department}
                )
            elif day.status == AttendanceStatus.PRESENT:
                today_stats["present"] += 1
            elif day.status == AttendanceStatus.HALF_DAY:
                today_stats["halfDay"] += 1
            elif day.status == AttendanceStatus.LATE:
                today_stats["late"] += 1
                late_arrivals.append(
                    {
                        "name": emp.name,
                        "employeeId": emp.employee_code,
                        "department": emp.department,
                        "checkInTime": _iso(day.check_in_time),
                    }
                )
            else:
                # Stored as absent: counted, but not listed as missing a record.
                today_stats["absent"] += 1

        return {
            "totalEmployees": len(roster),
            "todayStats": today_stats,
            "lateArrivals": late_arrivals,
            "absentEmployees": absent_employees,
            "weeklyTrend": [p.as_dict() for p in self._reports.build_weekly_trend(now=now)],
            "departmentStats": self._reports.department_month_to_date(roster, today=today),
        }
