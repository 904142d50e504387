from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceDay
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import (
    Clock,
    SystemClock,
    count_working_days,
    format_time_of_day,
    month_bounds,
    round_hours,
    weekday_label,
)
from ..common.validators import require_date_range, require_month, require_year
from ..core.constants import DEFAULT_TREND_DAYS, NOT_AVAILABLE
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .csv_export import render_csv
from .model import (
    DepartmentStats,
    EmployeeMonthStats,
    ExportRow,
    MonthlySummary,
    StatusTally,
    TeamMemberStatus,
    TeamMonthSummary,
    TodayTeamStatus,
    TrendPoint,
)

logger = logging.getLogger(__name__)


def tally_days(days: Iterable[AttendanceDay]) -> StatusTally:
    tally = StatusTally()
    for d in days:
        tally.add(d.status, d.total_hours)
    return tally


def _member(employee: Employee, day: Optional[AttendanceDay] = None) -> TeamMemberStatus:
    return TeamMemberStatus(
        user_id=employee.user_id,
        name=employee.name,
        employee_code=employee.employee_code,
        department=employee.department,
        check_in_time=day.check_in_time if day else None,
        check_out_time=day.check_out_time if day else None,
    )


class AttendanceReportService:
    """Read-only rollups over stored attendance days.

    Absence is never read from storage: a working day without a record counts
    as absent in the per-employee summary.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        *,
        clock: Optional[Clock] = None,
    ):
        self._attendance = attendance
        self._employees = employees
        self._clock = clock or SystemClock()

    def _roster(self) -> list[Employee]:
        return list(self._employees.find_employees(role=Role.EMPLOYEE))

    def _resolve_month(self, month, year, now: datetime) -> tuple[int, int]:
        target_month = require_month(month) if month else now.month
        target_year = require_year(year) if year else now.year
        return target_month, target_year

    def summarize_employee_month(
        self,
        user_id: int,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> MonthlySummary:
        now = now or self._clock.now()
        month, year = self._resolve_month(month, year, now)

        if not self._employees.get_by_id(user_id):
            raise NotFoundError("Employee not found")

        start, end = month_bounds(year, month)
        days = self._attendance.query_attendance_days(user_id=user_id, start_date=start, end_date=end)

        # Only elapsed days of the month are expected.
        working_days = count_working_days(start, min(end, now.date()))
        tally = tally_days(days)

        return MonthlySummary(
            month=month,
            year=year,
            present=tally.present,
            absent=max(0, working_days - tally.attended),
            late=tally.late,
            half_day=tally.half_day,
            total_hours=round_hours(tally.total_hours),
            working_days=working_days,
        )

    def summarize_team_month(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        now: Optional[datetime] = None,
    ) -> TeamMonthSummary:
        month, year = self._resolve_month(month, year, now or self._clock.now())
        start, end = month_bounds(year, month)

        roster = self._roster()
        by_user: dict[int, list[AttendanceDay]] = defaultdict(list)
        for d in self._attendance.query_attendance_days(start_date=start, end_date=end):
            by_user[d.user_id].append(d)

        employee_stats: list[EmployeeMonthStats] = []
        dept_tallies: dict[str, StatusTally] = {}
        dept_counts: dict[str, int] = defaultdict(int)

        for emp in roster:
            tally = tally_days(by_user.get(emp.user_id, ()))
            employee_stats.append(
                EmployeeMonthStats(
                    employee_code=emp.employee_code,
                    name=emp.name,
                    department=emp.department,
                    present=tally.present,
                    late=tally.late,
                    half_day=tally.half_day,
                    total_hours=round_hours(tally.total_hours),
                )
            )
            dept_tallies.setdefault(emp.department, StatusTally()).merge(tally)
            dept_counts[emp.department] += 1

        department_stats = {
            dept: DepartmentStats(
                present=t.present,
                late=t.late,
                half_day=t.half_day,
                total_hours=round_hours(t.total_hours),
                employee_count=dept_counts[dept],
            )
            for dept, t in dept_tallies.items()
        }

        return TeamMonthSummary(
            month=month,
            year=year,
            employee_stats=employee_stats,
            department_stats=department_stats,
        )

    def summarize_today_team_status(self, *, now: Optional[datetime] = None) -> TodayTeamStatus:
        today = (now or self._clock.now()).date()
        roster = self._roster()
        by_user = {d.user_id: d for d in self._attendance.query_attendance_days(start_date=today, end_date=today)}

        status = TodayTeamStatus(date=today)
        for emp in roster:
            day = by_user.get(emp.user_id)
            if day is None:
                status.not_checked_in.append(_member(emp))
            elif day.status == AttendanceStatus.LATE:
                status.late.append(_member(emp, day))
            elif day.status in (AttendanceStatus.PRESENT, AttendanceStatus.HALF_DAY):
                status.present.append(_member(emp, day))
            else:
                # Stored rows with any other status keep the roster partition intact.
                status.not_checked_in.append(_member(emp, day))
        return status

    def build_weekly_trend(self, *, now: Optional[datetime] = None, days: int = DEFAULT_TREND_DAYS) -> list[TrendPoint]:
        today = (now or self._clock.now()).date()
        first = today - timedelta(days=days - 1)

        roster_ids = {e.user_id for e in self._roster()}
        by_date: dict[date, list[AttendanceDay]] = defaultdict(list)
        for d in self._attendance.query_attendance_days(start_date=first, end_date=today):
            if d.user_id in roster_ids:
                by_date[d.work_date].append(d)

        trend: list[TrendPoint] = []
        for offset in range(days):
            day = first + timedelta(days=offset)
            records = by_date.get(day, [])
            trend.append(
                TrendPoint(
                    date=day,
                    weekday=weekday_label(day),
                    present=sum(1 for r in records if r.status == AttendanceStatus.PRESENT),
                    late=sum(1 for r in records if r.status == AttendanceStatus.LATE),
                    absent=len(roster_ids) - len(records),
                )
            )
        return trend

    def export_range(
        self,
        *,
        start: date,
        end: date,
        employee_code: Optional[str] = None,
    ) -> list[ExportRow]:
        require_date_range(start, end)

        user_id = None
        if employee_code:
            matches = self._employees.find_employees(employee_code=employee_code)
            if not matches:
                raise NotFoundError(f"No employee with code {employee_code}")
            user_id = matches[0].user_id

        rows = list(self._attendance.query_attendance_rows(user_id=user_id, start_date=start, end_date=end))
        rows.sort(key=lambda r: (r.day.work_date, r.employee_code))

        return [
            ExportRow(
                date=r.day.work_date.isoformat(),
                employee_code=r.employee_code or NOT_AVAILABLE,
                name=r.name or NOT_AVAILABLE,
                department=r.department or NOT_AVAILABLE,
                check_in=format_time_of_day(r.day.check_in_time, default=NOT_AVAILABLE),
                check_out=format_time_of_day(r.day.check_out_time, default=NOT_AVAILABLE),
                status=r.day.status.value,
                total_hours=f"{r.day.total_hours:.2f}",
            )
            for r in rows
        ]

    def export_csv(
        self,
        *,
        start: Optional[date] = None,
        end: Optional[date] = None,
        employee_code: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        if start is None or end is None:
            current = (now or self._clock.now()).date()
            start, end = month_bounds(current.year, current.month)
        if employee_code == "all":
            employee_code = None

        rows = self.export_range(start=start, end=end, employee_code=employee_code)
        logger.info("Exporting %d attendance rows for %s..%s", len(rows), start, end)
        return render_csv(rows)

    def department_month_to_date(
        self,
        roster: Sequence[Employee],
        *,
        today: date,
    ) -> dict[str, dict]:
        """Per-department counts of this month's stored statuses up to today."""

        start = today.replace(day=1)
        dept_of = {e.user_id: e.department for e in roster}

        stats: dict[str, dict] = {}
        for emp in roster:
            entry = stats.setdefault(emp.department, {"employees": 0, "present": 0, "late": 0, "halfDay": 0})
            entry["employees"] += 1

        for d in self._attendance.query_attendance_days(start_date=start, end_date=today):
            dept = dept_of.get(d.user_id)
            if dept is None:
                continue
            if d.status == AttendanceStatus.PRESENT:
                stats[dept]["present"] += 1
            elif d.status == AttendanceStatus.LATE:
                stats[dept]["late"] += 1
            elif d.status == AttendanceStatus.HALF_DAY:
                stats[dept]["halfDay"] += 1
        return stats
