from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .common.datetime_utils import Clock, SystemClock
from .core.constants import DEFAULT_HALF_DAY_HOURS, DEFAULT_LATE_CUTOFF
from .database.connection import DatabaseConnection, DBConfig
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .reports.dashboard import DashboardService
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    employees_repo: EmployeeRepository
    attendance_repo: AttendanceRepository

    employee_service: EmployeeService
    attendance_service: AttendanceService
    report_service: AttendanceReportService
    dashboard_service: DashboardService

    conn: Optional[DatabaseConnection] = None


def build_services(
    *,
    employees_repo: EmployeeRepository,
    attendance_repo: AttendanceRepository,
    clock: Optional[Clock] = None,
    late_after: time = DEFAULT_LATE_CUTOFF,
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    clock = clock or SystemClock()

    employee_service = EmployeeService(employees_repo)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        clock=clock,
        strategy_factory=AttendanceStrategyFactory(late_after=late_after, half_day_hours=half_day_hours),
    )
    report_service = AttendanceReportService(attendance_repo, employees_repo, clock=clock)
    dashboard_service = DashboardService(attendance_repo, employees_repo, report_service, clock=clock)

    return Container(
        employees_repo=employees_repo,
        attendance_repo=attendance_repo,
        employee_service=employee_service,
        attendance_service=attendance_service,
        report_service=report_service,
        dashboard_service=dashboard_service,
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    clock: Optional[Clock] = None,
    late_after: time = DEFAULT_LATE_CUTOFF,
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return build_services(
        employees_repo=MySQLEmployeeRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        clock=clock,
        late_after=late_after,
        half_day_hours=half_day_hours,
        conn=conn,
    )
