"""Read-models returned by the report and dashboard services.

`as_dict()` emits the field names the presentation layer consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="milliseconds") if value else None


@dataclass
class StatusTally:
    """Running counts of stored statuses plus hours worked."""

    present: int = 0
    late: int = 0
    half_day: int = 0
    total_hours: float = 0.0

    def add(self, status: AttendanceStatus, hours: float) -> None:
        self.total_hours += hours or 0.0
        if status == AttendanceStatus.PRESENT:
            self.present += 1
        elif status == AttendanceStatus.LATE:
            self.late += 1
        elif status == AttendanceStatus.HALF_DAY:
            self.half_day += 1

    def merge(self, other: "StatusTally") -> None:
        self.present += other.present
        self.late += other.late
        self.half_day += other.half_day
        self.total_hours += other.total_hours

    @property
    def attended(self) -> int:
        return self.present + self.late + self.half_day


@dataclass(frozen=True)
class MonthlySummary:
    month: int
    year: int
    present: int
    absent: int
    late: int
    half_day: int
    total_hours: float
    working_days: int

    def as_dict(self) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "halfDay": self.half_day,
            "totalHours": self.total_hours,
            "workingDays": self.working_days,
        }


@dataclass(frozen=True)
class EmployeeMonthStats:
    employee_code: str
    name: str
    department: str
    present: int
    late: int
    half_day: int
    total_hours: float
    absent: int = 0

    def as_dict(self) -> dict:
        return {
            "employeeId": self.employee_code,
            "name": self.name,
            "department": self.department,
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "halfDay": self.half_day,
            "totalHours": self.total_hours,
        }


@dataclass(frozen=True)
class DepartmentStats:
    present: int
    late: int
    half_day: int
    total_hours: float
    employee_count: int
    absent: int = 0

    def as_dict(self) -> dict:
        return {
            "present": self.present,
            "absent": self.absent,
            "late": self.late,
            "halfDay": self.half_day,
            "totalHours": self.total_hours,
            "employeeCount": self.employee_count,
        }


@dataclass(frozen=True)
class TeamMonthSummary:
    month: int
    year: int
    employee_stats: list[EmployeeMonthStats]
    department_stats: dict[str, DepartmentStats]

    def as_dict(self) -> dict:
        return {
            "month": self.month,
            "year": self.year,
            "employeeStats": [s.as_dict() for s in self.employee_stats],
            "departmentStats": {k: v.as_dict() for k, v in self.department_stats.items()},
        }


@dataclass(frozen=True)
class TeamMemberStatus:
    user_id: int
    name: str
    employee_code: str
    department: str
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {
            "id": self.user_id,
            "name": self.name,
            "employeeId": self.employee_code,
            "department": self.department,
            "checkInTime": _iso(self.check_in_time),
            "checkOutTime": _iso(self.check_out_time),
        }


@dataclass(frozen=True)
class TodayTeamStatus:
    date: date
    present: list[TeamMemberStatus] = field(default_factory=list)
    late: list[TeamMemberStatus] = field(default_factory=list)
    not_checked_in: list[TeamMemberStatus] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.present) + len(self.late) + len(self.not_checked_in)

    def as_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "summary": {
                "total": self.total,
                "present": len(self.present),
                "late": len(self.late),
                "notCheckedIn": len(self.not_checked_in),
            },
            "details": {
                "present": [m.as_dict() for m in self.present],
                "late": [m.as_dict() for m in self.late],
                "notCheckedIn": [m.as_dict() for m in self.not_checked_in],
            },
        }


@dataclass(frozen=True)
class TrendPoint:
    date: date
    weekday: str
    present: int
    late: int
    absent: int

    def as_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "day": self.weekday,
            "present": self.present,
            "late": self.late,
            "absent": self.absent,
        }


@dataclass(frozen=True)
class ExportRow:
    date: str
    employee_code: str
    name: str
    department: str
    check_in: str
    check_out: str
    status: str
    total_hours: str

    def as_list(self) -> list[str]:
        return [
            self.date,
            self.employee_code,
            self.name,
            self.department,
            self.check_in,
            self.check_out,
            self.status,
            self.total_hours,
        ]
