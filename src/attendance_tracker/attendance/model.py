from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat(timespec="milliseconds") if value else None


@dataclass(frozen=True)
class AttendanceDay:
    """Domain entity: one employee's attendance for one calendar day."""

    attendance_id: int
    user_id: int
    work_date: date
    check_in_time: Optional[datetime]
    check_out_time: Optional[datetime]
    status: AttendanceStatus
    total_hours: float = 0.0

    def as_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "userId": self.user_id,
            "date": self.work_date.isoformat(),
            "checkInTime": _iso(self.check_in_time),
            "checkOutTime": _iso(self.check_out_time),
            "status": self.status.value,
            "totalHours": self.total_hours,
        }


@dataclass(frozen=True)
class AttendanceRow:
    """Read-model: attendance day joined with employee identity fields."""

    day: AttendanceDay
    employee_code: str
    name: str
    department: str
    email: Optional[str] = None

    def as_dict(self) -> dict:
        data = self.day.as_dict()
        data["employee"] = {
            "id": self.day.user_id,
            "name": self.name,
            "email": self.email,
            "employeeId": self.employee_code,
            "department": self.department,
        }
        return data
