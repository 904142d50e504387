from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role used for authorization and for building the roster."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class AttendanceStatus(str, Enum):
    """Attendance status as stored in the database.

    ABSENT is never written by the classifier; it only exists as an inferred
    value in summaries.
    """

    PRESENT = "present"
    LATE = "late"
    HALF_DAY = "half-day"
    ABSENT = "absent"
