from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Short day on checkout (only when check-in was not LATE)."""

    def decide_checkin(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_checkout(self, *, now: datetime, current: AttendanceStatus, worked_hours: float) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
