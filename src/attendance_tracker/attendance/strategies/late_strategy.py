from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class LateStrategy(AttendanceStrategy):
    """Late check-in. LATE survives check-out whatever the hours worked."""

    def decide_checkin(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)

    def decide_checkout(self, *, now: datetime, current: AttendanceStatus, worked_hours: float) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE)
