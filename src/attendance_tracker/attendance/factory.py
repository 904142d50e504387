from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time

from ..core.constants import DEFAULT_HALF_DAY_HOURS, DEFAULT_LATE_CUTOFF
from ..core.enums import AttendanceStatus
from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy


def is_late(now: datetime, late_after: time = DEFAULT_LATE_CUTOFF) -> bool:
    """Minute-granular: with a 09:30 cutoff, 09:30:59 is still on time."""
    return now.hour > late_after.hour or (now.hour == late_after.hour and now.minute > late_after.minute)


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    late_after: time = DEFAULT_LATE_CUTOFF
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS

    def for_checkin(self, *, now: datetime) -> AttendanceStrategy:
        if is_late(now, self.late_after):
            return LateStrategy()
        return NormalStrategy()

    def for_checkout(self, *, current_status: AttendanceStatus, worked_hours: float) -> AttendanceStrategy:
        if current_status == AttendanceStatus.LATE:
            return LateStrategy()
        if worked_hours < self.half_day_hours:
            return HalfDayStrategy()
        return NormalStrategy()
