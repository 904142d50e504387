from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterator, Protocol

_WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MS_PER_HOUR = Decimal(3_600_000)


class Clock(Protocol):
    def now(self) -> datetime:
        raise NotImplementedError


class SystemClock:
    """Current local time.

    Note: Injected into services so tests can swap in a FixedClock.
    """

    def now(self) -> datetime:
        return datetime.now()


@dataclass
class FixedClock:
    current: datetime

    def now(self) -> datetime:
        return self.current

    def advance(self, **delta: float) -> datetime:
        self.current = self.current + timedelta(**delta)
        return self.current


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: str) -> time:
    """Parse HH:MM (or HH:MM:SS) string into time."""
    fmt = "%H:%M:%S" if value.count(":") == 2 else "%H:%M"
    return datetime.strptime(value.strip(), fmt).time()


def truncate_to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=(value.microsecond // 1000) * 1000)


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First and last calendar day of a month."""
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def iter_days(start: date, end: date) -> Iterator[date]:
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def is_working_day(value: date) -> bool:
    return value.weekday() < 5


def count_working_days(start: date, end: date) -> int:
    """Monday-Friday days in [start, end]; 0 when end < start."""
    return sum(1 for d in iter_days(start, end) if is_working_day(d))


def weekday_label(value: date) -> str:
    return _WEEKDAY_LABELS[value.weekday()]


def round_hours(value: float | Decimal) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def hours_between(start: datetime, end: datetime) -> float:
    """Elapsed hours rounded half-up to 2 decimals, computed on milliseconds."""
    elapsed_ms = (end - start) // timedelta(milliseconds=1)
    return float((Decimal(elapsed_ms) / _MS_PER_HOUR).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def format_time_of_day(value: datetime | None, *, default: str) -> str:
    return value.strftime("%H:%M:%S") if value else default
