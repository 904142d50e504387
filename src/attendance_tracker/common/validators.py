from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} must not be empty")
    return value.strip()


def require_month(month: int) -> int:
    try:
        month = int(month)
    except (TypeError, ValueError):
        raise ValidationError("Month must be a number between 1 and 12")
    if not 1 <= month <= 12:
        raise ValidationError("Month must be a number between 1 and 12")
    return month


def require_year(year: int) -> int:
    try:
        year = int(year)
    except (TypeError, ValueError):
        raise ValidationError("Year must be a number")
    if not 1 <= year <= 9999:
        raise ValidationError("Year is out of range")
    return year


def require_date(value: Optional[str], field_name: str) -> date:
    if not value:
        raise ValidationError(f"{field_name} is required (YYYY-MM-DD)")
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} is not a valid date (YYYY-MM-DD)")


def require_date_range(start: date, end: date) -> tuple[date, date]:
    if start > end:
        raise ValidationError("Start date must not be after end date")
    return start, end
