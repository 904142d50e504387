from __future__ import annotations

from datetime import date, datetime, time, timedelta

import pytest

from attendance_tracker.common.datetime_utils import (
    FixedClock,
    count_working_days,
    format_time_of_day,
    hours_between,
    month_bounds,
    parse_time_of_day,
    round_hours,
    truncate_to_millis,
    weekday_label,
)
from attendance_tracker.common.validators import require_date, require_month
from attendance_tracker.core.exceptions import ValidationError


@pytest.mark.parametrize(
    "start, end, expected",
    [
        (date(2024, 5, 1), date(2024, 5, 31), 23),
        (date(2024, 2, 1), date(2024, 2, 29), 21),
        (date(2024, 5, 4), date(2024, 5, 5), 0),
        (date(2024, 5, 10), date(2024, 5, 1), 0),
    ],
)
def test_count_working_days(start, end, expected):
    assert count_working_days(start, end) == expected


def test_month_bounds_leap_year():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))
    assert month_bounds(2023, 12) == (date(2023, 12, 1), date(2023, 12, 31))


@pytest.mark.parametrize(
    "seconds, expected",
    [
        (8 * 3600, 8.0),
        (4500, 1.25),
        (17, 0.0),
        (18, 0.01),
        (3600 + 54, 1.02),
    ],
)
def test_hours_between_rounds_half_up(seconds, expected):
    start = datetime(2024, 5, 15, 9, 0)
    end = start + timedelta(seconds=seconds)

    assert hours_between(start, end) == expected


def test_round_hours():
    assert round_hours(2.675) == 2.68
    assert round_hours(0) == 0.0


def test_truncate_to_millis():
    assert truncate_to_millis(datetime(2024, 1, 1, 0, 0, 0, 999999)).microsecond == 999000


def test_fixed_clock_advance():
    clock = FixedClock(datetime(2024, 5, 15, 9, 0))

    assert clock.advance(hours=8, minutes=15) == datetime(2024, 5, 15, 17, 15)
    assert clock.now() == datetime(2024, 5, 15, 17, 15)


def test_parse_and_format_time_of_day():
    assert parse_time_of_day("09:30") == time(9, 30)
    assert parse_time_of_day("10:00:30") == time(10, 0, 30)
    assert format_time_of_day(datetime(2024, 5, 15, 7, 5, 9), default="N/A") == "07:05:09"
    assert format_time_of_day(None, default="N/A") == "N/A"


def test_weekday_label():
    assert weekday_label(date(2024, 5, 13)) == "Mon"
    assert weekday_label(date(2024, 5, 19)) == "Sun"


def test_validators():
    assert require_month("7") == 7
    assert require_date(" 2024-05-01 ", "date") == date(2024, 5, 1)

    with pytest.raises(ValidationError):
        require_date("05/01/2024", "date")
    with pytest.raises(ValidationError):
        require_date(None, "date")
    with pytest.raises(ValidationError):
        require_month(None)
