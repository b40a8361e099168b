from __future__ import annotations

from datetime import date

import pytest

from rtp_report.core.errors import InvalidDate
from rtp_report.engine.calendar_utils import (
    MonthCalendar,
    business_day_count,
    days_in_month,
    month_name,
    weekday_of,
)
from rtp_report.engine.weekdays import Weekday


def test_leap_february_layout() -> None:
    assert days_in_month(2, 2024) == 29
    assert weekday_of(1, 2, 2024) is Weekday.THURSDAY
    assert weekday_of(29, 2, 2024) is Weekday.THURSDAY
    assert business_day_count(2, 2024) == 21


def test_common_year_february() -> None:
    assert days_in_month(2, 2023) == 28
    assert days_in_month(2, 1900) == 28
    assert days_in_month(2, 2000) == 29
    assert business_day_count(2, 2023) == 20


@pytest.mark.parametrize(
    ("day", "month", "year"),
    [
        (30, 2, 2024),
        (0, 1, 2024),
        (1, 13, 2024),
        (1, 0, 2024),
        (31, 4, 2024),
    ],
)
def test_impossible_dates_raise_invalid_date(day: int, month: int, year: int) -> None:
    with pytest.raises(InvalidDate) as exc_info:
        weekday_of(day, month, year)

    assert exc_info.value.month == month
    assert exc_info.value.year == year


def test_month_calendar_matches_stdlib_weekdays() -> None:
    month_calendar = MonthCalendar.build(1, 2024)

    assert month_calendar.day_count == 31
    assert month_calendar.first_day == date(2024, 1, 1)
    assert month_calendar.business_days == 23
    for item in month_calendar.days:
        expected = Weekday.from_iso_weekday(date(2024, 1, item.day).isoweekday())
        assert item.weekday is expected
    assert [item.day for item in month_calendar.days if item.weekday is Weekday.MONDAY] == [1, 8, 15, 22, 29]


def test_month_calendar_agrees_with_helpers() -> None:
    for month in range(1, 13):
        month_calendar = MonthCalendar.build(month, 2023)

        assert month_calendar.day_count == days_in_month(month, 2023)
        assert month_calendar.business_days == business_day_count(month, 2023)
        assert month_calendar.days[-1].weekday is weekday_of(month_calendar.day_count, month, 2023)


def test_month_helpers() -> None:
    assert month_name(3) == "Março"
    with pytest.raises(InvalidDate):
        month_name(0)
    with pytest.raises(InvalidDate):
        MonthCalendar.build(13, 2024)
