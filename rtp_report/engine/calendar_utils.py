"""Calendar arithmetic for a report month."""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date

from rtp_report.core.errors import InvalidDate
from rtp_report.engine.weekdays import Weekday

MONTH_NAMES: dict[int, str] = {
    1: "Janeiro",
    2: "Fevereiro",
    3: "Março",
    4: "Abril",
    5: "Maio",
    6: "Junho",
    7: "Julho",
    8: "Agosto",
    9: "Setembro",
    10: "Outubro",
    11: "Novembro",
    12: "Dezembro",
}


def _check_month_year(month: int, year: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidDate(f"Month must be between 1 and 12, got {month}.", month=month, year=year)
    if not date.min.year <= year <= date.max.year:
        raise InvalidDate(f"Year out of supported range: {year}.", month=month, year=year)


def days_in_month(month: int, year: int) -> int:
    _check_month_year(month, year)
    return calendar.monthrange(year, month)[1]


def weekday_of(day: int, month: int, year: int) -> Weekday:
    _check_month_year(month, year)
    if not 1 <= day <= days_in_month(month, year):
        raise InvalidDate(f"Day {day} does not exist in {month:02d}/{year}.", day=day, month=month, year=year)
    return Weekday.from_iso_weekday(date(year, month, day).isoweekday())


def business_day_count(month: int, year: int) -> int:
    """Number of Monday-Friday days in the month."""

    return sum(
        1
        for day in range(1, days_in_month(month, year) + 1)
        if date(year, month, day).isoweekday() <= 5
    )


def month_name(month: int) -> str:
    if month not in MONTH_NAMES:
        raise InvalidDate(f"Month must be between 1 and 12, got {month}.", month=month)
    return MONTH_NAMES[month]


@dataclass(frozen=True, slots=True)
class CalendarDay:
    day: int
    weekday: Weekday


@dataclass(frozen=True, slots=True)
class MonthCalendar:
    """Weekday layout of one month, built once per report request."""

    month: int
    year: int
    days: tuple[CalendarDay, ...]
    business_days: int

    @classmethod
    def build(cls, month: int, year: int) -> MonthCalendar:
        days = tuple(
            CalendarDay(day=day, weekday=weekday_of(day, month, year))
            for day in range(1, days_in_month(month, year) + 1)
        )
        return cls(month=month, year=year, days=days, business_days=business_day_count(month, year))

    @property
    def day_count(self) -> int:
        return len(self.days)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)
