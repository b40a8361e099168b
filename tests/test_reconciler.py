from __future__ import annotations

from rtp_report.engine.calendar_utils import MonthCalendar
from rtp_report.engine.loader import DailyExecutionRecord
from rtp_report.engine.reconciler import reconcile_service
from rtp_report.engine.weekdays import Weekday


def _record(day: int, *, scheduled: int = 0, executed: int = 0, walkin: int = 0) -> DailyExecutionRecord:
    return DailyExecutionRecord(service_id=1, day=day, scheduled=scheduled, executed=executed, executed_walkin=walkin)


def test_series_has_one_entry_per_calendar_day() -> None:
    series = reconcile_service(MonthCalendar.build(2, 2024), [], {})

    assert [item.day for item in series] == list(range(1, 30))
    assert all(item.scheduled == 0 and item.executed == 0 and item.contracted == 0 for item in series)


def test_duplicate_days_are_summed_and_walkins_counted() -> None:
    series = reconcile_service(
        MonthCalendar.build(1, 2024),
        [
            _record(5, scheduled=3, executed=2),
            _record(5, scheduled=4, executed=1, walkin=2),
        ],
        {Weekday.FRIDAY: 9},
    )

    day_five = series[4]
    assert day_five.weekday is Weekday.FRIDAY
    assert (day_five.contracted, day_five.scheduled, day_five.executed) == (9, 7, 5)


def test_rows_outside_month_are_ignored() -> None:
    series = reconcile_service(
        MonthCalendar.build(4, 2024),
        [_record(31, executed=10), _record(0, executed=10), _record(30, executed=1)],
        {},
    )

    assert len(series) == 30
    assert sum(item.executed for item in series) == 1


def test_unmatched_capacity_falls_on_no_day() -> None:
    series = reconcile_service(MonthCalendar.build(1, 2024), [], {"feriado": 40, Weekday.SUNDAY: 5})

    # Sundays of January 2024: 7, 14, 21 and 28.
    assert sum(item.contracted for item in series) == 5 * 4
    assert series[6].to_dict() == {
        "day": 7,
        "weekday": "domingo",
        "weekday_short": "Dom",
        "contracted": 5,
        "scheduled": 0,
        "executed": 0,
    }
