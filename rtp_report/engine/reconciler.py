"""Merge execution rows and weekday capacity into a per-day series."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from rtp_report.engine.calendar_utils import MonthCalendar
from rtp_report.engine.loader import BatchLoad, DailyExecutionRecord
from rtp_report.engine.weekdays import Weekday


@dataclass(frozen=True, slots=True)
class DailyMetric:
    day: int
    weekday: Weekday
    contracted: int
    scheduled: int
    executed: int

    def to_dict(self) -> dict[str, object]:
        return {
            "day": self.day,
            "weekday": self.weekday.value,
            "weekday_short": self.weekday.short_label,
            "contracted": self.contracted,
            "scheduled": self.scheduled,
            "executed": self.executed,
        }


def reconcile_service(
    month_calendar: MonthCalendar,
    executions: Iterable[DailyExecutionRecord],
    capacity: dict[Weekday | str, int],
) -> list[DailyMetric]:
    """Return one metric per calendar day; days without data are zero-filled."""

    by_day: dict[int, tuple[int, int]] = {}
    for record in executions:
        # Rows outside the month (e.g. day 31 stored for a 30-day month) are ignored.
        if not 1 <= record.day <= month_calendar.day_count:
            continue
        scheduled, executed = by_day.get(record.day, (0, 0))
        by_day[record.day] = (scheduled + record.scheduled, executed + record.executed_total)

    series: list[DailyMetric] = []
    for calendar_day in month_calendar.days:
        scheduled, executed = by_day.get(calendar_day.day, (0, 0))
        series.append(
            DailyMetric(
                day=calendar_day.day,
                weekday=calendar_day.weekday,
                contracted=max(0, capacity.get(calendar_day.weekday, 0)),
                scheduled=scheduled,
                executed=executed,
            )
        )
    return series


def reconcile_batch(
    month_calendar: MonthCalendar,
    batch: BatchLoad,
    service_ids: Iterable[int],
) -> dict[int, list[DailyMetric]]:
    return {
        service_id: reconcile_service(
            month_calendar,
            batch.executions_for(service_id),
            batch.capacity_for(service_id),
        )
        for service_id in service_ids
    }
