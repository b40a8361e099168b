"""Batch loading of execution and weekday-capacity data for a unit."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rtp_report.core.errors import StoreUnavailable
from rtp_report.engine.calendar_utils import days_in_month
from rtp_report.engine.weekdays import Weekday, normalize_weekday_label
from rtp_report.repositories.productivity_repository import ProductivityRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DailyExecutionRecord:
    service_id: int
    day: int
    scheduled: int
    executed: int
    executed_walkin: int

    @property
    def executed_total(self) -> int:
        return self.executed + self.executed_walkin


@dataclass(frozen=True, slots=True)
class WeekdayCapacityEntry:
    service_id: int
    weekday_label: str
    consultations_per_day: int

    @property
    def weekday(self) -> Weekday | str:
        return normalize_weekday_label(self.weekday_label)


@dataclass(slots=True)
class BatchLoad:
    """Execution rows and merged weekday capacity keyed by service id."""

    executions: dict[int, list[DailyExecutionRecord]] = field(default_factory=dict)
    capacity: dict[int, dict[Weekday | str, int]] = field(default_factory=dict)

    def executions_for(self, service_id: int) -> list[DailyExecutionRecord]:
        return self.executions.get(service_id, [])

    def capacity_for(self, service_id: int) -> dict[Weekday | str, int]:
        return self.capacity.get(service_id, {})


def merge_capacity_entries(entries: Iterable[WeekdayCapacityEntry]) -> dict[int, dict[Weekday | str, int]]:
    """Sum morning/afternoon entries that normalize to the same weekday."""

    merged: dict[int, dict[Weekday | str, int]] = {}
    for entry in entries:
        weekday = entry.weekday
        if not isinstance(weekday, Weekday):
            logger.debug(
                "Weekday label %r of service %s matches no calendar day.",
                entry.weekday_label,
                entry.service_id,
            )
        bucket = merged.setdefault(entry.service_id, {})
        bucket[weekday] = bucket.get(weekday, 0) + entry.consultations_per_day
    return merged


class DataSource(Protocol):
    """Source of daily execution and weekday capacity rows for one unit."""

    def load_batch(self, unit_id: int, service_ids: Iterable[int], month: int, year: int) -> BatchLoad:
        ...


class RealStore:
    """Reads the relational store; issues at most two queries per batch."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.repo = ProductivityRepository(db)

    def load_batch(self, unit_id: int, service_ids: Iterable[int], month: int, year: int) -> BatchLoad:
        ids = set(service_ids)
        if not ids:
            return BatchLoad()

        try:
            execution_rows = self.repo.aggregate_daily_execution(unit_id, ids, month=month, year=year)
            capacity_rows = self.repo.aggregate_weekday_capacity(unit_id, ids)
        except SQLAlchemyError as exc:
            logger.exception("Batch load failed for unit %s (%s services).", unit_id, len(ids))
            raise StoreUnavailable(f"Could not load productivity data for unit {unit_id}.") from exc

        executions: dict[int, list[DailyExecutionRecord]] = {}
        for service_id, day, scheduled, executed, walkin in execution_rows:
            executions.setdefault(service_id, []).append(
                DailyExecutionRecord(
                    service_id=service_id,
                    day=int(day),
                    scheduled=int(scheduled or 0),
                    executed=int(executed or 0),
                    executed_walkin=int(walkin or 0),
                )
            )

        capacity = merge_capacity_entries(
            WeekdayCapacityEntry(
                service_id=service_id,
                weekday_label=label,
                consultations_per_day=int(total or 0),
            )
            for service_id, label, total in capacity_rows
        )

        logger.info(
            "Loaded %s execution rows and %s capacity rows for %s services of unit %s (%02d/%s).",
            len(execution_rows),
            len(capacity_rows),
            len(ids),
            unit_id,
            month,
            year,
        )
        return BatchLoad(executions=executions, capacity=capacity)


class SyntheticStore:
    """Deterministic placeholder data for demos; never touches the database."""

    base_value = 100
    weekend_factor = 0.3
    scheduled_ratio = 0.9
    executed_ratio = 0.8

    def _day_value(self, day: int, month: int, year: int) -> int:
        iso_weekday = date(year, month, day).isoweekday()
        factor = self.weekend_factor if iso_weekday >= 6 else 1.0
        return int(self.base_value * factor * (1 + (day % 7) * 0.1))

    def load_batch(self, unit_id: int, service_ids: Iterable[int], month: int, year: int) -> BatchLoad:
        ids = sorted(set(service_ids))
        if not ids:
            return BatchLoad()

        total_days = days_in_month(month, year)
        weekly = {
            weekday: int(self.base_value * (1.0 if weekday.is_business_day else self.weekend_factor))
            for weekday in Weekday
        }
        load = BatchLoad()
        for service_id in ids:
            records = []
            for day in range(1, total_days + 1):
                value = self._day_value(day, month, year)
                records.append(
                    DailyExecutionRecord(
                        service_id=service_id,
                        day=day,
                        scheduled=int(value * self.scheduled_ratio),
                        executed=int(value * self.executed_ratio),
                        executed_walkin=0,
                    )
                )
            load.executions[service_id] = records
            load.capacity[service_id] = dict(weekly)

        logger.info("Generated synthetic data for %s services of unit %s (%02d/%s).", len(ids), unit_id, month, year)
        return load
