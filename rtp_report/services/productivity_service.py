"""Productivity report service: orchestrates one engine run per request."""

from __future__ import annotations

import csv
import io
import logging
import zlib
from collections.abc import Callable
from dataclasses import dataclass
from io import BytesIO
from typing import TypeVar

from fastapi import HTTPException, status
from openpyxl import Workbook
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rtp_report.core.config import Settings, get_settings
from rtp_report.core.errors import StoreUnavailable
from rtp_report.engine.calendar_utils import MONTH_NAMES, MonthCalendar, month_name
from rtp_report.engine.grouping import GroupResult, ServiceResult, assemble_groups
from rtp_report.engine.loader import BatchLoad, DataSource, RealStore
from rtp_report.engine.metrics import compute_aggregate, management_summary, unit_productivity
from rtp_report.engine.reconciler import reconcile_batch
from rtp_report.engine.targets import resolve_target
from rtp_report.models.entities import Service, ServiceGroup, TargetOverride, TemporalTarget, Unit
from rtp_report.repositories.productivity_repository import ProductivityRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")

SERVICE_PALETTE: tuple[str, ...] = (
    "#008000",
    "#a02222",
    "#1e88e5",
    "#9c27b0",
    "#ff9800",
    "#00acc1",
    "#5e35b1",
    "#546e7a",
)


def service_color(name: str) -> str:
    """Stable palette colour derived from the CRC32 of the service name."""

    return SERVICE_PALETTE[zlib.crc32(name.encode("utf-8")) % len(SERVICE_PALETTE)]


@dataclass(slots=True)
class ExportFilePayload:
    media_type: str
    filename: str
    content: bytes


@dataclass(slots=True)
class UnitReport:
    unit: Unit
    calendar: MonthCalendar
    services: list[ServiceResult]
    groups: list[GroupResult]


class ProductivityReportService:
    """Builds unit productivity reports from the store selected by the caller."""

    def __init__(
        self,
        db: Session,
        data_source: DataSource | None = None,
        settings: Settings | None = None,
    ) -> None:
        self.db = db
        self.repo = ProductivityRepository(db)
        self.settings = settings if settings is not None else get_settings()
        self.data_source = data_source if data_source is not None else RealStore(db)

    def _read(self, description: str, query: Callable[..., T], *args, **kwargs) -> T:
        """Run one repository read; driver and SQL errors surface as ``StoreUnavailable``."""

        try:
            return query(*args, **kwargs)
        except SQLAlchemyError as exc:
            logger.exception("Store read failed while loading %s.", description)
            raise StoreUnavailable(f"Could not load {description}.") from exc

    # ---------- Reference data ----------
    @staticmethod
    def month_names() -> list[dict[str, object]]:
        return [{"month": number, "name": name} for number, name in MONTH_NAMES.items()]

    def list_units(self) -> list[dict[str, object]]:
        units = self._read("units", self.repo.list_units, limit=self.settings.max_results)
        return [{"id": unit.id, "name": unit.name} for unit in units]

    def list_active_groups(self) -> list[dict[str, object]]:
        groups = self._read("service groups", self.repo.list_active_groups, limit=self.settings.max_results)
        return [
            {
                "id": group.id,
                "name": group.name,
                "description": group.description,
                "color": group.color or self.settings.ungrouped_color,
            }
            for group in groups
        ]

    def _get_unit(self, unit_id: int) -> Unit:
        unit = self._read(f"unit {unit_id}", self.repo.get_unit, unit_id)
        if unit is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unit not found.")
        return unit

    # ---------- Engine run ----------
    def _load_targets(
        self,
        unit_id: int,
        service_ids: list[int],
        month_calendar: MonthCalendar,
    ) -> tuple[dict[int, list[TargetOverride]], dict[int, list[TemporalTarget]]]:
        overrides_by_service: dict[int, list[TargetOverride]] = {}
        temporal_by_service: dict[int, list[TemporalTarget]] = {}
        if not service_ids:
            return overrides_by_service, temporal_by_service

        overrides = self._read(
            f"target overrides for unit {unit_id}",
            self.repo.list_active_target_overrides,
            unit_id,
            service_ids,
            month_start=month_calendar.first_day,
        )
        temporal_targets = self._read(
            f"temporal targets for unit {unit_id}",
            self.repo.list_active_temporal_targets,
            service_ids,
            month_start=month_calendar.first_day,
        )

        for row in overrides:
            overrides_by_service.setdefault(row.service_id, []).append(row)
        for row in temporal_targets:
            temporal_by_service.setdefault(row.service_id, []).append(row)
        return overrides_by_service, temporal_by_service

    @staticmethod
    def _walkin_total(batch: BatchLoad, service_id: int, month_calendar: MonthCalendar) -> int:
        return sum(
            record.executed_walkin
            for record in batch.executions_for(service_id)
            if 1 <= record.day <= month_calendar.day_count
        )

    def _build_service_results(
        self,
        unit_id: int,
        rows: list[tuple[Service, ServiceGroup | None]],
        month_calendar: MonthCalendar,
    ) -> list[ServiceResult]:
        service_ids = [service.id for service, _ in rows]
        overrides_by_service, temporal_by_service = self._load_targets(unit_id, service_ids, month_calendar)
        batch = self.data_source.load_batch(unit_id, service_ids, month_calendar.month, month_calendar.year)
        series_by_service = reconcile_batch(month_calendar, batch, service_ids)

        results: list[ServiceResult] = []
        for service, group in rows:
            target = resolve_target(
                static_value=service.static_target,
                overrides=overrides_by_service.get(service.id, []),
                temporal_targets=temporal_by_service.get(service.id, []),
                month_start=month_calendar.first_day,
            )
            series = series_by_service[service.id]
            aggregate = compute_aggregate(
                service_id=service.id,
                series=series,
                target=target,
                executed_walkin=self._walkin_total(batch, service.id, month_calendar),
                business_days=month_calendar.business_days,
            )
            results.append(
                ServiceResult(
                    service_id=service.id,
                    service_name=service.name,
                    group_id=group.id if group is not None else None,
                    group_name=group.name if group is not None else None,
                    group_color=group.color if group is not None else None,
                    color=(group.color if group is not None and group.color else service_color(service.name)),
                    aggregate=aggregate,
                    daily_metrics=series,
                )
            )
        return results

    def build_unit_report(self, *, unit_id: int, month: int, year: int) -> UnitReport:
        month_calendar = MonthCalendar.build(month, year)
        unit = self._get_unit(unit_id)
        service_rows = self._read(
            f"services of unit {unit.id}",
            self.repo.list_services_with_groups,
            unit.id,
            limit=self.settings.max_results,
        )
        rows = [(service, group) for service, group in service_rows]
        services = self._build_service_results(unit.id, rows, month_calendar)
        groups = assemble_groups(
            services,
            ungrouped_name=self.settings.ungrouped_name,
            ungrouped_color=self.settings.ungrouped_color,
        )
        return UnitReport(unit=unit, calendar=month_calendar, services=services, groups=groups)

    # ---------- Payloads ----------
    @staticmethod
    def _period_payload(report: UnitReport) -> dict[str, object]:
        return {
            "unit_id": report.unit.id,
            "unit_name": report.unit.name,
            "month": report.calendar.month,
            "year": report.calendar.year,
            "month_name": month_name(report.calendar.month),
            "days_in_month": report.calendar.day_count,
            "business_days": report.calendar.business_days,
        }

    def unit_report(self, *, unit_id: int, month: int, year: int) -> dict[str, object]:
        report = self.build_unit_report(unit_id=unit_id, month=month, year=year)
        payload = self._period_payload(report)
        payload["unit_productivity_percent"] = str(
            unit_productivity(service.aggregate for service in report.services)
        )
        payload["groups"] = [group.to_dict() for group in report.groups]
        return payload

    def management_report(self, *, unit_id: int, month: int, year: int) -> dict[str, object]:
        report = self.build_unit_report(unit_id=unit_id, month=month, year=year)
        aggregates = [service.aggregate for service in report.services]
        payload = self._period_payload(report)
        payload["unit_productivity_percent"] = str(unit_productivity(aggregates))
        payload["management"] = management_summary(aggregates).to_dict()
        payload["groups"] = [
            {
                "group_id": group.display_id,
                "group_name": group.group_name,
                "group_color": group.group_color,
                "management": management_summary(service.aggregate for service in group.services).to_dict(),
            }
            for group in report.groups
        ]
        return payload

    def service_daily(self, *, unit_id: int, service_id: int, month: int, year: int) -> dict[str, object]:
        month_calendar = MonthCalendar.build(month, year)
        unit = self._get_unit(unit_id)
        row = self._read(f"service {service_id}", self.repo.get_service_with_group, unit.id, service_id)
        if row is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Service not found in unit.")

        service, group = row
        result = self._build_service_results(unit.id, [(service, group)], month_calendar)[0]
        return {
            "unit_id": unit.id,
            "month": month_calendar.month,
            "year": month_calendar.year,
            **result.to_dict(),
        }

    # ---------- Exports ----------
    @staticmethod
    def _flatten_report_rows(report: UnitReport) -> list[dict[str, object]]:
        flat_rows: list[dict[str, object]] = []
        for group in report.groups:
            for service in group.services:
                totals = service.aggregate
                for metric in service.daily_metrics:
                    flat_rows.append(
                        {
                            "group_name": group.group_name,
                            "service_id": service.service_id,
                            "service_name": service.service_name,
                            "day": metric.day,
                            "weekday": metric.weekday.short_label,
                            "contracted": metric.contracted,
                            "scheduled": metric.scheduled,
                            "executed": metric.executed,
                            "target": totals.target.value,
                            "productivity_percent": str(totals.productivity_percent),
                        }
                    )
        return flat_rows

    def export_report(self, *, unit_id: int, month: int, year: int, format_name: str) -> ExportFilePayload:
        normalized_format = format_name.strip().lower()
        if normalized_format not in {"csv", "xlsx"}:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="format must be one of: csv, xlsx.",
            )

        report = self.build_unit_report(unit_id=unit_id, month=month, year=year)
        flattened = self._flatten_report_rows(report)
        fieldnames = [
            "group_name",
            "service_id",
            "service_name",
            "day",
            "weekday",
            "contracted",
            "scheduled",
            "executed",
            "target",
            "productivity_percent",
        ]
        base_filename = f"productivity-{unit_id}-{year:04d}-{month:02d}"

        if normalized_format == "csv":
            sio = io.StringIO()
            writer = csv.DictWriter(sio, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(flattened)
            return ExportFilePayload(
                media_type="text/csv; charset=utf-8",
                filename=f"{base_filename}.csv",
                content=sio.getvalue().encode("utf-8"),
            )

        workbook = Workbook()
        sheet = workbook.active
        sheet.title = "productivity"
        sheet.append(fieldnames)
        for row in flattened:
            sheet.append([row.get(column, "") for column in fieldnames])

        output = BytesIO()
        workbook.save(output)
        return ExportFilePayload(
            media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
            filename=f"{base_filename}.xlsx",
            content=output.getvalue(),
        )
