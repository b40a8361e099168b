"""Read-only repository for productivity reporting tables."""

from __future__ import annotations

from collections.abc import Collection
from datetime import date

from sqlalchemy import Row, and_, func, or_, select
from sqlalchemy.orm import Session

from rtp_report.models.entities import (
    DailyExecution,
    Service,
    ServiceGroup,
    TargetOverride,
    TemporalTarget,
    Unit,
    WeekdayCapacity,
)


class ProductivityRepository:
    """Query operations used by the report service and the batch loader."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # ---------- Units and groups ----------
    def get_unit(self, unit_id: int) -> Unit | None:
        return self.db.scalar(select(Unit).where(Unit.id == unit_id))

    def list_units(self, *, limit: int) -> list[Unit]:
        return self.db.scalars(select(Unit).order_by(Unit.name.asc(), Unit.id.asc()).limit(limit)).all()

    def list_active_groups(self, *, limit: int) -> list[ServiceGroup]:
        return self.db.scalars(
            select(ServiceGroup)
            .where(ServiceGroup.active.is_(True))
            .order_by(ServiceGroup.name.asc(), ServiceGroup.id.asc())
            .limit(limit)
        ).all()

    # ---------- Services ----------
    def list_services_with_groups(self, unit_id: int, *, limit: int) -> list[Row[tuple[Service, ServiceGroup | None]]]:
        return self.db.execute(
            select(Service, ServiceGroup)
            .outerjoin(ServiceGroup, ServiceGroup.id == Service.group_id)
            .where(Service.unit_id == unit_id)
            .order_by(Service.name.asc(), Service.id.asc())
            .limit(limit)
        ).all()

    def get_service_with_group(self, unit_id: int, service_id: int) -> Row[tuple[Service, ServiceGroup | None]] | None:
        return self.db.execute(
            select(Service, ServiceGroup)
            .outerjoin(ServiceGroup, ServiceGroup.id == Service.group_id)
            .where(
                and_(
                    Service.unit_id == unit_id,
                    Service.id == service_id,
                )
            )
        ).first()

    # ---------- Batch reads ----------
    def aggregate_daily_execution(
        self,
        unit_id: int,
        service_ids: Collection[int],
        *,
        month: int,
        year: int,
    ) -> list[Row[tuple[int, int, int, int, int]]]:
        return self.db.execute(
            select(
                DailyExecution.service_id,
                DailyExecution.day,
                func.coalesce(func.sum(DailyExecution.scheduled_count), 0),
                func.coalesce(func.sum(DailyExecution.executed_count), 0),
                func.coalesce(func.sum(DailyExecution.executed_walkin_count), 0),
            )
            .where(
                and_(
                    DailyExecution.unit_id == unit_id,
                    DailyExecution.service_id.in_(service_ids),
                    DailyExecution.year == year,
                    DailyExecution.month == month,
                )
            )
            .group_by(DailyExecution.service_id, DailyExecution.day)
            .order_by(DailyExecution.service_id.asc(), DailyExecution.day.asc())
        ).all()

    def aggregate_weekday_capacity(
        self,
        unit_id: int,
        service_ids: Collection[int],
    ) -> list[Row[tuple[int, str, int]]]:
        return self.db.execute(
            select(
                WeekdayCapacity.service_id,
                WeekdayCapacity.weekday_label,
                func.coalesce(func.sum(WeekdayCapacity.consultations_per_day), 0),
            )
            .where(
                and_(
                    WeekdayCapacity.unit_id == unit_id,
                    WeekdayCapacity.service_id.in_(service_ids),
                )
            )
            .group_by(WeekdayCapacity.service_id, WeekdayCapacity.weekday_label)
            .order_by(WeekdayCapacity.service_id.asc(), WeekdayCapacity.weekday_label.asc())
        ).all()

    # ---------- Targets ----------
    def list_active_target_overrides(
        self,
        unit_id: int,
        service_ids: Collection[int],
        *,
        month_start: date,
    ) -> list[TargetOverride]:
        return self.db.scalars(
            select(TargetOverride)
            .where(
                and_(
                    TargetOverride.unit_id == unit_id,
                    TargetOverride.service_id.in_(service_ids),
                    or_(TargetOverride.validity_start.is_(None), TargetOverride.validity_start <= month_start),
                    or_(TargetOverride.validity_end.is_(None), TargetOverride.validity_end >= month_start),
                )
            )
            .order_by(TargetOverride.service_id.asc(), TargetOverride.id.asc())
        ).all()

    def list_active_temporal_targets(
        self,
        service_ids: Collection[int],
        *,
        month_start: date,
    ) -> list[TemporalTarget]:
        return self.db.scalars(
            select(TemporalTarget)
            .where(
                and_(
                    TemporalTarget.service_id.in_(service_ids),
                    TemporalTarget.active.is_(True),
                    or_(TemporalTarget.validity_start.is_(None), TemporalTarget.validity_start <= month_start),
                    or_(TemporalTarget.validity_end.is_(None), TemporalTarget.validity_end >= month_start),
                )
            )
            .order_by(TemporalTarget.service_id.asc(), TemporalTarget.id.asc())
        ).all()
