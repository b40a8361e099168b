"""ORM entities for the productivity reporting schema."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from rtp_report.db.base import Base


class Unit(Base):
    __tablename__ = "unit"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)


class ServiceGroup(Base):
    __tablename__ = "service_group"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    color: Mapped[str | None] = mapped_column(String(16), nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Service(Base):
    __tablename__ = "service"
    __table_args__ = (
        CheckConstraint("static_target >= 0", name="ck_service_static_target_non_negative"),
        Index("ix_service_unit_id", "unit_id"),
        Index("ix_service_group_id", "group_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    unit_id: Mapped[int] = mapped_column(Integer, ForeignKey("unit.id"), nullable=False)
    group_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("service_group.id"), nullable=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    static_target: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class DailyExecution(Base):
    __tablename__ = "daily_execution"
    __table_args__ = (
        CheckConstraint("month >= 1 AND month <= 12", name="ck_daily_execution_month_range"),
        CheckConstraint("day >= 1 AND day <= 31", name="ck_daily_execution_day_range"),
        Index("ix_daily_execution_unit_period", "unit_id", "year", "month"),
        Index("ix_daily_execution_service_period", "service_id", "year", "month"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    unit_id: Mapped[int] = mapped_column(Integer, ForeignKey("unit.id"), nullable=False)
    service_id: Mapped[int] = mapped_column(Integer, ForeignKey("service.id"), nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    month: Mapped[int] = mapped_column(Integer, nullable=False)
    day: Mapped[int] = mapped_column(Integer, nullable=False)
    scheduled_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    executed_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    executed_walkin_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class WeekdayCapacity(Base):
    __tablename__ = "weekday_capacity"
    __table_args__ = (Index("ix_weekday_capacity_unit_service", "unit_id", "service_id"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    unit_id: Mapped[int] = mapped_column(Integer, ForeignKey("unit.id"), nullable=False)
    service_id: Mapped[int] = mapped_column(Integer, ForeignKey("service.id"), nullable=False)
    # Free text, e.g. "segunda-feira-manhã" or "Sábado tarde".
    weekday_label: Mapped[str] = mapped_column(String(64), nullable=False)
    consultations_per_day: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class TargetOverride(Base):
    __tablename__ = "target_override"
    __table_args__ = (
        CheckConstraint("target_value >= 0", name="ck_target_override_value_non_negative"),
        Index("ix_target_override_service_unit", "service_id", "unit_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    service_id: Mapped[int] = mapped_column(Integer, ForeignKey("service.id"), nullable=False)
    unit_id: Mapped[int] = mapped_column(Integer, ForeignKey("unit.id"), nullable=False)
    target_value: Mapped[int] = mapped_column(Integer, nullable=False)
    validity_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    validity_end: Mapped[date | None] = mapped_column(Date, nullable=True)


class TemporalTarget(Base):
    __tablename__ = "temporal_target"
    __table_args__ = (
        CheckConstraint("target_value >= 0", name="ck_temporal_target_value_non_negative"),
        Index("ix_temporal_target_service_active", "service_id", "active"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    service_id: Mapped[int] = mapped_column(Integer, ForeignKey("service.id"), nullable=False)
    target_value: Mapped[int] = mapped_column(Integer, nullable=False)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    validity_start: Mapped[date | None] = mapped_column(Date, nullable=True)
    validity_end: Mapped[date | None] = mapped_column(Date, nullable=True)
