"""initial productivity reporting schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "unit",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
    )

    op.create_table(
        "service_group",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=1000), nullable=True),
        sa.Column("color", sa.String(length=16), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
    )

    op.create_table(
        "service",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("unit.id"), nullable=False),
        sa.Column("group_id", sa.Integer(), sa.ForeignKey("service_group.id"), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("static_target", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.CheckConstraint("static_target >= 0", name="ck_service_static_target_non_negative"),
    )
    op.create_index("ix_service_unit_id", "service", ["unit_id"])
    op.create_index("ix_service_group_id", "service", ["group_id"])

    op.create_table(
        "daily_execution",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("unit.id"), nullable=False),
        sa.Column("service_id", sa.Integer(), sa.ForeignKey("service.id"), nullable=False),
        sa.Column("year", sa.Integer(), nullable=False),
        sa.Column("month", sa.Integer(), nullable=False),
        sa.Column("day", sa.Integer(), nullable=False),
        sa.Column("scheduled_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("executed_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("executed_walkin_count", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.CheckConstraint("month >= 1 AND month <= 12", name="ck_daily_execution_month_range"),
        sa.CheckConstraint("day >= 1 AND day <= 31", name="ck_daily_execution_day_range"),
    )
    op.create_index("ix_daily_execution_unit_period", "daily_execution", ["unit_id", "year", "month"])
    op.create_index("ix_daily_execution_service_period", "daily_execution", ["service_id", "year", "month"])

    op.create_table(
        "weekday_capacity",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("unit.id"), nullable=False),
        sa.Column("service_id", sa.Integer(), sa.ForeignKey("service.id"), nullable=False),
        sa.Column("weekday_label", sa.String(length=64), nullable=False),
        sa.Column("consultations_per_day", sa.Integer(), nullable=False, server_default=sa.text("0")),
    )
    op.create_index("ix_weekday_capacity_unit_service", "weekday_capacity", ["unit_id", "service_id"])

    op.create_table(
        "target_override",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("service_id", sa.Integer(), sa.ForeignKey("service.id"), nullable=False),
        sa.Column("unit_id", sa.Integer(), sa.ForeignKey("unit.id"), nullable=False),
        sa.Column("target_value", sa.Integer(), nullable=False),
        sa.Column("validity_start", sa.Date(), nullable=True),
        sa.Column("validity_end", sa.Date(), nullable=True),
        sa.CheckConstraint("target_value >= 0", name="ck_target_override_value_non_negative"),
    )
    op.create_index("ix_target_override_service_unit", "target_override", ["service_id", "unit_id"])

    op.create_table(
        "temporal_target",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True, nullable=False),
        sa.Column("service_id", sa.Integer(), sa.ForeignKey("service.id"), nullable=False),
        sa.Column("target_value", sa.Integer(), nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("validity_start", sa.Date(), nullable=True),
        sa.Column("validity_end", sa.Date(), nullable=True),
        sa.CheckConstraint("target_value >= 0", name="ck_temporal_target_value_non_negative"),
    )
    op.create_index("ix_temporal_target_service_active", "temporal_target", ["service_id", "active"])


def downgrade() -> None:
    op.drop_index("ix_temporal_target_service_active", table_name="temporal_target")
    op.drop_table("temporal_target")

    op.drop_index("ix_target_override_service_unit", table_name="target_override")
    op.drop_table("target_override")

    op.drop_index("ix_weekday_capacity_unit_service", table_name="weekday_capacity")
    op.drop_table("weekday_capacity")

    op.drop_index("ix_daily_execution_service_period", table_name="daily_execution")
    op.drop_index("ix_daily_execution_unit_period", table_name="daily_execution")
    op.drop_table("daily_execution")

    op.drop_index("ix_service_group_id", table_name="service")
    op.drop_index("ix_service_unit_id", table_name="service")
    op.drop_table("service")

    op.drop_table("service_group")
    op.drop_table("unit")
