from __future__ import annotations

from decimal import Decimal

from rtp_report.engine.metrics import (
    compute_aggregate,
    management_summary,
    productivity_percent,
    unit_productivity,
)
from rtp_report.engine.reconciler import DailyMetric
from rtp_report.engine.targets import ResolvedTarget, TargetSource
from rtp_report.engine.weekdays import Weekday


def _target(value: int, *, source: TargetSource = TargetSource.STATIC, pdt: int = 0, static: int = 0) -> ResolvedTarget:
    return ResolvedTarget(value=value, source=source, pdt_value=pdt, static_value=static)


def _aggregate(service_id: int, executed: int, target: ResolvedTarget, business_days: int = 20):
    series = [
        DailyMetric(day=1, weekday=Weekday.MONDAY, contracted=10, scheduled=executed + 1, executed=executed),
        DailyMetric(day=2, weekday=Weekday.TUESDAY, contracted=10, scheduled=0, executed=0),
    ]
    return compute_aggregate(
        service_id=service_id,
        series=series,
        target=target,
        executed_walkin=0,
        business_days=business_days,
    )


def test_productivity_is_clamped_to_hundred() -> None:
    assert productivity_percent(150, 100) == Decimal("100.00")
    assert productivity_percent(1, 3) == Decimal("33.33")
    assert productivity_percent(0, 10) == Decimal("0.00")


def test_zero_target_yields_zero() -> None:
    assert productivity_percent(500, 0) == Decimal("0.00")


def test_aggregate_totals_and_daily_target() -> None:
    aggregate = _aggregate(7, 40, _target(100, static=100), business_days=23)

    assert aggregate.total_contracted == 20
    assert aggregate.total_scheduled == 41
    assert aggregate.total_executed == 40
    assert aggregate.productivity_percent == Decimal("40.00")
    assert aggregate.daily_target == Decimal("4.35")
    assert aggregate.to_dict()["target_source"] == "static"
    assert aggregate.to_dict()["productivity_percent"] == "40.00"


def test_unit_average_skips_services_without_target() -> None:
    aggregates = [
        _aggregate(1, 50, _target(100)),
        _aggregate(2, 300, _target(100)),
        _aggregate(3, 999, _target(0, source=TargetSource.NONE)),
    ]

    assert unit_productivity(aggregates) == Decimal("75.00")
    assert unit_productivity([]) == Decimal("0.00")
    assert unit_productivity(aggregates[2:]) == Decimal("0.00")


def test_management_summary_is_not_clamped() -> None:
    aggregates = [
        _aggregate(1, 300, _target(200, source=TargetSource.PDT, pdt=200, static=100)),
        _aggregate(2, 55, _target(100, static=50)),
    ]

    summary = management_summary(aggregates)

    assert summary.total_pdt == 200
    assert summary.total_static == 150
    assert summary.total_executed == 355
    assert summary.max_productivity_percent == Decimal("133.33")
    assert summary.productivity_vs_max_percent == Decimal("177.50")


def test_management_summary_without_pdt_is_zero() -> None:
    summary = management_summary([_aggregate(1, 10, _target(0, source=TargetSource.NONE))])

    assert summary.max_productivity_percent == Decimal("0.00")
    assert summary.productivity_vs_max_percent == Decimal("0.00")
