"""Monthly totals and productivity percentages."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from rtp_report.engine.reconciler import DailyMetric
from rtp_report.engine.targets import ResolvedTarget

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
Q2 = Decimal("0.01")


def _q2(value: Decimal) -> Decimal:
    return value.quantize(Q2)


def _ratio_percent(numerator: int, denominator: int) -> Decimal:
    if denominator <= 0:
        return ZERO
    return _q2(Decimal(numerator) / Decimal(denominator) * HUNDRED)


def productivity_percent(executed: int, target: int) -> Decimal:
    """``executed / target`` as a percentage clamped to [0, 100]; 0 without a target."""

    if target <= 0:
        return ZERO
    return min(HUNDRED, max(ZERO, _ratio_percent(executed, target))).quantize(Q2)


@dataclass(frozen=True, slots=True)
class MonthlyAggregate:
    service_id: int
    total_contracted: int
    total_scheduled: int
    total_executed: int
    total_executed_walkin: int
    target: ResolvedTarget
    productivity_percent: Decimal
    daily_target: Decimal

    @property
    def has_target(self) -> bool:
        return self.target.value > 0

    def to_dict(self) -> dict[str, object]:
        return {
            "contracted": self.total_contracted,
            "scheduled": self.total_scheduled,
            "executed": self.total_executed,
            "executed_walkin": self.total_executed_walkin,
            "static_target": self.target.static_value,
            "pdt_target": self.target.pdt_value,
            "target": self.target.value,
            "target_source": self.target.source.value,
            "productivity_percent": str(self.productivity_percent),
            "daily_target": str(self.daily_target),
        }


def compute_aggregate(
    *,
    service_id: int,
    series: Sequence[DailyMetric],
    target: ResolvedTarget,
    executed_walkin: int,
    business_days: int,
) -> MonthlyAggregate:
    total_executed = sum(item.executed for item in series)
    daily_target = _q2(Decimal(target.value) / Decimal(business_days)) if business_days > 0 else ZERO
    return MonthlyAggregate(
        service_id=service_id,
        total_contracted=sum(item.contracted for item in series),
        total_scheduled=sum(item.scheduled for item in series),
        total_executed=total_executed,
        total_executed_walkin=executed_walkin,
        target=target,
        productivity_percent=productivity_percent(total_executed, target.value),
        daily_target=daily_target,
    )


def unit_productivity(aggregates: Iterable[MonthlyAggregate]) -> Decimal:
    """Mean productivity over services with a positive target; zero-target services are left out."""

    percents = [item.productivity_percent for item in aggregates if item.has_target]
    if not percents:
        return ZERO
    return _q2(sum(percents, ZERO) / Decimal(len(percents)))


@dataclass(frozen=True, slots=True)
class ManagementSummary:
    total_pdt: int
    total_static: int
    total_contracted: int
    total_scheduled: int
    total_executed: int
    max_productivity_percent: Decimal
    productivity_vs_max_percent: Decimal

    def to_dict(self) -> dict[str, object]:
        return {
            "total_pdt": self.total_pdt,
            "total_static": self.total_static,
            "total_contracted": self.total_contracted,
            "total_scheduled": self.total_scheduled,
            "total_executed": self.total_executed,
            "max_productivity_percent": str(self.max_productivity_percent),
            "productivity_vs_max_percent": str(self.productivity_vs_max_percent),
        }


def management_summary(aggregates: Iterable[MonthlyAggregate]) -> ManagementSummary:
    """Unit KPIs for managers: PDT over static contract and execution over PDT (not clamped)."""

    rows = list(aggregates)
    total_pdt = sum(item.target.pdt_value for item in rows)
    total_static = sum(item.target.static_value for item in rows)
    total_executed = sum(item.total_executed for item in rows)
    return ManagementSummary(
        total_pdt=total_pdt,
        total_static=total_static,
        total_contracted=sum(item.total_contracted for item in rows),
        total_scheduled=sum(item.total_scheduled for item in rows),
        total_executed=total_executed,
        max_productivity_percent=_ratio_percent(total_pdt, total_static),
        productivity_vs_max_percent=_ratio_percent(total_executed, total_pdt),
    )
