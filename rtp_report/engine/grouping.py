"""Group assembly of per-service results for presentation."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from rtp_report.engine.metrics import MonthlyAggregate
from rtp_report.engine.reconciler import DailyMetric

UNGROUPED_ID = 0


@dataclass(frozen=True, slots=True)
class ServiceResult:
    service_id: int
    service_name: str
    group_id: int | None
    group_name: str | None
    group_color: str | None
    color: str
    aggregate: MonthlyAggregate
    daily_metrics: list[DailyMetric]

    def to_dict(self) -> dict[str, object]:
        return {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "color": self.color,
            "daily_metrics": [item.to_dict() for item in self.daily_metrics],
            "totals": self.aggregate.to_dict(),
        }


@dataclass(slots=True)
class GroupResult:
    group_id: int | None
    group_name: str
    group_color: str
    services: list[ServiceResult] = field(default_factory=list)

    @property
    def display_id(self) -> int:
        """Group id for payloads; the ungrouped bucket (``group_id is None``) is reported as 0."""

        return UNGROUPED_ID if self.group_id is None else self.group_id

    def to_dict(self) -> dict[str, object]:
        return {
            "group_id": self.display_id,
            "group_name": self.group_name,
            "group_color": self.group_color,
            "services": [service.to_dict() for service in self.services],
        }


def assemble_groups(
    services: Iterable[ServiceResult],
    *,
    ungrouped_name: str,
    ungrouped_color: str,
) -> list[GroupResult]:
    """Bucket services by group; groups and members are sorted by display name."""

    buckets: dict[int | None, GroupResult] = {}
    for service in services:
        key = service.group_id
        if key is None:
            name = ungrouped_name
            color = ungrouped_color
        else:
            name = service.group_name or ungrouped_name
            color = service.group_color or ungrouped_color
        bucket = buckets.get(key)
        if bucket is None:
            bucket = GroupResult(group_id=key, group_name=name, group_color=color)
            buckets[key] = bucket
        bucket.services.append(service)

    groups = sorted(
        buckets.values(),
        key=lambda group: (group.group_name.casefold(), group.group_id is None, group.group_id or 0),
    )
    for group in groups:
        group.services.sort(key=lambda service: (service.service_name.casefold(), service.service_id))
    return groups
