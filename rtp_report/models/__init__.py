"""ORM model package."""

from rtp_report.models.entities import (
    DailyExecution,
    Service,
    ServiceGroup,
    TargetOverride,
    TemporalTarget,
    Unit,
    WeekdayCapacity,
)

__all__ = [
    "DailyExecution",
    "Service",
    "ServiceGroup",
    "TargetOverride",
    "TemporalTarget",
    "Unit",
    "WeekdayCapacity",
]
