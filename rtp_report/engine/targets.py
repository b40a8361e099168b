"""Effective monthly target resolution for a service."""

from __future__ import annotations

import enum
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Protocol


class TargetSource(str, enum.Enum):
    PDT = "pdt"
    TEMPORAL = "temporal"
    STATIC = "static"
    NONE = "none"


class DatedTarget(Protocol):
    id: int
    target_value: int
    validity_start: date | None
    validity_end: date | None


@dataclass(frozen=True, slots=True)
class ResolvedTarget:
    value: int
    source: TargetSource
    pdt_value: int
    static_value: int


def covers(row: DatedTarget, month_start: date) -> bool:
    """Whether ``[validity_start, validity_end]`` contains ``month_start``; null bounds are open."""

    if row.validity_start is not None and month_start < row.validity_start:
        return False
    if row.validity_end is not None and month_start > row.validity_end:
        return False
    return True


def pick_active(rows: Iterable[DatedTarget], month_start: date) -> DatedTarget | None:
    """Latest-starting covering row wins; ties go to the open or later end, then the higher id."""

    candidates = [row for row in rows if covers(row, month_start)]
    if not candidates:
        return None
    candidates.sort(
        key=lambda row: (
            row.validity_start or date.min,
            row.validity_end or date.max,
            row.id,
        ),
        reverse=True,
    )
    return candidates[0]


def resolve_target(
    *,
    static_value: int | None,
    overrides: Iterable[DatedTarget],
    temporal_targets: Iterable[DatedTarget],
    month_start: date,
) -> ResolvedTarget:
    """Resolve the target used as productivity denominator.

    Precedence: PDT override active on ``month_start``, then an active temporal
    target, then the static contracted value. With none of them the target is 0.
    """

    static = max(0, int(static_value or 0))
    override = pick_active(overrides, month_start)
    pdt_value = max(0, int(override.target_value)) if override is not None else 0
    if override is not None:
        return ResolvedTarget(value=pdt_value, source=TargetSource.PDT, pdt_value=pdt_value, static_value=static)

    temporal = pick_active(temporal_targets, month_start)
    if temporal is not None:
        return ResolvedTarget(
            value=max(0, int(temporal.target_value)),
            source=TargetSource.TEMPORAL,
            pdt_value=0,
            static_value=static,
        )

    if static > 0:
        return ResolvedTarget(value=static, source=TargetSource.STATIC, pdt_value=0, static_value=static)
    return ResolvedTarget(value=0, source=TargetSource.NONE, pdt_value=0, static_value=0)
