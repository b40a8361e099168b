"""Request-scoped dependencies for report endpoints."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from zoneinfo import ZoneInfo

from fastapi import Depends, Query
from sqlalchemy.orm import Session

from rtp_report.core.config import Settings, get_settings
from rtp_report.db.dependencies import get_db_session
from rtp_report.engine.loader import DataSource, RealStore, SyntheticStore


@dataclass(frozen=True)
class ReportPeriod:
    month: int
    year: int


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def normalize_report_period(
    month: str | None,
    year: str | None,
    *,
    settings: Settings,
    now: datetime | None = None,
) -> ReportPeriod:
    """Replace missing or out-of-range month/year with the current period."""

    current = now or datetime.now(ZoneInfo(settings.report_timezone))
    parsed_month = _parse_int(month)
    parsed_year = _parse_int(year)
    if parsed_month is None or not 1 <= parsed_month <= 12:
        parsed_month = current.month
    if parsed_year is None or not settings.report_min_year <= parsed_year <= settings.report_max_year:
        parsed_year = current.year
    return ReportPeriod(month=parsed_month, year=parsed_year)


def get_report_period(
    month: str | None = Query(default=None),
    year: str | None = Query(default=None),
    settings: Settings = Depends(get_settings),
) -> ReportPeriod:
    return normalize_report_period(month, year, settings=settings)


def get_data_source(
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> DataSource:
    if settings.data_source == "synthetic":
        return SyntheticStore()
    return RealStore(db)
