"""Monthly productivity report endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Path
from sqlalchemy.orm import Session

from rtp_report.api.dependencies import ReportPeriod, get_data_source, get_report_period
from rtp_report.core.config import Settings, get_settings
from rtp_report.db.dependencies import get_db_session
from rtp_report.engine.loader import DataSource
from rtp_report.services.productivity_service import ProductivityReportService

router = APIRouter(prefix="/units/{unit_id}", tags=["reports"])


def _service(db: Session, data_source: DataSource, settings: Settings) -> ProductivityReportService:
    return ProductivityReportService(db, data_source, settings)


@router.get("/productivity")
def get_unit_productivity(
    unit_id: int = Path(gt=0),
    period: ReportPeriod = Depends(get_report_period),
    db: Session = Depends(get_db_session),
    data_source: DataSource = Depends(get_data_source),
    settings: Settings = Depends(get_settings),
) -> dict[str, object]:
    service = _service(db, data_source, settings)
    return service.unit_report(unit_id=unit_id, month=period.month, year=period.year)


@router.get("/management")
def get_unit_management(
    unit_id: int = Path(gt=0),
    period: ReportPeriod = Depends(get_report_period),
    db: Session = Depends(get_db_session),
    data_source: DataSource = Depends(get_data_source),
    settings: Settings = Depends(get_settings),
) -> dict[str, object]:
    service = _service(db, data_source, settings)
    return service.management_report(unit_id=unit_id, month=period.month, year=period.year)


@router.get("/services/{service_id}/daily")
def get_service_daily(
    unit_id: int = Path(gt=0),
    service_id: int = Path(gt=0),
    period: ReportPeriod = Depends(get_report_period),
    db: Session = Depends(get_db_session),
    data_source: DataSource = Depends(get_data_source),
    settings: Settings = Depends(get_settings),
) -> dict[str, object]:
    service = _service(db, data_source, settings)
    return service.service_daily(
        unit_id=unit_id,
        service_id=service_id,
        month=period.month,
        year=period.year,
    )
