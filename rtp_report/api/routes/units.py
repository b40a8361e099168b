"""Reference data endpoints: units, service groups and month names."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rtp_report.core.config import Settings, get_settings
from rtp_report.db.dependencies import get_db_session
from rtp_report.services.productivity_service import ProductivityReportService

router = APIRouter(tags=["reference"])


@router.get("/units")
def list_units(
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> dict[str, list[object]]:
    return {"items": ProductivityReportService(db, settings=settings).list_units()}


@router.get("/service-groups")
def list_service_groups(
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> dict[str, list[object]]:
    return {"items": ProductivityReportService(db, settings=settings).list_active_groups()}


@router.get("/months")
def list_months() -> dict[str, list[object]]:
    return {"items": ProductivityReportService.month_names()}
