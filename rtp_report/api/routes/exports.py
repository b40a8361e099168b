"""Export endpoint for productivity report datasets."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from rtp_report.api.dependencies import ReportPeriod, get_data_source, get_report_period
from rtp_report.core.config import Settings, get_settings
from rtp_report.db.dependencies import get_db_session
from rtp_report.engine.loader import DataSource
from rtp_report.services.productivity_service import ProductivityReportService

router = APIRouter(prefix="/exports", tags=["exports"])


@router.get("/productivity")
def export_productivity(
    unit_id: int = Query(..., gt=0),
    format: str = Query(default="xlsx"),
    period: ReportPeriod = Depends(get_report_period),
    db: Session = Depends(get_db_session),
    data_source: DataSource = Depends(get_data_source),
    settings: Settings = Depends(get_settings),
) -> Response:
    service = ProductivityReportService(db, data_source, settings)
    exported = service.export_report(
        unit_id=unit_id,
        month=period.month,
        year=period.year,
        format_name=format,
    )
    return Response(
        content=exported.content,
        media_type=exported.media_type,
        headers={"Content-Disposition": f'attachment; filename="{exported.filename}"'},
    )
