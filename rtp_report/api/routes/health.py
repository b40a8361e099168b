"""Liveness and readiness endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from rtp_report.core.config import Settings, get_settings
from rtp_report.core.errors import StoreUnavailable
from rtp_report.db.dependencies import get_db_session

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
def health() -> dict[str, str]:
    """Simple liveness endpoint."""

    return {"status": "ok"}


@router.get("/health/ready")
def readiness(
    db: Session = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> dict[str, str]:
    """Report whether the configured data source can answer."""

    if settings.data_source == "synthetic":
        return {"status": "ok", "data_source": "synthetic"}
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.exception("Readiness probe failed.")
        raise StoreUnavailable("Database did not answer the readiness probe.") from exc
    return {"status": "ok", "data_source": "real"}
