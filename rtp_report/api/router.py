"""Top-level API router."""

from fastapi import APIRouter

from rtp_report.api.routes.exports import router as exports_router
from rtp_report.api.routes.health import router as health_router
from rtp_report.api.routes.reports import router as reports_router
from rtp_report.api.routes.units import router as units_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["health"])
api_router.include_router(units_router)
api_router.include_router(reports_router)
api_router.include_router(exports_router)
