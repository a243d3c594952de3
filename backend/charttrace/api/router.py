"""Master API router — mounts all endpoint routers."""

from __future__ import annotations

from fastapi import APIRouter

from charttrace.api import calibration, export, extract, health

api_router = APIRouter(prefix="/api")

api_router.include_router(health.router)
api_router.include_router(extract.router)
api_router.include_router(calibration.router)
api_router.include_router(export.router)
