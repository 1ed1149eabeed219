"""
Glee Threads Backend — Admin Dashboard & Settings Routes
==========================================================

What:  GET /api/admin/dashboard, GET/PUT /api/admin/settings

Store settings are fixed in code (app.constants.SITE_SETTINGS), so the
settings PUT is always refused with 403.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import require_admin
from app.exceptions import PermissionDeniedError
from app.schemas.common import ErrorResponse
from app.schemas.store import DashboardResponse, SettingsResponse
from app.services.content_service import content_service
from app.services.dashboard_service import dashboard_service

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin Store"],
    dependencies=[Depends(require_admin)],
    responses={401: {"description": "Missing or invalid admin token", "model": ErrorResponse}},
)


@router.get("/dashboard", response_model=DashboardResponse, summary="Admin dashboard figures")
async def dashboard(db: AsyncSession = Depends(get_db_session)) -> DashboardResponse:
    return await dashboard_service.build(db)


@router.get("/settings", response_model=SettingsResponse, summary="Store settings")
async def get_settings() -> SettingsResponse:
    return SettingsResponse(settings=content_service.get_settings())


@router.put(
    "/settings",
    responses={403: {"description": "Settings are read-only", "model": ErrorResponse}},
    summary="Update store settings (read-only)",
)
async def update_settings():
    raise PermissionDeniedError("Store settings are read-only")
