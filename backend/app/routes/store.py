"""
Glee Threads Backend — Store Settings & Content Pages
=======================================================

What:  GET /api/settings, GET /api/pages, GET /api/pages/{slug}
"""

from typing import List

from fastapi import APIRouter

from app.schemas.common import ErrorResponse
from app.schemas.store import ContentPage, PageSummary, SettingsResponse
from app.services.content_service import content_service

router = APIRouter(prefix="/api", tags=["Store"])


@router.get(
    "/settings",
    response_model=SettingsResponse,
    summary="Store-wide settings",
    description="Shipping threshold, shipping fee, GST and hero copy used by the storefront.",
)
async def get_settings() -> SettingsResponse:
    return SettingsResponse(settings=content_service.get_settings())


@router.get("/pages", response_model=List[PageSummary], summary="List content pages")
async def list_pages() -> List[PageSummary]:
    return content_service.list_pages()


@router.get(
    "/pages/{slug}",
    response_model=ContentPage,
    responses={404: {"description": "Page not found", "model": ErrorResponse}},
    summary="Get one content page",
)
async def get_page(slug: str) -> ContentPage:
    return content_service.get_page(slug)
