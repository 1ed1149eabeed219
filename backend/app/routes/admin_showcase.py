"""
Glee Threads Backend — Admin Showcase Routes
==============================================

What:  Ordering of the featured grid and the hero carousel.

    GET /api/admin/featured-products
    PUT /api/admin/featured-products/{product_id}/position   {direction: up|down}
    GET /api/admin/hero-products
    PUT /api/admin/hero-products/{product_id}/position       {direction: up|down}

Pinning and unpinning happen through the product toggles in admin_catalog.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import require_admin
from app.schemas.catalog import FeaturedAdminList, HeroAdminList, PositionMove
from app.schemas.common import ErrorResponse, MessageResponse
from app.services.showcase_service import featured_service, hero_service

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin Showcase"],
    dependencies=[Depends(require_admin)],
    responses={401: {"description": "Missing or invalid admin token", "model": ErrorResponse}},
)

_MOVE_RESPONSES = {
    400: {"description": "Invalid direction", "model": ErrorResponse},
    404: {"description": "Product is not pinned here", "model": ErrorResponse},
}


@router.get("/featured-products", response_model=FeaturedAdminList, summary="List featured products")
async def list_featured(db: AsyncSession = Depends(get_db_session)) -> FeaturedAdminList:
    return FeaturedAdminList(featuredProducts=await featured_service.list_entries(db))


@router.put(
    "/featured-products/{product_id}/position",
    response_model=MessageResponse,
    responses=_MOVE_RESPONSES,
    summary="Move a featured product up or down",
)
async def move_featured(
    product_id: int,
    body: PositionMove,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return MessageResponse(message=await featured_service.move(db, product_id, body.direction))


@router.get("/hero-products", response_model=HeroAdminList, summary="List hero products")
async def list_hero(db: AsyncSession = Depends(get_db_session)) -> HeroAdminList:
    return HeroAdminList(heroProducts=await hero_service.list_entries(db))


@router.put(
    "/hero-products/{product_id}/position",
    response_model=MessageResponse,
    responses=_MOVE_RESPONSES,
    summary="Move a hero product up or down",
)
async def move_hero(
    product_id: int,
    body: PositionMove,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    return MessageResponse(message=await hero_service.move(db, product_id, body.direction))
