"""
Glee Threads Backend — Home Page Showcase Routes
==================================================

What:  GET /api/featured-products (home grid) and GET /api/hero-products
       (hero carousel).

The two fail differently on a database error: the featured grid reports
500 so the page can show its retry state, while the carousel answers an
empty list and the home page falls back to its static banner.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import DatabaseError
from app.schemas.catalog import FeaturedCard, ShowcaseEntry
from app.schemas.common import ErrorResponse
from app.services.showcase_service import featured_service, hero_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Showcase"])


@router.get(
    "/featured-products",
    response_model=List[FeaturedCard],
    responses={500: {"description": "Failed to fetch featured products", "model": ErrorResponse}},
    summary="Featured products for the home grid",
)
async def list_featured(db: AsyncSession = Depends(get_db_session)) -> List[FeaturedCard]:
    entries = await featured_service.list_entries(db)
    return [
        FeaturedCard(
            id=entry.product.id,
            name=entry.product.name,
            price=entry.product.price,
            image_url=entry.product.image_url,
            category_name=entry.product.category_name,
            position=entry.position,
        )
        for entry in entries
    ]


@router.get(
    "/hero-products",
    response_model=List[ShowcaseEntry],
    summary="Products pinned to the hero carousel",
)
async def list_hero(db: AsyncSession = Depends(get_db_session)) -> List[ShowcaseEntry]:
    try:
        return await hero_service.list_entries(db)
    except DatabaseError:
        return []
