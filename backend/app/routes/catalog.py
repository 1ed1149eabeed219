"""
Glee Threads Backend — Public Catalogue Routes
================================================

What:  GET /api/categories, GET /api/products, GET /api/products/{id}
Who:   Storefront shop pages, navigation menu and product page.

The list endpoints keep the shop rendering when the database hiccups: a
DatabaseError is logged by the service and answered with an empty list
rather than a 500, so the page shows "no products" instead of an error
screen.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import DatabaseError
from app.schemas.catalog import CategoryOut, ProductDetail, ProductListResponse
from app.schemas.common import ErrorResponse
from app.services.category_service import category_service
from app.services.product_service import product_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Catalogue"])


@router.get(
    "/categories",
    response_model=List[CategoryOut],
    summary="List categories",
    description="All categories ordered by name. Returns [] if the catalogue is unavailable.",
)
async def list_categories(db: AsyncSession = Depends(get_db_session)) -> List[CategoryOut]:
    try:
        return await category_service.list_public(db)
    except DatabaseError:
        return []


@router.get(
    "/products",
    response_model=ProductListResponse,
    summary="List active products",
    description=(
        "Active products with optional category slug, style (category name prefix) and "
        "free-text search filters. Sort by price-low, price-high, newest or popular."
    ),
)
async def list_products(
    category: Optional[str] = Query(default=None, description="Category slug"),
    style: Optional[str] = Query(default=None, description="Category name prefix"),
    search: Optional[str] = Query(default=None, description="Matched against name and description"),
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=1000, ge=1, le=1000, alias="pageSize"),
    sort: Optional[str] = Query(default="newest", description="price-low | price-high | newest | popular"),
    db: AsyncSession = Depends(get_db_session),
) -> ProductListResponse:
    try:
        return await product_service.list_public(
            db,
            category=category,
            style=style,
            search=search,
            page=page,
            page_size=page_size,
            sort=sort,
        )
    except DatabaseError:
        return ProductListResponse(products=[], total=0, page=page, pageSize=page_size)


@router.get(
    "/products/{product_id}",
    response_model=ProductDetail,
    responses={404: {"description": "Unknown or inactive product", "model": ErrorResponse}},
    summary="Get one product",
)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> ProductDetail:
    return await product_service.get_public(db, product_id)
