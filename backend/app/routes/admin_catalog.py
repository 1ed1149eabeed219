"""
Glee Threads Backend — Admin Catalogue Routes
===============================================

What:  Category and product management for the admin panel, plus the
       per-product featured / hero / stock toggles.

    GET    /api/admin/categories
    POST   /api/admin/categories
    PUT    /api/admin/categories/{id}
    DELETE /api/admin/categories/{id}

    GET    /api/admin/products
    POST   /api/admin/products
    GET    /api/admin/products/{id}
    PUT    /api/admin/products/{id}
    DELETE /api/admin/products/{id}
    PUT    /api/admin/products/{id}/featured   {is_featured}
    PUT    /api/admin/products/{id}/hero       {is_hero}
    PUT    /api/admin/products/{id}/stock      {is_out_of_stock}

Every route requires an admin token (router-level dependency).
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import require_admin
from app.schemas.catalog import (
    AdminCategoryList,
    AdminProductDetail,
    AdminProductList,
    CategoryCreated,
    CategoryInput,
    FeaturedToggle,
    HeroToggle,
    ProductCreated,
    ProductInput,
    StockToggle,
    StockUpdated,
)
from app.schemas.common import ErrorResponse, MessageResponse
from app.services.category_service import category_service
from app.services.product_service import product_service
from app.services.showcase_service import featured_service, hero_service

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin Catalogue"],
    dependencies=[Depends(require_admin)],
    responses={401: {"description": "Missing or invalid admin token", "model": ErrorResponse}},
)

_NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}
_BAD_INPUT = {400: {"description": "Missing or invalid fields", "model": ErrorResponse}}


# ── Categories ────────────────────────────────────────────────────────────


@router.get("/categories", response_model=AdminCategoryList, summary="List categories with product counts")
async def list_categories(db: AsyncSession = Depends(get_db_session)) -> AdminCategoryList:
    return AdminCategoryList(categories=await category_service.list_admin(db))


@router.post(
    "/categories",
    response_model=CategoryCreated,
    status_code=201,
    responses=_BAD_INPUT,
    summary="Create a category",
)
async def create_category(
    body: CategoryInput,
    db: AsyncSession = Depends(get_db_session),
) -> CategoryCreated:
    category_id = await category_service.create(db, body)
    return CategoryCreated(message="Category created successfully", categoryId=category_id)


@router.put(
    "/categories/{category_id}",
    response_model=MessageResponse,
    responses={**_BAD_INPUT, **_NOT_FOUND},
    summary="Update a category",
)
async def update_category(
    category_id: int,
    body: CategoryInput,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await category_service.update(db, category_id, body)
    return MessageResponse(message="Category updated successfully")


@router.delete(
    "/categories/{category_id}",
    response_model=MessageResponse,
    responses={400: {"description": "Category still has products", "model": ErrorResponse}, **_NOT_FOUND},
    summary="Delete an empty category",
)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await category_service.delete(db, category_id)
    return MessageResponse(message="Category deleted successfully")


# ── Products ──────────────────────────────────────────────────────────────


@router.get("/products", response_model=AdminProductList, summary="List all products")
async def list_products(db: AsyncSession = Depends(get_db_session)) -> AdminProductList:
    return AdminProductList(products=await product_service.list_admin(db))


@router.post(
    "/products",
    response_model=ProductCreated,
    status_code=201,
    responses=_BAD_INPUT,
    summary="Create a product",
    description="`sizes: [{size, quantity}]` seeds the inventory and the product's size list.",
)
async def create_product(
    body: ProductInput,
    db: AsyncSession = Depends(get_db_session),
) -> ProductCreated:
    product_id = await product_service.create(db, body)
    return ProductCreated(message="Product created successfully", productId=product_id)


@router.get(
    "/products/{product_id}",
    response_model=AdminProductDetail,
    responses=_NOT_FOUND,
    summary="Get a product with its inventory",
)
async def get_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> AdminProductDetail:
    return await product_service.get_admin(db, product_id)


@router.put(
    "/products/{product_id}",
    response_model=MessageResponse,
    responses={**_BAD_INPUT, **_NOT_FOUND},
    summary="Update a product",
)
async def update_product(
    product_id: int,
    body: ProductInput,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await product_service.update(db, product_id, body)
    return MessageResponse(message="Product updated successfully")


@router.delete(
    "/products/{product_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a product",
)
async def delete_product(
    product_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await product_service.delete(db, product_id)
    return MessageResponse(message="Product deleted successfully")


# ── Toggles ───────────────────────────────────────────────────────────────


@router.put(
    "/products/{product_id}/featured",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Add to or remove from the featured grid",
)
async def toggle_featured(
    product_id: int,
    body: FeaturedToggle,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await featured_service.set_pinned(db, product_id, body.is_featured)
    return MessageResponse(
        message="Product added to featured" if body.is_featured else "Product removed from featured"
    )


@router.put(
    "/products/{product_id}/hero",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Add to or remove from the hero carousel",
)
async def toggle_hero(
    product_id: int,
    body: HeroToggle,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await hero_service.set_pinned(db, product_id, body.is_hero)
    return MessageResponse(
        message="Product added to hero section" if body.is_hero else "Product removed from hero section"
    )


@router.put(
    "/products/{product_id}/stock",
    response_model=StockUpdated,
    responses=_NOT_FOUND,
    summary="Mark a product in or out of stock",
)
async def toggle_stock(
    product_id: int,
    body: StockToggle,
    db: AsyncSession = Depends(get_db_session),
) -> StockUpdated:
    await product_service.set_out_of_stock(db, product_id, body.is_out_of_stock)
    return StockUpdated(message="Stock status updated", is_out_of_stock=body.is_out_of_stock)
