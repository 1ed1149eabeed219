"""
Glee Threads Backend — Catalogue Schemas
==========================================

What:  API contracts for categories, products and the home-page showcases.
Who:   Public storefront routes and the admin catalogue routes.

Money is exposed as a JSON number (float). The storefront computes GST and
shipping client-side from these values and SITE_SETTINGS.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Categories
# ══════════════════════════════════════════════════════════════════════════


class CategoryOut(BaseModel):
    id: int
    name: str
    slug: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None

    model_config = {"from_attributes": True}


class AdminCategoryOut(CategoryOut):
    product_count: int = 0
    created_at: Optional[datetime] = None


class AdminCategoryList(BaseModel):
    categories: List[AdminCategoryOut]


class CategoryInput(BaseModel):
    """Body of POST and PUT /api/admin/categories."""
    name: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class CategoryCreated(BaseModel):
    message: str
    categoryId: int


# ══════════════════════════════════════════════════════════════════════════
# Products: public
# ══════════════════════════════════════════════════════════════════════════


class SizeName(BaseModel):
    size_name: str


class ProductListItem(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    category_slug: Optional[str] = None
    is_out_of_stock: bool = False
    sizes: List[SizeName] = Field(default_factory=list)


class ProductListResponse(BaseModel):
    products: List[ProductListItem]
    total: int
    page: int
    pageSize: int


class ProductImage(BaseModel):
    image_url: Optional[str] = None
    is_primary: bool = True
    display_order: int = 0


class ProductColorOut(BaseModel):
    id: int
    color_name: str
    color_hex: Optional[str] = None

    model_config = {"from_attributes": True}


class ProductDetail(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    is_out_of_stock: bool = False
    sizes: List[SizeName] = Field(default_factory=list)
    images: List[ProductImage] = Field(default_factory=list)
    colors: List[ProductColorOut] = Field(default_factory=list)


# ══════════════════════════════════════════════════════════════════════════
# Products: admin
# ══════════════════════════════════════════════════════════════════════════


class SizeStock(BaseModel):
    size: str
    quantity: int = Field(default=0, ge=0)


class ProductInput(BaseModel):
    """Body of POST and PUT /api/admin/products."""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = None
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    is_active: Optional[bool] = None
    sizes: Optional[List[SizeStock]] = None


class ProductCreated(BaseModel):
    message: str
    productId: int


class AdminProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: float
    image_url: Optional[str] = None
    category_id: Optional[int] = None
    category_name: Optional[str] = None
    is_active: bool = True
    is_out_of_stock: bool = False
    is_hero: bool = False
    is_featured: bool = False
    created_at: Optional[datetime] = None


class AdminProductList(BaseModel):
    products: List[AdminProductOut]


class InventoryRow(BaseModel):
    id: int
    size: str
    quantity: int

    model_config = {"from_attributes": True}


class AdminProductDetail(BaseModel):
    product: AdminProductOut
    inventory: List[InventoryRow]


class FeaturedToggle(BaseModel):
    is_featured: bool = False


class HeroToggle(BaseModel):
    is_hero: bool = False


class StockToggle(BaseModel):
    is_out_of_stock: bool = False


class StockUpdated(BaseModel):
    message: str
    is_out_of_stock: bool


# ══════════════════════════════════════════════════════════════════════════
# Showcases (featured grid, hero carousel)
# ══════════════════════════════════════════════════════════════════════════


class ShowcaseProduct(BaseModel):
    id: int
    name: str
    price: float
    image_url: Optional[str] = None
    category_name: Optional[str] = None


class ShowcaseEntry(BaseModel):
    """A pinned product with its slot, as listed to admins and the hero carousel."""
    id: int
    product_id: int
    position: int
    product: ShowcaseProduct


class FeaturedCard(BaseModel):
    """Flattened featured product for the storefront grid (id is the product id)."""
    id: int
    name: str
    price: float
    image_url: Optional[str] = None
    category_name: Optional[str] = None
    position: int


class FeaturedAdminList(BaseModel):
    featuredProducts: List[ShowcaseEntry]


class HeroAdminList(BaseModel):
    heroProducts: List[ShowcaseEntry]


class PositionMove(BaseModel):
    direction: Optional[str] = Field(default=None, description="'up' or 'down'")
