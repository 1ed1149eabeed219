"""
Glee Threads Backend — Product Service
========================================

What:  Product listing/detail for the storefront, product CRUD for admins.
Who:   routes/catalog.py and routes/admin_catalog.py.

Size handling:
    products.sizes (JSON list of names) is what the storefront shows. Admin
    writes derive it from the submitted inventory rows, so both stay in sync.
    Reads fall back to product_inventory for rows created before the JSON
    column existed. Out-of-stock products always report no sizes.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.constants import sort_sizes
from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.catalog import Category, Product, ProductColor, ProductInventory
from app.models.showcase import FeaturedProduct, HeroProduct
from app.schemas.catalog import (
    AdminProductDetail,
    AdminProductOut,
    InventoryRow,
    ProductColorOut,
    ProductDetail,
    ProductImage,
    ProductInput,
    ProductListItem,
    ProductListResponse,
    SizeName,
    SizeStock,
)

logger = logging.getLogger(__name__)

SORT_ORDERS = {
    "price-low": Product.price.asc(),
    "price-high": Product.price.desc(),
    "newest": Product.created_at.desc(),
    # No sales counter is tracked; "popular" falls back to newest first.
    "popular": Product.created_at.desc(),
}
DEFAULT_SORT = "newest"


def parse_sizes(raw: Any) -> List[str]:
    """Normalise the JSON `sizes` column (list, JSON string, or NULL) to size names."""
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            # Legacy rows stored a comma-separated string.
            raw = raw.split(",")
    if not isinstance(raw, list):
        return []

    names = []
    for entry in raw:
        if isinstance(entry, dict):
            entry = entry.get("size_name") or entry.get("size") or entry.get("name")
        if entry is None:
            continue
        name = str(entry).strip().upper()
        if name and name not in names:
            names.append(name)
    return names


def normalize_stock(sizes: List[SizeStock]) -> List[SizeStock]:
    """Upper-case size labels, drop blanks, merge duplicates (quantities add up)."""
    merged: Dict[str, int] = {}
    for row in sizes:
        name = row.size.strip().upper()
        if not name:
            continue
        merged[name] = merged.get(name, 0) + row.quantity
    return [SizeStock(size=name, quantity=merged[name]) for name in sort_sizes(list(merged))]


class ProductService:

    # ══════════════════════════════════════════════════════════════════════
    # Storefront
    # ══════════════════════════════════════════════════════════════════════

    async def list_public(
        self,
        db: AsyncSession,
        category: Optional[str] = None,
        style: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        page_size: int = 1000,
        sort: Optional[str] = None,
    ) -> ProductListResponse:
        """
        Active products, filtered and paginated.

        Filters:
            category: exact category slug
            style:    category name prefix (e.g. "Oversized")
            search:   substring of product name or description
        """
        filters = [Product.is_active.is_(True)]
        if category:
            filters.append(Category.slug == category)
        if style:
            filters.append(Category.name.like(f"{style}%"))
        if search:
            pattern = f"%{search.strip()}%"
            filters.append(or_(Product.name.like(pattern), Product.description.like(pattern)))

        order_by = SORT_ORDERS.get(sort or DEFAULT_SORT, SORT_ORDERS[DEFAULT_SORT])

        try:
            count_query = (
                select(func.count(Product.id))
                .select_from(Product)
                .outerjoin(Category, Product.category_id == Category.id)
                .where(*filters)
            )
            total = (await db.execute(count_query)).scalar() or 0

            query = (
                select(Product, Category.name, Category.slug)
                .outerjoin(Category, Product.category_id == Category.id)
                .where(*filters)
                .order_by(order_by, Product.id.desc())
                .offset((page - 1) * page_size)
                .limit(page_size)
            )
            rows = (await db.execute(query)).all()
        except SQLAlchemyError as e:
            logger.error("Database error listing products: %s", str(e))
            raise DatabaseError(context={"operation": "list_products"}) from e

        products = [
            ProductListItem(
                id=product.id,
                name=product.name,
                description=product.description,
                price=product.price,
                image_url=product.image_url,
                category_id=product.category_id,
                category_name=category_name,
                category_slug=category_slug,
                is_out_of_stock=bool(product.is_out_of_stock),
                sizes=[]
                if product.is_out_of_stock
                else [SizeName(size_name=s) for s in parse_sizes(product.sizes)],
            )
            for product, category_name, category_slug in rows
        ]
        return ProductListResponse(products=products, total=total, page=page, pageSize=page_size)

    async def get_public(self, db: AsyncSession, product_id: int) -> ProductDetail:
        """Full product page data. Inactive or missing products are 404."""
        try:
            result = await db.execute(
                select(Product, Category.name)
                .outerjoin(Category, Product.category_id == Category.id)
                .where(Product.id == product_id, Product.is_active.is_(True))
            )
            row = result.first()
        except SQLAlchemyError as e:
            logger.error("Database error fetching product %s: %s", product_id, str(e))
            raise DatabaseError(context={"product_id": product_id}) from e

        if row is None:
            raise NotFoundError("Product not found", resource="product", resource_id=product_id)
        product, category_name = row

        sizes: List[str] = []
        if not product.is_out_of_stock:
            sizes = parse_sizes(product.sizes)
            if not sizes:
                sizes = await self._sizes_from_inventory(db, product_id)

        return ProductDetail(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            image_url=product.image_url,
            category_id=product.category_id,
            category_name=category_name,
            is_out_of_stock=bool(product.is_out_of_stock),
            sizes=[SizeName(size_name=s) for s in sizes],
            images=[ProductImage(image_url=product.image_url)] if product.image_url else [],
            colors=await self._colors(db, product_id),
        )

    async def _sizes_from_inventory(self, db: AsyncSession, product_id: int) -> List[str]:
        try:
            result = await db.execute(
                select(ProductInventory.size).where(
                    ProductInventory.product_id == product_id,
                    ProductInventory.quantity > 0,
                )
            )
            return sort_sizes(list(dict.fromkeys(result.scalars().all())))
        except SQLAlchemyError as e:
            logger.error("Database error reading inventory for product %s: %s", product_id, str(e))
            raise DatabaseError(context={"product_id": product_id}) from e

    async def _colors(self, db: AsyncSession, product_id: int) -> List[ProductColorOut]:
        # Colours are decorative; the product page still renders without them.
        try:
            result = await db.execute(
                select(ProductColor)
                .where(ProductColor.product_id == product_id)
                .order_by(ProductColor.id)
            )
            return [ProductColorOut.model_validate(c) for c in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.warning("Could not load colours for product %s: %s", product_id, str(e))
            return []

    # ══════════════════════════════════════════════════════════════════════
    # Admin
    # ══════════════════════════════════════════════════════════════════════

    async def list_admin(self, db: AsyncSession) -> List[AdminProductOut]:
        try:
            result = await db.execute(
                select(Product, Category.name, FeaturedProduct.id)
                .outerjoin(Category, Product.category_id == Category.id)
                .outerjoin(FeaturedProduct, FeaturedProduct.product_id == Product.id)
                .order_by(Product.created_at.desc(), Product.id.desc())
            )
            return [
                self._admin_out(product, category_name, featured_id is not None)
                for product, category_name, featured_id in result.all()
            ]
        except SQLAlchemyError as e:
            logger.error("Database error listing admin products: %s", str(e))
            raise DatabaseError(public_message="Failed to fetch products") from e

    async def get_admin(self, db: AsyncSession, product_id: int) -> AdminProductDetail:
        try:
            result = await db.execute(
                select(Product, Category.name, FeaturedProduct.id)
                .outerjoin(Category, Product.category_id == Category.id)
                .outerjoin(FeaturedProduct, FeaturedProduct.product_id == Product.id)
                .where(Product.id == product_id)
            )
            row = result.first()
            if row is None:
                raise NotFoundError("Product not found", resource="product", resource_id=product_id)
            product, category_name, featured_id = row

            inventory = await db.execute(
                select(ProductInventory)
                .where(ProductInventory.product_id == product_id)
                .order_by(ProductInventory.id)
            )
        except SQLAlchemyError as e:
            logger.error("Database error fetching admin product %s: %s", product_id, str(e))
            raise DatabaseError(public_message="Failed to fetch product") from e

        return AdminProductDetail(
            product=self._admin_out(product, category_name, featured_id is not None),
            inventory=[InventoryRow.model_validate(i) for i in inventory.scalars().all()],
        )

    async def create(self, db: AsyncSession, data: ProductInput) -> int:
        name = (data.name or "").strip()
        if not name or data.price is None or not data.category_id:
            raise ValidationError("Name, price, and category are required")
        if data.price < 0:
            raise ValidationError("Price cannot be negative", field="price")

        stock = normalize_stock(data.sizes or [])
        product = Product(
            name=name,
            description=data.description or "",
            price=data.price,
            image_url=data.image_url or "",
            category_id=data.category_id,
            is_active=True if data.is_active is None else data.is_active,
            sizes=[row.size for row in stock],
        )
        try:
            db.add(product)
            await db.flush()
            for row in stock:
                db.add(ProductInventory(product_id=product.id, size=row.size, quantity=row.quantity))
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating product '%s': %s", name, str(e))
            raise DatabaseError(public_message="Failed to create product") from e

        logger.info("Product created: id=%s name='%s' sizes=%s", product.id, name, product.sizes)
        return product.id

    async def update(self, db: AsyncSession, product_id: int, data: ProductInput) -> None:
        """Apply the fields present in the body; `sizes`, when sent, replaces the inventory."""
        changes = data.model_dump(exclude_unset=True, exclude={"sizes"})
        if "name" in changes and not (changes["name"] or "").strip():
            raise ValidationError("Product name cannot be empty", field="name")
        if changes.get("price") is not None and changes["price"] < 0:
            raise ValidationError("Price cannot be negative", field="price")

        try:
            product = await db.get(Product, product_id)
            if product is None:
                raise NotFoundError("Product not found", resource="product", resource_id=product_id)

            for field, value in changes.items():
                if value is None and field in {"name", "price", "category_id", "is_active"}:
                    continue
                setattr(product, field, value.strip() if field == "name" else value)

            if data.sizes is not None:
                stock = normalize_stock(data.sizes)
                await db.execute(
                    delete(ProductInventory).where(ProductInventory.product_id == product_id)
                )
                for row in stock:
                    db.add(ProductInventory(product_id=product_id, size=row.size, quantity=row.quantity))
                product.sizes = [row.size for row in stock]

            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating product %s: %s", product_id, str(e))
            raise DatabaseError(public_message="Failed to update product") from e

    async def delete(self, db: AsyncSession, product_id: int) -> None:
        """Remove a product and every row that pins or describes it."""
        try:
            product = await db.get(Product, product_id)
            if product is None:
                raise NotFoundError("Product not found", resource="product", resource_id=product_id)

            for model in (FeaturedProduct, HeroProduct, ProductInventory, ProductColor):
                await db.execute(delete(model).where(model.product_id == product_id))
            await db.execute(delete(Product).where(Product.id == product_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting product %s: %s", product_id, str(e))
            raise DatabaseError(public_message="Failed to delete product") from e

        logger.info("Product deleted: id=%s", product_id)

    async def set_out_of_stock(self, db: AsyncSession, product_id: int, is_out_of_stock: bool) -> None:
        try:
            result = await db.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(is_out_of_stock=is_out_of_stock)
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating stock for product %s: %s", product_id, str(e))
            raise DatabaseError(public_message="Failed to update stock status") from e

        if result.rowcount == 0:
            raise NotFoundError("Product not found", resource="product", resource_id=product_id)

    @staticmethod
    def _admin_out(product: Product, category_name: Optional[str], is_featured: bool) -> AdminProductOut:
        return AdminProductOut(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            image_url=product.image_url,
            category_id=product.category_id,
            category_name=category_name,
            is_active=bool(product.is_active),
            is_out_of_stock=bool(product.is_out_of_stock),
            is_hero=bool(product.is_hero),
            is_featured=is_featured,
            created_at=product.created_at,
        )


product_service = ProductService()
