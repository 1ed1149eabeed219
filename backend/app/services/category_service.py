"""
Glee Threads Backend — Category Service
=========================================

What:  Category listing for the storefront and CRUD for the admin panel.
Who:   routes/catalog.py (public) and routes/admin_catalog.py.

Error Handling Strategy:
    SQLAlchemy errors are logged and wrapped in DatabaseError. Business-rule
    failures raise ValidationError / NotFoundError with the exact message
    the admin panel displays.
"""

import logging
import re
from typing import List

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.catalog import Category, Product
from app.schemas.catalog import AdminCategoryOut, CategoryInput, CategoryOut

logger = logging.getLogger(__name__)


def slugify(name: str) -> str:
    """'Oversized Tees!' → 'oversized-tees'."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


class CategoryService:

    async def list_public(self, db: AsyncSession) -> List[CategoryOut]:
        """All categories ordered by name."""
        try:
            result = await db.execute(select(Category).order_by(Category.name))
            return [CategoryOut.model_validate(c) for c in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing categories: %s", str(e))
            raise DatabaseError(context={"operation": "list_categories"}) from e

    async def list_admin(self, db: AsyncSession) -> List[AdminCategoryOut]:
        """
        Categories with the number of products in each.

        Query plan:
            SELECT c.*, COUNT(p.id) FROM categories c
            LEFT JOIN products p ON p.category_id = c.id
            GROUP BY c.id ORDER BY c.name
        """
        try:
            query = (
                select(Category, func.count(Product.id).label("product_count"))
                .outerjoin(Product, Product.category_id == Category.id)
                .group_by(Category.id)
                .order_by(Category.name)
            )
            result = await db.execute(query)
            return [
                AdminCategoryOut(
                    id=category.id,
                    name=category.name,
                    slug=category.slug,
                    description=category.description,
                    image_url=category.image_url,
                    created_at=category.created_at,
                    product_count=product_count or 0,
                )
                for category, product_count in result.all()
            ]
        except SQLAlchemyError as e:
            logger.error("Database error listing admin categories: %s", str(e))
            raise DatabaseError(public_message="Failed to fetch categories") from e

    async def create(self, db: AsyncSession, data: CategoryInput) -> int:
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Category name is required", field="name")

        category = Category(
            name=name,
            slug=slugify(name),
            description=data.description or "",
            image_url=data.image_url or "",
        )
        try:
            db.add(category)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating category '%s': %s", name, str(e))
            raise DatabaseError(public_message="Failed to create category") from e

        logger.info("Category created: id=%s name='%s'", category.id, name)
        return category.id

    async def update(self, db: AsyncSession, category_id: int, data: CategoryInput) -> None:
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Category name is required", field="name")

        try:
            category = await db.get(Category, category_id)
            if category is None:
                raise NotFoundError("Category not found", resource="category", resource_id=category_id)

            category.name = name
            category.slug = slugify(name)
            if data.description is not None:
                category.description = data.description
            if data.image_url is not None:
                category.image_url = data.image_url
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating category %s: %s", category_id, str(e))
            raise DatabaseError(public_message="Failed to update category") from e

    async def delete(self, db: AsyncSession, category_id: int) -> None:
        """Delete an empty category. Categories that still hold products are refused."""
        try:
            count_result = await db.execute(
                select(func.count(Product.id)).where(Product.category_id == category_id)
            )
            if (count_result.scalar() or 0) > 0:
                raise ValidationError(
                    "Cannot delete category with products. Move or delete products first."
                )

            result = await db.execute(delete(Category).where(Category.id == category_id))
            if result.rowcount == 0:
                raise NotFoundError("Category not found", resource="category", resource_id=category_id)
        except SQLAlchemyError as e:
            logger.error("Database error deleting category %s: %s", category_id, str(e))
            raise DatabaseError(public_message="Failed to delete category") from e

        logger.info("Category deleted: id=%s", category_id)


category_service = CategoryService()
