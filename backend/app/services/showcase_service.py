"""
Glee Threads Backend — Showcase Service (Featured Grid & Hero Carousel)
=========================================================================

What:  Pin/unpin products on the home page and reorder the pins.
Who:   Public featured/hero routes and the admin product/showcase routes.
How:   One class parameterized by the pin table; two singletons:
       featured_service (featured_products) and hero_service (hero_products).

Ordering:
    Pins are ordered by (position, id). Moving a pin normalizes positions to
    0..n-1 first and then swaps with the neighbour, so duplicate positions
    left by older tooling never make a move a no-op.
"""

import logging
from typing import List, Optional, Type, Union

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.catalog import Category, Product
from app.models.showcase import FeaturedProduct, HeroProduct
from app.schemas.catalog import ShowcaseEntry, ShowcaseProduct

logger = logging.getLogger(__name__)

PinModel = Type[Union[FeaturedProduct, HeroProduct]]

DIRECTIONS = {"up": -1, "down": 1}


class ShowcaseService:
    """
    Args:
        model:     FeaturedProduct or HeroProduct
        label:     Human name used in messages ("featured", "hero section")
        flag_column: Product column mirrored on pin/unpin (hero only)
    """

    def __init__(self, model: PinModel, label: str, flag_column: Optional[str] = None):
        self.model = model
        self.label = label
        self.flag_column = flag_column

    async def list_entries(self, db: AsyncSession) -> List[ShowcaseEntry]:
        model = self.model
        query = (
            select(model, Product, Category.name)
            .join(Product, model.product_id == Product.id)
            .outerjoin(Category, Product.category_id == Category.id)
            .order_by(model.position, model.id)
        )

        try:
            rows = (await db.execute(query)).all()
        except SQLAlchemyError as e:
            logger.error("Database error listing %s products: %s", self.label, str(e))
            raise DatabaseError(public_message=f"Failed to fetch {self.label} products") from e

        return [
            ShowcaseEntry(
                id=pin.id,
                product_id=pin.product_id,
                position=pin.position,
                product=ShowcaseProduct(
                    id=product.id,
                    name=product.name,
                    price=product.price,
                    image_url=product.image_url,
                    category_name=category_name,
                ),
            )
            for pin, product, category_name in rows
        ]

    async def set_pinned(self, db: AsyncSession, product_id: int, pinned: bool) -> None:
        """Append the product after the last pin, or remove its pin. Idempotent."""
        model = self.model
        try:
            product = await db.get(Product, product_id)
            if product is None:
                raise NotFoundError("Product not found", resource="product", resource_id=product_id)

            existing = (
                await db.execute(select(model).where(model.product_id == product_id))
            ).scalar_one_or_none()

            if pinned and existing is None:
                max_position = (await db.execute(select(func.max(model.position)))).scalar()
                next_position = 0 if max_position is None else max_position + 1
                db.add(model(product_id=product_id, position=next_position))
            elif not pinned and existing is not None:
                await db.execute(delete(model).where(model.product_id == product_id))

            if self.flag_column:
                await db.execute(
                    update(Product)
                    .where(Product.id == product_id)
                    .values({self.flag_column: pinned})
                )
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating %s pin for product %s: %s", self.label, product_id, str(e))
            raise DatabaseError(public_message=f"Failed to update {self.label}") from e

        logger.info("Product %s %s %s", product_id, "added to" if pinned else "removed from", self.label)

    async def move(self, db: AsyncSession, product_id: int, direction: Optional[str]) -> str:
        """
        Swap a pin with its neighbour. Returns the message for the response.

        Raises:
            ValidationError: direction is not "up" or "down"
            NotFoundError:   the product is not pinned here
        """
        step = DIRECTIONS.get((direction or "").lower())
        if step is None:
            raise ValidationError("Invalid direction", field="direction")

        model = self.model
        try:
            pins = list(
                (await db.execute(select(model).order_by(model.position, model.id))).scalars().all()
            )
            index = next((i for i, pin in enumerate(pins) if pin.product_id == product_id), None)
            if index is None:
                raise NotFoundError(
                    f"Product not found in {self.label}", resource=self.label, resource_id=product_id
                )

            target = index + step
            if target < 0:
                return "Already at the top"
            if target >= len(pins):
                return "Already at the bottom"

            for position, pin in enumerate(pins):
                pin.position = position
            pins[index].position, pins[target].position = target, index
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error moving %s pin %s: %s", self.label, product_id, str(e))
            raise DatabaseError(public_message="Failed to update position") from e

        return "Position updated successfully"


featured_service = ShowcaseService(FeaturedProduct, "featured")
hero_service = ShowcaseService(HeroProduct, "hero section", flag_column="is_hero")
