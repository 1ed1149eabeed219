"""
Glee Threads Backend — Showcase Models
========================================

What:  Ordered pins of products onto the home page.
       featured_products → the "Featured" grid
       hero_products     → the hero carousel

Both tables have the same shape: one row per product (unique), and an
integer `position` that admins reorder by swapping neighbours.
"""

from sqlalchemy import ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class FeaturedProduct(Base):
    __tablename__ = "featured_products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)


class HeroProduct(Base):
    __tablename__ = "hero_products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
