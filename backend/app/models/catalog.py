"""
Glee Threads Backend — Catalogue Models
=========================================

What:  ORM models for categories, products, per-size inventory and colours.
Who:   CategoryService, ProductService, ShowcaseService and DashboardService.

Size data lives in two places for historical reasons:
    - products.sizes:      JSON list of size names shown on the product page
    - product_inventory:   one row per (product, size) with a quantity
    Admin writes keep both in sync; public reads prefer the JSON column and
    fall back to the inventory rows.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base


class Category(Base):
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
        comment="URL key used by /api/products?category=",
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default="")
    image_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    products: Mapped[List["Product"]] = relationship(back_populates="category")

    __table_args__ = (Index("idx_categories_slug", "slug"),)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}')>"


class Product(Base):
    """
    A ready-made t-shirt in the catalogue.

    Flags:
        is_active:        hidden from the public API when False
        is_out_of_stock:  still listed, but sizes are reported empty
        is_hero:          mirrors membership in hero_products
    """

    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default="")
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    image_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True, default="")
    category_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("categories.id"), nullable=True
    )
    sizes: Mapped[Optional[list]] = mapped_column(
        JSON,
        nullable=True,
        comment='Size names offered, e.g. ["S", "M", "L"]',
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="1"
    )
    is_out_of_stock: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
    is_hero: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="0"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    category: Mapped[Optional[Category]] = relationship(back_populates="products")

    __table_args__ = (
        Index("idx_products_category", "category_id"),
        Index("idx_products_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Product(id={self.id}, name='{self.name}', price={self.price})>"


class ProductInventory(Base):
    __tablename__ = "product_inventory"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    size: Mapped[str] = mapped_column(String(16), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (Index("idx_inventory_product", "product_id"),)


class ProductColor(Base):
    __tablename__ = "product_colors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    product_id: Mapped[int] = mapped_column(
        ForeignKey("products.id", ondelete="CASCADE"), nullable=False
    )
    color_name: Mapped[str] = mapped_column(String(64), nullable=False)
    color_hex: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
