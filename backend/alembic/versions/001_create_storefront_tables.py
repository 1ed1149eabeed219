"""Create storefront tables

Revision ID: 001
Revises: None
Create Date: 2025-01-10 00:00:00.000000+00:00

What:  Creates every table the storefront API reads and writes.
How:   Plain portable types (MySQL is the production target); JSON columns
       for product sizes and order-item custom options.

Tables:
    users, categories, products, product_inventory, product_colors,
    featured_products, hero_products, coupons, subscribes,
    orders, order_items, custom_orders

Rollback: downgrade() drops all tables in reverse dependency order.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")
    )


def upgrade() -> None:
    # ── Accounts ──────────────────────────────────────────────────────────
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False, comment="bcrypt hash"),
        sa.Column("role", sa.String(32), nullable=False, server_default="user"),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="uq_users_email"),
    )

    # ── Catalogue ─────────────────────────────────────────────────────────
    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("slug", sa.String(255), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("image_url", sa.String(1000), nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_categories_slug", "categories", ["slug"])

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("image_url", sa.String(1000), nullable=True),
        sa.Column("category_id", sa.Integer(), nullable=True),
        sa.Column("sizes", sa.JSON(), nullable=True, comment='Size names offered, e.g. ["S", "M"]'),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        sa.Column("is_out_of_stock", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        sa.Column("is_hero", sa.Boolean(), nullable=False, server_default=sa.text("0")),
        _created_at(),
        sa.Column(
            "updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["category_id"], ["categories.id"], name="fk_products_category"),
    )
    op.create_index("idx_products_category", "products", ["category_id"])
    op.create_index("idx_products_created_at", "products", ["created_at"])

    op.create_table(
        "product_inventory",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("size", sa.String(16), nullable=False),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
    )
    op.create_index("idx_inventory_product", "product_inventory", ["product_id"])

    op.create_table(
        "product_colors",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=False),
        sa.Column("color_name", sa.String(64), nullable=False),
        sa.Column("color_hex", sa.String(16), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
    )

    # ── Home page showcases ───────────────────────────────────────────────
    for table in ("featured_products", "hero_products"):
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column("product_id", sa.Integer(), nullable=False),
            sa.Column("position", sa.Integer(), nullable=False, server_default=sa.text("0")),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("product_id", name=f"uq_{table}_product"),
            sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="CASCADE"),
        )

    # ── Marketing ─────────────────────────────────────────────────────────
    op.create_table(
        "coupons",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("code", sa.String(50), nullable=False),
        sa.Column("discount_percent", sa.Integer(), nullable=False),
        sa.Column("expiry_date", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("1")),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("code", name="uq_coupons_code"),
    )

    op.create_table(
        "subscribes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("whatsapp_number", sa.String(20), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("whatsapp_number", name="uq_subscribes_whatsapp_number"),
    )

    # ── Orders ────────────────────────────────────────────────────────────
    op.create_table(
        "orders",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_name", sa.String(255), nullable=True),
        sa.Column("user_email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("shipping_address", sa.Text(), nullable=True),
        sa.Column("payment_method", sa.String(50), nullable=True),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("coupon_code", sa.String(50), nullable=True),
        sa.Column("coupon_discount_percent", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
        _created_at(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_orders_status", "orders", ["status"])
    op.create_index("idx_orders_created_at", "orders", ["created_at"])

    op.create_table(
        "order_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("order_id", sa.Integer(), nullable=False),
        sa.Column("product_id", sa.Integer(), nullable=True, comment="NULL for fully custom items"),
        sa.Column("quantity", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("size", sa.String(16), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("custom_color", sa.String(50), nullable=True),
        sa.Column("custom_image_url", sa.String(1000), nullable=True),
        sa.Column("custom_text", sa.Text(), nullable=True),
        sa.Column("custom_options", sa.JSON(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["product_id"], ["products.id"], ondelete="SET NULL"),
    )

    op.create_table(
        "custom_orders",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("front_image_url", sa.String(1000), nullable=True),
        sa.Column("back_image_url", sa.String(1000), nullable=True),
        sa.Column("instructions", sa.Text(), nullable=True),
        sa.Column("color", sa.String(50), nullable=True),
        sa.Column("size", sa.String(32), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="pending"),
        sa.Column("customer_name", sa.String(255), nullable=True),
        sa.Column("customer_email", sa.String(255), nullable=True),
        sa.Column("customer_phone", sa.String(32), nullable=True),
        sa.Column("shipping_address", sa.Text(), nullable=True),
        sa.Column("total_amount", sa.Numeric(10, 2), nullable=False, server_default=sa.text("0")),
        sa.Column("coupon_code", sa.String(50), nullable=True),
        sa.Column("coupon_discount_percent", sa.Integer(), nullable=True),
        _created_at(),
        sa.Column(
            "updated_at", sa.DateTime(), nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_custom_orders_status", "custom_orders", ["status"])


def downgrade() -> None:
    """Drop every storefront table. Destructive: all shop data is lost."""
    op.drop_index("idx_custom_orders_status", table_name="custom_orders")
    op.drop_table("custom_orders")
    op.drop_table("order_items")
    op.drop_index("idx_orders_created_at", table_name="orders")
    op.drop_index("idx_orders_status", table_name="orders")
    op.drop_table("orders")
    op.drop_table("subscribes")
    op.drop_table("coupons")
    op.drop_table("hero_products")
    op.drop_table("featured_products")
    op.drop_table("product_colors")
    op.drop_index("idx_inventory_product", table_name="product_inventory")
    op.drop_table("product_inventory")
    op.drop_index("idx_products_created_at", table_name="products")
    op.drop_index("idx_products_category", table_name="products")
    op.drop_table("products")
    op.drop_index("idx_categories_slug", table_name="categories")
    op.drop_table("categories")
    op.drop_table("users")
