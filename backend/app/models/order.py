"""
Glee Threads Backend — Order Models
=====================================

What:  Checkout orders, their line items, and custom-design orders.
Who:   OrderService, CustomOrderService and DashboardService.

Orders are placed without an account (registration is disabled), so the
customer's name/email/phone are stored on the order row itself. Payment
happens off-platform (WhatsApp / UPI); admins move orders between
pending → paid, or cancel them.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import (
    JSON,
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

ORDER_STATUSES = ("pending", "paid", "cancelled")
CUSTOM_ORDER_STATUSES = ("pending", "in_progress", "completed", "cancelled")


class Order(Base):
    __tablename__ = "orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    user_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    shipping_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=0, server_default="0"
    )
    coupon_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    coupon_discount_percent: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="pending", server_default="pending"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    items: Mapped[List["OrderItem"]] = relationship(
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.id",
    )

    __table_args__ = (
        Index("idx_orders_status", "status"),
        Index("idx_orders_created_at", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, status='{self.status}', total={self.total_amount})>"


class OrderItem(Base):
    """
    One line of an order.

    product_id is NULL for fully custom items (designed in the customizer),
    which carry their colour/image/text in the custom_* columns instead.
    """

    __tablename__ = "order_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.id", ondelete="CASCADE"), nullable=False
    )
    product_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("products.id", ondelete="SET NULL"), nullable=True
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    size: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=0)
    custom_color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    custom_image_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    custom_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    custom_options: Mapped[Optional[dict]] = mapped_column(JSON, nullable=True)

    order: Mapped[Order] = relationship(back_populates="items")


class CustomOrder(Base):
    """A print-your-own-design request (front/back artwork uploaded to blob storage)."""

    __tablename__ = "custom_orders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    front_image_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    back_image_url: Mapped[Optional[str]] = mapped_column(String(1000), nullable=True)
    instructions: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    size: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default="pending", server_default="pending"
    )
    customer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    customer_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    shipping_address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    total_amount: Mapped[Decimal] = mapped_column(
        Numeric(10, 2), nullable=False, default=0, server_default="0"
    )
    coupon_code: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    coupon_discount_percent: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("idx_custom_orders_status", "status"),)
