"""
Glee Threads Backend — Order Service
======================================

What:  Guest checkout (POST /api/orders) and the admin order list/status flow.

Checkout rules:
    - name, phone and at least one item are required
    - coupon codes are stored upper-cased (the discount itself was verified
      and applied client-side; the order records what was shown)
    - item product_id <= 0 means "fully custom item" and is stored as NULL
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.catalog import Product
from app.models.order import ORDER_STATUSES, Order, OrderItem
from app.schemas.commerce import AdminOrderOut, OrderInput, OrderItemOut

logger = logging.getLogger(__name__)


class OrderService:

    async def create(self, db: AsyncSession, data: OrderInput) -> int:
        if not (data.name or "").strip() or not (data.phone or "").strip() or not data.items:
            raise ValidationError("Missing required order fields")

        order = Order(
            user_name=data.name.strip(),
            user_email=data.email or None,
            phone=data.phone.strip(),
            shipping_address=data.shipping_address or None,
            payment_method=data.payment_method or None,
            total_amount=data.total_amount or 0,
            coupon_code=data.coupon_code.strip().upper() if data.coupon_code else None,
            coupon_discount_percent=data.coupon_discount_percent,
            status="pending",
            items=[
                OrderItem(
                    product_id=item.product_id if item.product_id and item.product_id > 0 else None,
                    quantity=item.quantity,
                    size=item.size or None,
                    price=item.price,
                    custom_color=item.custom_color or None,
                    custom_image_url=item.custom_image_url or None,
                    custom_text=item.custom_text or None,
                    custom_options=item.custom_options or None,
                )
                for item in data.items
            ],
        )

        try:
            db.add(order)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating order: %s", str(e))
            raise DatabaseError(public_message="Failed to create order") from e

        logger.info(
            "Order placed: id=%s items=%d total=%s coupon=%s",
            order.id,
            len(data.items),
            order.total_amount,
            order.coupon_code or "-",
        )
        return order.id

    async def list_all(self, db: AsyncSession) -> List[AdminOrderOut]:
        """Newest first, each with its line items and the current product names."""
        try:
            result = await db.execute(
                select(Order)
                .options(selectinload(Order.items))
                .order_by(Order.created_at.desc(), Order.id.desc())
            )
            orders = list(result.scalars().all())
            names = await self._product_names(
                db, {item.product_id for order in orders for item in order.items if item.product_id}
            )
        except SQLAlchemyError as e:
            logger.error("Database error listing orders: %s", str(e))
            raise DatabaseError(public_message="Failed to fetch orders") from e

        return [
            AdminOrderOut(
                id=order.id,
                user_name=order.user_name,
                user_email=order.user_email,
                phone=order.phone,
                shipping_address=order.shipping_address,
                payment_method=order.payment_method,
                total_amount=order.total_amount,
                coupon_code=order.coupon_code,
                coupon_discount_percent=order.coupon_discount_percent,
                status=order.status,
                created_at=order.created_at,
                items=[
                    OrderItemOut(
                        id=item.id,
                        product_id=item.product_id,
                        product_name=names.get(item.product_id) if item.product_id else "Custom T-Shirt",
                        quantity=item.quantity,
                        size=item.size,
                        price=item.price,
                        custom_color=item.custom_color,
                        custom_image_url=item.custom_image_url,
                        custom_text=item.custom_text,
                        custom_options=item.custom_options,
                    )
                    for item in order.items
                ],
            )
            for order in orders
        ]

    async def update_status(self, db: AsyncSession, order_id: int, status: Optional[str]) -> str:
        normalized = (status or "").strip().lower()
        if not normalized:
            raise ValidationError("Status is required", field="status")
        if normalized not in ORDER_STATUSES:
            raise ValidationError(
                f"Invalid status. Valid values: {', '.join(ORDER_STATUSES)}", field="status"
            )

        try:
            result = await db.execute(
                update(Order).where(Order.id == order_id).values(status=normalized)
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating order %s: %s", order_id, str(e))
            raise DatabaseError(public_message="Failed to update order status") from e

        if result.rowcount == 0:
            raise NotFoundError("Order not found", resource="order", resource_id=order_id)
        logger.info("Order %s status → %s", order_id, normalized)
        return normalized

    @staticmethod
    async def _product_names(db: AsyncSession, product_ids: set) -> Dict[int, str]:
        if not product_ids:
            return {}
        result = await db.execute(
            select(Product.id, Product.name).where(Product.id.in_(product_ids))
        )
        return {product_id: name for product_id, name in result.all()}


order_service = OrderService()
