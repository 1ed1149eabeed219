"""
Glee Threads Backend — Custom Order Service
=============================================

What:  Print-your-own-design requests: creation from the customizer page,
       and the admin queue (list, status changes, deletion).

Deleting a custom order also deletes its uploaded artwork from blob storage.
That cleanup is best-effort: a storage failure is logged as a warning and the
row is still removed, so the admin queue never gets stuck on a dead blob.
"""

import logging
import math
from typing import Optional

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import BlobStorageError, DatabaseError, NotFoundError, ValidationError
from app.models.order import CUSTOM_ORDER_STATUSES, CustomOrder
from app.schemas.commerce import (
    CustomOrderInput,
    CustomOrderList,
    CustomOrderOut,
    Pagination,
)
from app.services.blob_service import blob_service

logger = logging.getLogger(__name__)


class CustomOrderService:

    async def create(self, db: AsyncSession, data: CustomOrderInput) -> int:
        if not (data.customer_name or "").strip() or not (data.customer_phone or "").strip():
            raise ValidationError("Customer name and phone are required")
        if not data.front_image_url and not data.back_image_url:
            raise ValidationError("At least one design image is required")

        order = CustomOrder(
            front_image_url=data.front_image_url or None,
            back_image_url=data.back_image_url or None,
            instructions=data.instructions or None,
            color=data.color or None,
            size=data.size or None,
            customer_name=data.customer_name.strip(),
            customer_email=data.customer_email or None,
            customer_phone=data.customer_phone.strip(),
            shipping_address=data.shipping_address or None,
            total_amount=data.total_amount or 0,
            coupon_code=data.coupon_code.strip().upper() if data.coupon_code else None,
            coupon_discount_percent=data.coupon_discount_percent or None,
            status="pending",
        )
        try:
            db.add(order)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating custom order: %s", str(e))
            raise DatabaseError(public_message="Failed to create custom order") from e

        logger.info("Custom order placed: id=%s", order.id)
        return order.id

    async def list_page(
        self,
        db: AsyncSession,
        page: int = 1,
        limit: int = 20,
        status: Optional[str] = None,
    ) -> CustomOrderList:
        filters = []
        if status and status != "all":
            filters.append(CustomOrder.status == status)

        try:
            total = (
                await db.execute(select(func.count(CustomOrder.id)).where(*filters))
            ).scalar() or 0
            result = await db.execute(
                select(CustomOrder)
                .where(*filters)
                .order_by(CustomOrder.created_at.desc(), CustomOrder.id.desc())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            orders = [CustomOrderOut.model_validate(o) for o in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing custom orders: %s", str(e))
            raise DatabaseError(public_message="Failed to fetch custom orders") from e

        return CustomOrderList(
            orders=orders,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                totalPages=math.ceil(total / limit) if total else 0,
            ),
        )

    async def update_status(self, db: AsyncSession, order_id: Optional[int], status: Optional[str]) -> None:
        if not order_id or not status:
            raise ValidationError("Order ID and status are required")
        if status not in CUSTOM_ORDER_STATUSES:
            raise ValidationError("Invalid status", field="status")

        try:
            result = await db.execute(
                update(CustomOrder).where(CustomOrder.id == order_id).values(status=status)
            )
        except SQLAlchemyError as e:
            logger.error("Database error updating custom order %s: %s", order_id, str(e))
            raise DatabaseError(public_message="Failed to update custom order") from e

        if result.rowcount == 0:
            raise NotFoundError("Order not found", resource="custom_order", resource_id=order_id)

    async def delete(self, db: AsyncSession, order_id: Optional[int]) -> None:
        if not order_id:
            raise ValidationError("Order ID is required", field="id")
        try:
            order = await db.get(CustomOrder, order_id)
        except SQLAlchemyError as e:
            logger.error("Database error loading custom order %s: %s", order_id, str(e))
            raise DatabaseError(public_message="Failed to delete custom order") from e
        if order is None:
            raise NotFoundError("Order not found", resource="custom_order", resource_id=order_id)

        try:
            await blob_service.delete([order.front_image_url, order.back_image_url])
        except BlobStorageError as e:
            logger.warning(
                "Could not delete artwork for custom order %s: %s", order_id, e.details or e.message
            )

        try:
            await db.execute(delete(CustomOrder).where(CustomOrder.id == order_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting custom order %s: %s", order_id, str(e))
            raise DatabaseError(public_message="Failed to delete custom order") from e

        logger.info("Custom order deleted: id=%s", order_id)


custom_order_service = CustomOrderService()
