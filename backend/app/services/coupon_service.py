"""
Glee Threads Backend — Coupon Service
=======================================

What:  Checkout-time coupon verification and admin coupon management.

Redeemable means: code matches (case-insensitive, surrounding spaces
ignored), is_active is true, and expiry_date is later than the database's
current time. Any other case is reported as one 404 so that the checkout
form cannot probe which condition failed.
"""

import logging
from datetime import datetime, time, timezone
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError, NotFoundError, ValidationError
from app.models.coupon import Coupon
from app.schemas.commerce import CouponInput, CouponOut, CouponVerifyResponse

logger = logging.getLogger(__name__)


def normalize_code(code: Optional[str]) -> str:
    return (code or "").strip().upper()


def parse_expiry(value: str) -> datetime:
    """
    Parse an expiry from the admin form.

    A bare date ("2025-12-31") means the coupon works through the end of that
    day. Timezone-aware values are converted to naive UTC to match the
    DATETIME column.
    """
    text = value.strip()
    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError("Invalid expiry date", field="expiry_date") from e

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    if len(text) == 10:
        parsed = datetime.combine(parsed.date(), time(23, 59, 59))
    return parsed


class CouponService:

    async def verify(self, db: AsyncSession, code: Optional[str]) -> CouponVerifyResponse:
        normalized = normalize_code(code)
        if not normalized:
            raise ValidationError("Coupon code is required", field="code")

        try:
            result = await db.execute(
                select(Coupon).where(
                    Coupon.code == normalized,
                    Coupon.is_active.is_(True),
                    Coupon.expiry_date > func.now(),
                )
            )
            coupon = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error verifying coupon: %s", str(e))
            raise DatabaseError(context={"operation": "verify_coupon"}) from e

        if coupon is None:
            raise NotFoundError("Invalid or expired coupon code", resource="coupon")

        return CouponVerifyResponse(
            valid=True,
            discount_percent=int(coupon.discount_percent),
            code=coupon.code,
        )

    async def list_all(self, db: AsyncSession) -> List[CouponOut]:
        try:
            result = await db.execute(select(Coupon).order_by(Coupon.created_at.desc(), Coupon.id.desc()))
            return [CouponOut.model_validate(c) for c in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing coupons: %s", str(e))
            raise DatabaseError(context={"operation": "list_coupons"}) from e

    async def create(self, db: AsyncSession, data: CouponInput) -> int:
        code = normalize_code(data.code)
        if not code or data.discount_percent is None or not (data.expiry_date or "").strip():
            raise ValidationError("Missing required fields")
        if not 1 <= data.discount_percent <= 100:
            raise ValidationError("Discount must be between 1 and 100", field="discount_percent")
        expiry = parse_expiry(data.expiry_date)

        try:
            existing = await db.execute(select(Coupon.id).where(Coupon.code == code))
            if existing.scalar_one_or_none() is not None:
                raise ValidationError("Coupon code already exists", field="code")

            coupon = Coupon(
                code=code,
                discount_percent=data.discount_percent,
                expiry_date=expiry,
                is_active=data.is_active,
            )
            db.add(coupon)
            await db.flush()
        except IntegrityError as e:
            # Lost a race with a concurrent create of the same code.
            raise ValidationError("Coupon code already exists", field="code") from e
        except SQLAlchemyError as e:
            logger.error("Database error creating coupon %s: %s", code, str(e))
            raise DatabaseError(context={"operation": "create_coupon"}) from e

        logger.info("Coupon created: %s (%d%%, expires %s)", code, data.discount_percent, expiry)
        return coupon.id

    async def delete(self, db: AsyncSession, coupon_id: int) -> None:
        try:
            result = await db.execute(delete(Coupon).where(Coupon.id == coupon_id))
        except SQLAlchemyError as e:
            logger.error("Database error deleting coupon %s: %s", coupon_id, str(e))
            raise DatabaseError(context={"coupon_id": coupon_id}) from e

        if result.rowcount == 0:
            raise NotFoundError("Coupon not found", resource="coupon", resource_id=coupon_id)
        logger.info("Coupon deleted: id=%s", coupon_id)


coupon_service = CouponService()
