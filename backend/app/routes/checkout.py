"""
Glee Threads Backend — Public Action Routes
=============================================

What:  Anonymous write endpoints used by the storefront.

    POST /api/subscribe         WhatsApp newsletter signup
    POST /api/coupons/verify    check a coupon at checkout
    POST /api/orders            guest checkout
    POST /api/custom-orders     custom-design request
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.schemas.common import ErrorResponse, MessageResponse
from app.schemas.commerce import (
    CouponVerifyRequest,
    CouponVerifyResponse,
    CustomOrderCreated,
    CustomOrderInput,
    OrderCreated,
    OrderInput,
    SubscribeRequest,
)
from app.services.coupon_service import coupon_service
from app.services.custom_order_service import custom_order_service
from app.services.order_service import order_service
from app.services.subscription_service import subscription_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Checkout"])


@router.post(
    "/subscribe",
    response_model=MessageResponse,
    status_code=201,
    responses={
        200: {"description": "Number was already subscribed", "model": MessageResponse},
        201: {"description": "Number stored", "model": MessageResponse},
        400: {"description": "Not a 10-digit number", "model": ErrorResponse},
    },
    summary="Subscribe a WhatsApp number",
)
async def subscribe(
    body: SubscribeRequest,
    db: AsyncSession = Depends(get_db_session),
):
    created = await subscription_service.subscribe(db, body.whatsappNumber)
    if not created:
        return JSONResponse(status_code=200, content={"message": "Already subscribed"})
    return MessageResponse(message="Successfully subscribed")


@router.post(
    "/coupons/verify",
    response_model=CouponVerifyResponse,
    responses={
        400: {"description": "No code supplied", "model": ErrorResponse},
        404: {"description": "Unknown, inactive or expired code", "model": ErrorResponse},
    },
    summary="Verify a coupon code",
)
async def verify_coupon(
    body: CouponVerifyRequest,
    db: AsyncSession = Depends(get_db_session),
) -> CouponVerifyResponse:
    return await coupon_service.verify(db, body.code)


@router.post(
    "/orders",
    response_model=OrderCreated,
    responses={400: {"description": "Missing required order fields", "model": ErrorResponse}},
    summary="Place an order",
    description="Guest checkout. Payment is arranged off-platform, so orders start as pending.",
)
async def create_order(
    body: OrderInput,
    db: AsyncSession = Depends(get_db_session),
) -> OrderCreated:
    order_id = await order_service.create(db, body)
    return OrderCreated(order_id=order_id)


@router.post(
    "/custom-orders",
    response_model=CustomOrderCreated,
    responses={400: {"description": "Missing customer details or artwork", "model": ErrorResponse}},
    summary="Submit a custom-design order",
)
async def create_custom_order(
    body: CustomOrderInput,
    db: AsyncSession = Depends(get_db_session),
) -> CustomOrderCreated:
    order_id = await custom_order_service.create(db, body)
    return CustomOrderCreated(id=order_id)
