"""
Glee Threads Backend — Admin Commerce Routes
==============================================

What:  Coupons, orders, custom-design orders and WhatsApp subscribers as
       seen from the admin panel.

    GET    /api/admin/coupons
    POST   /api/admin/coupons
    DELETE /api/admin/coupons/{id}
    GET    /api/admin/orders
    PUT    /api/admin/orders/{id}            {status}
    GET    /api/admin/custom-orders          ?page&limit&status
    PATCH  /api/admin/custom-orders          {id, status}
    DELETE /api/admin/custom-orders          ?id=
    GET    /api/admin/subscribers
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.dependencies import require_admin
from app.schemas.common import ErrorResponse, MessageResponse, SuccessResponse
from app.schemas.commerce import (
    AdminOrderList,
    CouponCreated,
    CouponInput,
    CouponList,
    CustomOrderList,
    CustomOrderStatusInput,
    OrderStatusInput,
    SubscriberList,
)
from app.services.coupon_service import coupon_service
from app.services.custom_order_service import custom_order_service
from app.services.order_service import order_service
from app.services.subscription_service import subscription_service

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin Commerce"],
    dependencies=[Depends(require_admin)],
    responses={401: {"description": "Missing or invalid admin token", "model": ErrorResponse}},
)

_NOT_FOUND = {404: {"description": "Not found", "model": ErrorResponse}}
_BAD_INPUT = {400: {"description": "Missing or invalid fields", "model": ErrorResponse}}


# ── Coupons ───────────────────────────────────────────────────────────────


@router.get("/coupons", response_model=CouponList, summary="List coupons, newest first")
async def list_coupons(db: AsyncSession = Depends(get_db_session)) -> CouponList:
    return CouponList(coupons=await coupon_service.list_all(db))


@router.post(
    "/coupons",
    response_model=CouponCreated,
    status_code=201,
    responses=_BAD_INPUT,
    summary="Create a coupon",
    description="The code is trimmed and upper-cased. A bare expiry date is valid through that day.",
)
async def create_coupon(
    body: CouponInput,
    db: AsyncSession = Depends(get_db_session),
) -> CouponCreated:
    coupon_id = await coupon_service.create(db, body)
    return CouponCreated(message="Coupon created successfully", couponId=coupon_id)


@router.delete(
    "/coupons/{coupon_id}",
    response_model=MessageResponse,
    responses=_NOT_FOUND,
    summary="Delete a coupon",
)
async def delete_coupon(
    coupon_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await coupon_service.delete(db, coupon_id)
    return MessageResponse(message="Coupon deleted successfully")


# ── Orders ────────────────────────────────────────────────────────────────


@router.get("/orders", response_model=AdminOrderList, summary="List orders with their items")
async def list_orders(db: AsyncSession = Depends(get_db_session)) -> AdminOrderList:
    return AdminOrderList(orders=await order_service.list_all(db))


@router.put(
    "/orders/{order_id}",
    response_model=MessageResponse,
    responses={**_BAD_INPUT, **_NOT_FOUND},
    summary="Change an order's status",
)
async def update_order_status(
    order_id: int,
    body: OrderStatusInput,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    await order_service.update_status(db, order_id, body.status)
    return MessageResponse(message="Order status updated successfully")


# ── Custom orders ─────────────────────────────────────────────────────────


@router.get("/custom-orders", response_model=CustomOrderList, summary="Page through custom orders")
async def list_custom_orders(
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
    status: Optional[str] = Query(default=None, description="Filter by status; 'all' disables the filter"),
    db: AsyncSession = Depends(get_db_session),
) -> CustomOrderList:
    return await custom_order_service.list_page(db, page=page, limit=limit, status=status)


@router.patch(
    "/custom-orders",
    response_model=SuccessResponse,
    responses={**_BAD_INPUT, **_NOT_FOUND},
    summary="Change a custom order's status",
)
async def update_custom_order_status(
    body: CustomOrderStatusInput,
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await custom_order_service.update_status(db, body.id, body.status)
    return SuccessResponse()


@router.delete(
    "/custom-orders",
    response_model=SuccessResponse,
    responses={**_BAD_INPUT, **_NOT_FOUND},
    summary="Delete a custom order and its artwork",
)
async def delete_custom_order(
    order_id: Optional[int] = Query(default=None, alias="id"),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await custom_order_service.delete(db, order_id)
    return SuccessResponse()


# ── Subscribers ───────────────────────────────────────────────────────────


@router.get("/subscribers", response_model=SubscriberList, summary="List WhatsApp subscribers")
async def list_subscribers(db: AsyncSession = Depends(get_db_session)) -> SubscriberList:
    return SubscriberList(subscribers=await subscription_service.list_all(db))
