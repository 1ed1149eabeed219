"""
Glee Threads Backend — Commerce Schemas
=========================================

What:  Contracts for subscriptions, coupons, orders and custom-design orders.

Request models keep business-required fields Optional: the services decide
which fields are mandatory and return the storefront's exact 400 messages.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


# ── Subscriptions ─────────────────────────────────────────────────────────


class SubscribeRequest(BaseModel):
    whatsappNumber: Optional[str] = Field(
        default=None, description="10-digit WhatsApp number, digits only"
    )


class SubscriberOut(BaseModel):
    id: int
    whatsapp_number: str
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SubscriberList(BaseModel):
    subscribers: List[SubscriberOut]


# ── Coupons ───────────────────────────────────────────────────────────────


class CouponVerifyRequest(BaseModel):
    code: Optional[str] = None


class CouponVerifyResponse(BaseModel):
    valid: bool = True
    discount_percent: int
    code: str


class CouponInput(BaseModel):
    code: Optional[str] = None
    discount_percent: Optional[int] = None
    expiry_date: Optional[str] = Field(
        default=None, description="ISO 8601 date or datetime, e.g. 2025-12-31"
    )
    is_active: bool = True


class CouponOut(BaseModel):
    id: int
    code: str
    discount_percent: int
    expiry_date: datetime
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class CouponList(BaseModel):
    coupons: List[CouponOut]


class CouponCreated(BaseModel):
    message: str
    couponId: int


# ── Orders ────────────────────────────────────────────────────────────────


class OrderItemInput(BaseModel):
    product_id: Optional[int] = None
    quantity: int = Field(default=1, ge=1)
    size: Optional[str] = None
    price: float = 0
    custom_color: Optional[str] = None
    custom_image_url: Optional[str] = None
    custom_text: Optional[str] = None
    custom_options: Optional[Dict[str, Any]] = None


class OrderInput(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    shipping_address: Optional[str] = None
    payment_method: Optional[str] = None
    items: Optional[List[OrderItemInput]] = None
    total_amount: Optional[float] = None
    coupon_code: Optional[str] = None
    coupon_discount_percent: Optional[int] = None


class OrderCreated(BaseModel):
    success: bool = True
    order_id: int


class OrderItemOut(BaseModel):
    id: int
    product_id: Optional[int] = None
    product_name: Optional[str] = None
    quantity: int
    size: Optional[str] = None
    price: float
    custom_color: Optional[str] = None
    custom_image_url: Optional[str] = None
    custom_text: Optional[str] = None
    custom_options: Optional[Dict[str, Any]] = None


class AdminOrderOut(BaseModel):
    id: int
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    phone: Optional[str] = None
    shipping_address: Optional[str] = None
    payment_method: Optional[str] = None
    total_amount: float
    coupon_code: Optional[str] = None
    coupon_discount_percent: Optional[int] = None
    status: str
    created_at: Optional[datetime] = None
    items: List[OrderItemOut] = Field(default_factory=list)


class AdminOrderList(BaseModel):
    orders: List[AdminOrderOut]


class OrderStatusInput(BaseModel):
    status: Optional[str] = None


# ── Custom-design orders ──────────────────────────────────────────────────


class CustomOrderInput(BaseModel):
    front_image_url: Optional[str] = None
    back_image_url: Optional[str] = None
    instructions: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    shipping_address: Optional[str] = None
    total_amount: Optional[float] = None
    coupon_code: Optional[str] = None
    coupon_discount_percent: Optional[int] = None


class CustomOrderCreated(BaseModel):
    success: bool = True
    id: int


class CustomOrderOut(BaseModel):
    id: int
    front_image_url: Optional[str] = None
    back_image_url: Optional[str] = None
    instructions: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    status: str
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    shipping_address: Optional[str] = None
    total_amount: float = 0
    coupon_code: Optional[str] = None
    coupon_discount_percent: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    totalPages: int


class CustomOrderList(BaseModel):
    orders: List[CustomOrderOut]
    pagination: Pagination


class CustomOrderStatusInput(BaseModel):
    id: Optional[int] = None
    status: Optional[str] = None
