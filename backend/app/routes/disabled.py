"""
Glee Threads Backend — Retired Endpoints
==========================================

What:  /api/auth/register and /api/cart, kept only to answer old clients.

Customer accounts and the server-side cart were removed; the cart now lives
in the browser and orders are placed as a guest. GET/POST answer 410 Gone
so cached frontends surface a clear message, PUT/DELETE answer 405.
"""

from fastapi import APIRouter

from app.exceptions import FeatureDisabledError
from app.schemas.common import ErrorResponse

router = APIRouter(prefix="/api", tags=["Disabled"])

REGISTRATION_DISABLED = "Registration disabled. End-user registration is no longer supported."
CART_DISABLED = "Cart disabled. The cart is kept in the browser and orders are placed at checkout."
METHOD_NOT_ALLOWED = "Method not allowed"

_GONE = {410: {"description": "Feature removed", "model": ErrorResponse}}
_NOT_ALLOWED = {405: {"description": "Method not allowed", "model": ErrorResponse}}


@router.api_route("/auth/register", methods=["GET", "POST"], responses=_GONE, summary="Registration (removed)")
async def register_gone():
    raise FeatureDisabledError(REGISTRATION_DISABLED, status_code=410)


@router.api_route("/auth/register", methods=["PUT", "DELETE"], responses=_NOT_ALLOWED, include_in_schema=False)
async def register_not_allowed():
    raise FeatureDisabledError(METHOD_NOT_ALLOWED, status_code=405)


@router.api_route("/cart", methods=["GET", "POST"], responses=_GONE, summary="Cart (removed)")
async def cart_gone():
    raise FeatureDisabledError(CART_DISABLED, status_code=410)


@router.api_route("/cart", methods=["PUT", "DELETE"], responses=_NOT_ALLOWED, include_in_schema=False)
async def cart_not_allowed():
    raise FeatureDisabledError(METHOD_NOT_ALLOWED, status_code=405)
