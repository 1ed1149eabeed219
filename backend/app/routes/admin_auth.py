"""
Glee Threads Backend — Admin Authentication Routes
====================================================

What:  POST /api/admin/auth/login and GET /api/admin/auth/verify
Who:   The admin panel's login page and its layout guard.

/verify is the one place that distinguishes failure kinds, because the
admin panel uses it to choose between "log in again" and "wrong account":

    no / malformed Authorization header → 401 {valid: false, "No token provided"}
    bad signature, expired, bad claims  → 401 {valid: false, "Invalid token"}
    valid token without the admin role  → 403 {valid: false, "Not authorized"}

Every other admin route goes through require_admin, which answers a flat 401.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db_session
from app.exceptions import AuthenticationError
from app.models.user import ADMIN_ROLE
from app.schemas.auth import LoginRequest, LoginResponse, VerifyResponse
from app.schemas.common import ErrorResponse
from app.services.auth_service import auth_service, extract_bearer_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/auth", tags=["Admin Auth"])


def _verify_failure(status_code: int, error: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"valid": False, "error": error})


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"description": "Email or password missing", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
        403: {"description": "Account is not an admin", "model": ErrorResponse},
    },
    summary="Admin login",
    description="Exchanges admin credentials for a 24-hour bearer token.",
)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> LoginResponse:
    return await auth_service.login(db, body.email, body.password)


@router.get(
    "/verify",
    response_model=VerifyResponse,
    responses={
        401: {"description": "Missing or invalid token", "model": VerifyResponse},
        403: {"description": "Token lacks the admin role", "model": VerifyResponse},
    },
    summary="Verify an admin token",
)
async def verify(authorization: Optional[str] = Header(default=None)):
    token = extract_bearer_token(authorization)
    if token is None:
        return _verify_failure(401, "No token provided")

    try:
        claims = auth_service.decode_token(token)
    except AuthenticationError:
        return _verify_failure(401, "Invalid token")

    if claims.role != ADMIN_ROLE:
        return _verify_failure(403, "Not authorized")

    return VerifyResponse(valid=True, user=claims.to_user())
