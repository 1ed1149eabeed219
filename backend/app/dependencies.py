"""Shared FastAPI dependencies: the admin gate used by every /api/admin route."""

from typing import Optional

from fastapi import Header

from app.exceptions import AuthenticationError
from app.models.user import ADMIN_ROLE
from app.schemas.auth import TokenClaims
from app.services.auth_service import auth_service, extract_bearer_token


def require_admin(authorization: Optional[str] = Header(default=None)) -> TokenClaims:
    """
    Dependency: decoded claims of a valid admin token, or 401.

    Missing header, malformed token, bad signature, expiry and a non-admin
    role all produce the same 401 {"error": "Unauthorized"}.
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError()
    claims = auth_service.decode_token(token)
    if claims.role != ADMIN_ROLE:
        raise AuthenticationError(context={"reason": "role", "role": claims.role})
    return claims
