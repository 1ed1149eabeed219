"""
Glee Threads Backend — Admin Authentication Service
=====================================================

What:  Password hashing, admin login, and admin token issue/verification.
Why:   One place owns the token format, so the login route, the verify route
       and the require_admin dependency can never disagree about it.
How:   bcrypt for password hashes, PyJWT (HS256) for bearer tokens.

Token format:
    Header:  {"alg": "HS256", "typ": "JWT"}
    Claims:  {"userId": 1, "email": "...", "name": "...", "role": "admin",
              "iat": <issued>, "exp": <issued + JWT_EXPIRES_HOURS>}

Failure policy:
    decode_token() raises AuthenticationError for every problem (expired,
    bad signature, malformed, missing claims) with the same message. Callers
    cannot, and clients must not, learn which check failed.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import (
    AuthenticationError,
    DatabaseError,
    PermissionDeniedError,
    ValidationError,
)
from app.models.user import ADMIN_ROLE, User
from app.schemas.auth import AdminUser, LoginResponse, TokenClaims

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Return the token from an `Authorization: Bearer <token>` header, or None."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class AuthService:
    """Stateless; the module-level `auth_service` singleton is used everywhere."""

    # ── Passwords ─────────────────────────────────────────────────────────

    def hash_password(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
        return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")

    def verify_password(self, password: str, password_hash: str) -> bool:
        """
        Check a password against a stored bcrypt hash.

        Hashes created by the old Node tooling use the $2a$ prefix; bcrypt
        accepts those as-is. A malformed stored hash is treated as a
        mismatch and logged, since it can only be fixed by resetting the
        account.
        """
        try:
            return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is not a valid bcrypt hash")
            return False

    # ── Tokens ────────────────────────────────────────────────────────────

    def create_token(self, user: User) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user.id,
            "email": user.email,
            "name": user.name or "",
            "role": user.role,
            "iat": now,
            "exp": now + timedelta(hours=settings.jwt_expires_hours),
        }
        return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)

    def decode_token(self, token: str) -> TokenClaims:
        """Verify signature and expiry, then parse the claims. Raises AuthenticationError."""
        try:
            payload = jwt.decode(
                token,
                settings.jwt_secret,
                algorithms=[settings.jwt_algorithm],
                options={"require": ["exp"]},
            )
            return TokenClaims.model_validate(payload)
        except jwt.PyJWTError as e:
            logger.info("Rejected admin token: %s", type(e).__name__)
            raise AuthenticationError(context={"reason": type(e).__name__}) from e
        except PydanticValidationError as e:
            logger.info("Rejected admin token: claims missing or malformed")
            raise AuthenticationError(context={"reason": "claims"}) from e

    # ── Login ─────────────────────────────────────────────────────────────

    async def login(
        self,
        db: AsyncSession,
        email: Optional[str],
        password: Optional[str],
    ) -> LoginResponse:
        """
        Authenticate an admin by email and password.

        Order of checks (and responses):
            missing email/password → 400
            unknown email          → 401 "Invalid credentials"
            role != admin          → 403 "Access denied. Admin only."
            wrong password         → 401 "Invalid credentials"
        """
        email = (email or "").strip()
        if not email or not password:
            raise ValidationError("Email and password are required")

        try:
            result = await db.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during admin login: %s", str(e))
            raise DatabaseError(context={"operation": "login"}) from e

        if user is None:
            raise AuthenticationError(INVALID_CREDENTIALS)
        if user.role != ADMIN_ROLE:
            logger.warning("Non-admin account attempted admin login: user_id=%s", user.id)
            raise PermissionDeniedError("Access denied. Admin only.")
        if not self.verify_password(password, user.password_hash):
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("Admin login: user_id=%s", user.id)
        return LoginResponse(
            token=self.create_token(user),
            user=AdminUser.model_validate(user),
        )

    # ── Account provisioning (scripts/create_admin.py) ────────────────────

    async def upsert_admin(
        self,
        db: AsyncSession,
        email: str,
        password: str,
        name: str = "Admin",
    ) -> User:
        """Create the admin account, or reset its password/name/role if the email exists."""
        result = await db.execute(select(User).where(User.email == email))
        user = result.scalar_one_or_none()
        password_hash = self.hash_password(password)

        if user is None:
            user = User(email=email, name=name, password_hash=password_hash, role=ADMIN_ROLE)
            db.add(user)
        else:
            user.name = name
            user.password_hash = password_hash
            user.role = ADMIN_ROLE

        await db.flush()
        return user


auth_service = AuthService()
