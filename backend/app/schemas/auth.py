"""
Glee Threads Backend — Admin Auth Schemas
===========================================

What:  Login request/response and the decoded admin token claims.
"""

from typing import Optional

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    # Optional so that a missing field produces the 400 message from AuthService
    # instead of FastAPI's generic body validation error.
    email: Optional[str] = None
    password: Optional[str] = None


class AdminUser(BaseModel):
    id: int
    email: str
    name: str = ""
    role: str

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    token: str = Field(description="HS256 JWT; send as `Authorization: Bearer <token>`")
    user: AdminUser


class VerifyResponse(BaseModel):
    valid: bool
    user: Optional[AdminUser] = None
    error: Optional[str] = None


class TokenClaims(BaseModel):
    """Claims carried by an admin token (camelCase keys as issued)."""
    userId: int
    email: str
    name: str = ""
    role: str

    def to_user(self) -> AdminUser:
        return AdminUser(id=self.userId, email=self.email, name=self.name, role=self.role)
