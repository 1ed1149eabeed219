"""
Glee Threads Backend — Shared Response Schemas
================================================

What:  Envelopes reused across routers: errors, plain messages, health.
Why:   Every error body has the same `{"error": ...}` shape so the storefront
       and admin panel can show `response.error` without branching.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body of every 4xx/5xx response."""
    error: str = Field(description="Human-readable error message")
    details: Optional[Any] = Field(
        default=None,
        description="Extra information for some errors (e.g. retry_after, upload failure reason)",
    )


class MessageResponse(BaseModel):
    """Acknowledgement returned by admin mutations."""
    message: str


class SuccessResponse(BaseModel):
    success: bool = True


class HealthResponse(BaseModel):
    """
    Returned by GET /health.

    status values:
        healthy:    database reachable and blob storage configured
        degraded:   database reachable, uploads will fail
        unhealthy:  database unreachable
    """
    status: str = Field(description="Overall status: healthy, degraded, or unhealthy")
    version: str = Field(description="API version")
    database: str = Field(description="Database status: connected or disconnected")
    blob_storage: str = Field(description="Upload backend status: configured or missing_token")
    uptime_seconds: float = Field(description="Seconds since the server started")
    checks: Dict[str, Any] = Field(default_factory=dict)
