"""
Glee Threads Backend — Health Check Route
===========================================

What:  Health check endpoint for monitoring and load balancer probes.
Who:   Docker health checks, the hosting platform's uptime monitor.

Status levels:
    - healthy:   database reachable and the upload backend is usable (HTTP 200)
    - degraded:  database reachable, uploads will fail (HTTP 200)
    - unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app import __version__
from app.config import settings
from app.database import engine
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
    description=(
        "Returns the health of the API and its dependencies: database connectivity "
        "(SELECT 1) and whether the configured upload backend has its credentials."
    ),
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    # ── Database ──────────────────────────────────────────────────────────
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Blob storage ──────────────────────────────────────────────────────
    # Configuration only; probing the Vercel API on every check would burn quota.
    blob_status = "configured" if settings.blob_configured else "missing_token"
    if blob_status != "configured" and overall == "healthy":
        overall = "degraded"

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        blob_storage=blob_status,
        uptime_seconds=round(time.time() - _start_time, 2),
        checks={"storage_backend": settings.storage_backend},
    )
