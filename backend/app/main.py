"""
Glee Threads Backend — FastAPI Application Factory
====================================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes app configuration, middleware registration, route mounting,
       and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                       FastAPI App                         │
    │                                                           │
    │  Middleware Chain:                                        │
    │  ┌────────────┐ ┌──────────┐ ┌─────────┐ ┌─────────────┐  │
    │  │ Rate Limit │→│ Req ID   │→│ Logging │→│ GZip / CORS │  │
    │  └────────────┘ └──────────┘ └─────────┘ └─────────────┘  │
    │                                                           │
    │  Routes:                                                  │
    │   storefront  /api/categories /api/products /api/orders … │
    │   admin       /api/admin/* (require_admin)                │
    │   ops         /health                                     │
    │                                                           │
    │  Exception Handlers:                                      │
    │   StorefrontError → its status_code, {"error": message}   │
    │   Exception       → 500 {"error": "Internal server error"}│
    └───────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Configure logging
    2. Validate configuration (logged, never fatal)
    3. Create the local storage directory when STORAGE_BACKEND=local

    Shutdown:
    1. Close the blob storage HTTP client
    2. Dispose database engine (close all pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.exceptions import (
    BlobStorageError,
    DatabaseError,
    RateLimitExceededError,
    StorefrontError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.rate_limit import RateLimitMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.routes import (
    admin_auth,
    admin_catalog,
    admin_commerce,
    admin_showcase,
    admin_store,
    catalog,
    checkout,
    disabled,
    health,
    showcase,
    store,
    uploads,
)
from app.services.blob_service import blob_service

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, on stdout so
    the hosting platform's log collector picks it up.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Glee Threads Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Not fatal: the catalogue and health check still work, and the
        # affected features report their own errors.
        logger.error("Configuration error: %s", str(e))

    if settings.storage_backend == "local":
        storage = Path(settings.storage_root)
        storage.mkdir(parents=True, exist_ok=True)
        logger.info("Local upload storage: %s", storage.resolve())
    else:
        logger.info("Upload storage: Vercel Blob (%s)", settings.blob_api_url)

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Glee Threads Backend shutting down...")
    await blob_service.close()
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, content: dict, headers: dict = None) -> JSONResponse:
    rid = request_id_var.get("")
    merged = {REQUEST_ID_HEADER: rid} if rid else {}
    if headers:
        merged.update(headers)
    return JSONResponse(status_code=status_code, content=content, headers=merged)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Every body is {"error": <message>}, plus "details" where the client can
    act on it. Internal detail (SQL, stack traces, upstream bodies) is
    logged server-side and never returned.

    Handler hierarchy:
        DatabaseError           → 500, route-specific public message
        BlobStorageError        → 500 {"error", "details"}
        RateLimitExceededError  → 429 with Retry-After
        StorefrontError (base)  → exc.status_code
        RequestValidationError  → 400 "Invalid request body"
        Exception (fallback)    → 500 "Internal server error"
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return _error_response(500, {"error": exc.public_message})

    @app.exception_handler(BlobStorageError)
    async def handle_blob_error(request: Request, exc: BlobStorageError):
        rid = request_id_var.get("")
        logger.error("[%s] Blob storage error: %s | %s", rid, exc.message, exc.details)
        content = {"error": exc.message}
        if exc.details:
            content["details"] = exc.details
        return _error_response(500, content)

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        return _error_response(
            429,
            {"error": exc.message, "details": {"retry_after": exc.retry_after}},
            headers={"Retry-After": str(exc.retry_after)},
        )

    @app.exception_handler(StorefrontError)
    async def handle_storefront_error(request: Request, exc: StorefrontError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        elif exc.status_code in (401, 403):
            logger.info("[%s] %s on %s: %s", rid, exc.status_code, request.url.path, exc.context or exc.message)
        else:
            logger.debug("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return _error_response(exc.status_code, {"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Rejected request body on %s: %s", rid, request.url.path, exc.errors())
        return _error_response(400, {"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(500, {"error": "Internal server error"})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="Glee Threads API",
        description=(
            "Storefront and admin API for the Glee Threads t-shirt shop: catalogue, "
            "home page showcases, coupons, guest checkout, custom-design orders, "
            "WhatsApp subscriptions and image uploads."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → RateLimit → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RateLimitMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    for module in (
        catalog,
        showcase,
        store,
        checkout,
        uploads,
        disabled,
        admin_auth,
        admin_catalog,
        admin_showcase,
        admin_commerce,
        admin_store,
        health,
    ):
        app.include_router(module.router)

    return app


app = create_app()
