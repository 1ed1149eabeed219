"""
Glee Threads Backend — Custom Exception Hierarchy
===================================================

What:  Application-specific exceptions for every error the API reports.
Why:   Services raise these; global handlers (registered in main.py) turn them
       into `{"error": message}` JSON bodies with the right status code, so
       route handlers contain no try/except boilerplate.
How:   Each exception carries a client-safe message and an optional context
       dict that is logged but never returned.

Exception Hierarchy:
    StorefrontError (base)
    ├── ValidationError          → 400 Bad Request
    ├── AuthenticationError      → 401 Unauthorized
    ├── PermissionDeniedError    → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── FeatureDisabledError     → 410 Gone / 405 Method Not Allowed
    ├── RateLimitExceededError   → 429 Too Many Requests
    ├── DatabaseError            → 500 Internal Server Error (generic body)
    └── BlobStorageError         → 500 Internal Server Error ("Upload failed")
"""

from typing import Any, Dict, Optional


class StorefrontError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StorefrontError):
    """Client input is missing or malformed. HTTP 400."""

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class AuthenticationError(StorefrontError):
    """
    Credentials are missing, invalid or insufficient. HTTP 401.

    The admin gate raises this for every failure (missing header, bad
    signature, expiry, wrong role) with the same message, so a caller
    cannot tell which check rejected the token.
    """

    status_code = 401

    def __init__(
        self,
        message: str = "Unauthorized",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class PermissionDeniedError(StorefrontError):
    """The caller is known but the action is not allowed. HTTP 403."""

    status_code = 403

    def __init__(
        self,
        message: str = "Forbidden",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(StorefrontError):
    """
    A requested row does not exist. HTTP 404.

    Services pass the exact client message ("Coupon not found",
    "Product not found", ...); `resource` and `resource_id` go to the log
    context only.
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Not found",
        resource: Optional[str] = None,
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource:
            ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)


class FeatureDisabledError(StorefrontError):
    """
    The endpoint belongs to a feature that has been switched off.

    HTTP 410 for reads/creates (the resource is gone for good) and
    405 for updates/deletes.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 410,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.status_code = status_code


class RateLimitExceededError(StorefrontError):
    """Client exceeded the per-IP request window. HTTP 429."""

    status_code = 429

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Too many requests. Please wait {retry_after} seconds before retrying."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(StorefrontError):
    """
    A query failed unexpectedly. HTTP 500.

    The message is logged server-side; clients only ever see the generic
    "Internal server error" body, or the route-specific message passed as
    `public_message`.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        public_message: str = "Internal server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.public_message = public_message


class BlobStorageError(StorefrontError):
    """Writing to or deleting from blob storage failed. HTTP 500."""

    status_code = 500

    def __init__(
        self,
        message: str = "Upload failed",
        details: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
        self.details = details
