"""
Inkpost Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for every client-facing failure kind.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return the `{error, message, code, request_id}` envelope with the
       matching HTTP status code.
Who:   Raised by services, stores and auth dependencies; caught by global handlers.
When:  During request processing when recoverable errors occur.

Exception Hierarchy:
    InkpostError (base)
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── UnauthenticatedError     → 401 Unauthorized
    ├── ForbiddenError           → 403 Forbidden
    ├── NotFoundError            → 404 Not Found
    ├── ConflictError            → 409 Conflict
    ├── MissingResourceError     → 500 (dependency wiring bug)
    └── DatabaseError            → 500 Internal Server Error

    TokenError (raised by TokenService, translated to UnauthenticatedError)
    ├── InvalidTokenError
    └── ExpiredTokenError
"""

from typing import Any, Dict, Optional


class InkpostError(Exception):
    """
    Base exception for all Inkpost application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
        status_code / code: HTTP status and machine-readable kind for the envelope
    """

    status_code: int = 500
    code: str = "server_error"

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(InkpostError):
    """
    Raised when client input fails validation.

    When:    Missing title/content, empty update, malformed identifier,
             wrong credentials at login.
    HTTP:    400 Bad Request
    """

    status_code = 400
    code = "validation_error"

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


class UnauthenticatedError(InkpostError):
    """
    Raised when a request does not carry a usable identity.

    When:    No bearer token, token fails verification, or the token's
             subject no longer exists.
    HTTP:    401 Unauthorized
    """

    status_code = 401
    code = "unauthenticated"

    def __init__(
        self,
        message: str = "Authentication required",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class ForbiddenError(InkpostError):
    """Authenticated, but not allowed to act on this resource (HTTP 403)."""

    status_code = 403
    code = "forbidden"

    def __init__(
        self,
        message: str = "Access denied",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class NotFoundError(InkpostError):
    """
    Raised when a requested resource does not exist.

    SQLAlchemy returns None for missing records (not an exception); stores
    and services convert None → NotFoundError so the global handler can
    answer with 404.
    """

    status_code = 404
    code = "not_found"

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource.capitalize()} not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class ConflictError(InkpostError):
    """
    Raised when a write would violate a uniqueness rule.

    When:    Duplicate slug on blog create/update, duplicate username or
             email on registration.
    HTTP:    409 Conflict
    """

    status_code = 409
    code = "conflict"

    def __init__(
        self,
        message: str = "Resource already exists",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class MissingResourceError(InkpostError):
    """
    Raised when an authorization gate runs without its pre-loaded resource.

    This is a routing bug (the attachment dependency was not wired in
    front of the gate), never a client error, so it maps to 500.
    """

    def __init__(
        self,
        resource: str = "blog",
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        super().__init__(
            message=f"{resource.capitalize()} not attached for authorization",
            context=ctx,
        )


class DatabaseError(InkpostError):
    """
    Raised when database operations fail unexpectedly.

    Security Note:
        The message returned to the client is always generic. Detailed
        error info (SQL, constraint names) is logged server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


# ══════════════════════════════════════════════════════════════════════════
# Token Errors: raised by TokenService, never returned to clients directly
# ══════════════════════════════════════════════════════════════════════════


class TokenError(Exception):
    """Base class for session token verification failures."""


class InvalidTokenError(TokenError):
    """Signature mismatch, malformed token, or missing claims."""


class ExpiredTokenError(TokenError):
    """The token's `exp` instant has passed."""
