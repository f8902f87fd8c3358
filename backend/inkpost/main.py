"""
Inkpost Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app(settings) returns a configured FastAPI
       instance with its own engine, session factory, token service and
       user service stored on `app.state`.
Who:   Called by uvicorn (uvicorn inkpost.main:app) and by the test suite.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                    FastAPI App                       │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌─────────────┐ ┌──────┐ ┌──────────┐  │
    │  │  Req ID  │→│  Logging    │→│ GZip │→│  CORS    │  │
    │  └──────────┘ └─────────────┘ └──────┘ └──────────┘  │
    │                                                      │
    │  Routes:                                             │
    │  ┌────────────┐ ┌─────────────┐ ┌─────────────────┐  │
    │  │ /api/auth  │ │ /api/blogs  │ │ / and /health   │  │
    │  └────────────┘ └─────────────┘ └─────────────────┘  │
    │                                                      │
    │  Exception Handlers (envelope {error, message, ...}):│
    │  ┌────────────────────────────────────────────────┐  │
    │  │ InkpostError→own status │ 404 route │ 400 body │  │
    │  │ Exception→500 generic                          │  │
    │  └────────────────────────────────────────────────┘  │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate security-sensitive configuration (warn on dev defaults)
    3. Create tables when DB_CREATE_ALL is set
    Shutdown:
    1. Dispose database engine (close all connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from inkpost import __version__
from inkpost.config import Settings, settings as default_settings
from inkpost.database import (
    create_all_tables,
    create_engine,
    create_session_factory,
    dispose_engine,
)
from inkpost.exceptions import InkpostError
from inkpost.middleware.logging import RequestLoggingMiddleware
from inkpost.middleware.request_id import RequestIDMiddleware, request_id_var
from inkpost.routes import auth, blogs, health
from inkpost.services.password_service import PasswordHasher
from inkpost.services.token_service import TokenService
from inkpost.services.user_service import UserService

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "An internal error occurred. Please try again later."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(log_level: str) -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(settings.log_level)
    logger.info("Inkpost Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # Local development runs on the defaults; say so loudly
        logger.warning("%s", str(e))
        logger.warning("Development defaults must never be used in production.")

    if settings.db_create_all:
        await create_all_tables(app.state.engine)
        logger.info("Database tables ensured (DB_CREATE_ALL)")

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Inkpost Backend shutting down...")
    await dispose_engine(app.state.engine)
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str, code: str, details: Optional[dict] = None) -> dict:
    body = {
        "error": True,
        "message": message,
        "code": code,
        "request_id": request_id_var.get(""),
    }
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        InkpostError subclasses → their own status_code / code
            4xx: message returned to the client as-is
            5xx: generic message; details logged server-side
        HTTPException (unknown route, wrong method) → same status, envelope
        RequestValidationError (malformed body) → 400 validation_error
        Exception (fallback) → 500 internal_server_error

    Security: handlers NEVER expose stack traces, SQL or internal context
    in 5xx responses.
    """

    @app.exception_handler(InkpostError)
    async def handle_app_error(request: Request, exc: InkpostError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error(
                "[%s] %s on %s %s: %s | Context: %s",
                rid, type(exc).__name__, request.method, request.url.path,
                exc.message, exc.context,
            )
            return JSONResponse(
                status_code=exc.status_code,
                content=_error_body(GENERIC_SERVER_ERROR, exc.code),
            )

        logger.warning(
            "[%s] %s on %s %s: %s",
            rid, type(exc).__name__, request.method, request.url.path, exc.message,
        )
        details = {"field": exc.context["field"]} if "field" in exc.context else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.code, details),
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        message = "Route not found" if exc.status_code == 404 else str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(message, "not_found" if exc.status_code == 404 else "http_error"),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Schema-level body problems answer 400 like every other client error."""
        errors = exc.errors()
        first = errors[0] if errors else {}
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = first.get("msg", "Invalid request body")
        if location:
            message = f"{location}: {message}"
        logger.warning("[%s] Request validation failed: %s", request_id_var.get(""), message)
        return JSONResponse(
            status_code=400,
            content=_error_body(message, "validation_error"),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: generic 500, full stack trace in the server log only."""
        logger.error(
            "[%s] Unexpected error on %s %s: %s",
            request_id_var.get(""),
            request.method,
            request.url.path,
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "An unexpected error occurred. Please try again or contact support.",
                "internal_server_error",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration for this instance. Tests pass their own so
                  each app gets an isolated database and signing key.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="Inkpost API",
        description="Blogging REST API: accounts, session tokens and author-owned posts.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Process-wide collaborators ────────────────────────────────────────
    engine = create_engine(settings)
    token_service = TokenService(
        secret=settings.jwt_secret,
        lifetime=settings.token_lifetime,
        algorithm=settings.jwt_algorithm,
    )
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.token_service = token_service
    app.state.user_service = UserService(
        token_service=token_service,
        password_hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS → route
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(auth.router)
    app.include_router(blogs.router)
    app.include_router(health.router)

    return app


# uvicorn expects `inkpost.main:app` to be importable
app = create_app()
