"""
Help Center Backend — FastAPI Application Factory
===================================================

What:  Builds the FastAPI app: middleware, exception handlers, routers and the
       startup/shutdown lifespan.
Who:   uvicorn (`uvicorn helpcenter.main:app --port 3006`) and the test suite.

Application Architecture:
    ┌────────────────────────────────────────────────────────┐
    │                     FastAPI App                        │
    │  Middleware: RequestID → Logging → Session → GZip → CORS│
    │                                                        │
    │  Routes:                                               │
    │    /auth/{google,github}[/callback]  /auth/me  logout  │
    │    /api/users  /api/reports  /api/articles  /health    │
    │                                                        │
    │  Exception Handlers (single status-code boundary):     │
    │    Validation→400  Auth→401  NotFound→404              │
    │    Conflict→409    UpstreamAuth→302  Database→500      │
    └────────────────────────────────────────────────────────┘
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.sessions import SessionMiddleware

from helpcenter import __version__
from helpcenter.config import settings
from helpcenter.database import dispose_engine
from helpcenter.exceptions import (
    AuthenticationRequiredError,
    ConflictError,
    DatabaseError,
    HelpCenterError,
    NotFoundError,
    UpstreamAuthError,
    ValidationError,
)
from helpcenter.messages import msg
from helpcenter.middleware.logging import RequestLoggingMiddleware
from helpcenter.middleware.request_id import RequestIDMiddleware, request_id_var
from helpcenter.routes import articles, auth, health, reports, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Plain `asctime [LEVEL] logger: message` lines to stdout (Docker collects
    stdout). Chatty third-party loggers are raised to WARNING.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("authlib").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: logging + config check. Shutdown: close pooled connections."""
    setup_logging()
    logger.info("Help Center backend %s starting up...", __version__)

    # Not fatal: the JSON API works without OAuth credentials, and logins
    # against an unconfigured provider redirect to the failure page.
    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Help Center backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details: dict | None = None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to HTTP responses.

        ValidationError / RequestValidationError  → 400
        AuthenticationRequiredError               → 401
        NotFoundError                             → 404
        ConflictError                             → 409
        UpstreamAuthError                         → 302 LOGIN_FAILURE_REDIRECT
        DatabaseError / HelpCenterError           → 500 (generic message)
        Exception                                 → 500 (generic message)

    Server-side details (context, stack traces) are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Malformed JSON, wrong types or a non-numeric id: still a 400."""
        logger.warning("[%s] Invalid request: %s", request_id_var.get(""), exc.errors())
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", msg("invalid_request")),
        )

    @app.exception_handler(AuthenticationRequiredError)
    async def handle_auth_required(request: Request, exc: AuthenticationRequiredError):
        return JSONResponse(status_code=401, content=_error_body("unauthorized", exc.message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body("not_found", exc.message))

    @app.exception_handler(ConflictError)
    async def handle_conflict(request: Request, exc: ConflictError):
        return JSONResponse(status_code=409, content=_error_body("conflict", exc.message))

    @app.exception_handler(UpstreamAuthError)
    async def handle_upstream_auth(request: Request, exc: UpstreamAuthError):
        logger.warning(
            "[%s] Login failed: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return RedirectResponse(settings.login_failure_redirect, status_code=302)

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content=_error_body("server_error", exc.message))

    @app.exception_handler(HelpCenterError)
    async def handle_app_error(request: Request, exc: HelpCenterError):
        logger.error("[%s] %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(status_code=500, content=_error_body("server_error", msg("internal_error")))

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error(
            "[%s] Unexpected error: %s",
            request_id_var.get(""),
            str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body("internal_server_error", msg("internal_error")),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """Assemble middleware, handlers and routers into a fresh FastAPI app."""
    app = FastAPI(
        title="Help Center API",
        description=(
            "Help articles, incident reports and user profiles, "
            "with Google and GitHub login."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs first: RequestID → Logging → Session → GZip → CORS.
    # Credentials are allowed so the browser sends the session cookie.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)

    # Holds only the OAuth state/nonce between redirect and callback; the
    # logged-in principal lives in SessionPrincipalService's own cookie.
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie="helpcenter_oauth",
        max_age=600,
        same_site="lax",
        https_only=settings.cookie_secure,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(reports.router)
    app.include_router(articles.router)
    app.include_router(health.router)

    return app


app = create_app()
