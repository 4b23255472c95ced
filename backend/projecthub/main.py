"""
ProjectHub Backend — FastAPI Application Factory
===================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers and routers;
       the lifespan configures logging and disposes the engine on shutdown.
Who:   uvicorn (uvicorn projecthub.main:app) and the test suite.

Application Architecture:
    ┌─────────────────────────────────────────────────────────┐
    │                      FastAPI App                        │
    │                                                         │
    │  Middleware (outermost first):                          │
    │  RequestID → Logging → Session → GZip → CORS            │
    │                                                         │
    │  Routes:                                                │
    │  /users  /user_tokens  /projects  /project_files        │
    │  /auth/google  /auth/google/callback  /auth/me          │
    │  /auth/logout  /health                                  │
    │                                                         │
    │  Exception Handlers:                                    │
    │  Validation→400 │ Auth→401 │ NotFound→404 │ DB→500      │
    └─────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, configuration check (logged, not fatal)
    Shutdown: dispose the engine (closes pooled connections)
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from projecthub import __version__
from projecthub.config import settings
from projecthub.database import dispose_engine
from projecthub.exceptions import (
    AuthenticationError,
    DatabaseError,
    NotFoundError,
    ProjectHubError,
    ValidationError,
)
from projecthub.middleware.logging import RequestLoggingMiddleware
from projecthub.middleware.request_id import RequestIDMiddleware, request_id_var
from projecthub.routes import auth, health, project_files, projects, user_tokens, users

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure the root logger once, before anything else logs.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Third-party loggers are chatty at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("authlib").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("ProjectHub Backend %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        # The CRUD API works without OAuth; only /auth/google needs it
        logger.error("Configuration error: %s", str(e))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("ProjectHub Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(error: str, message: str, details=None) -> dict:
    body = {"error": error, "message": message, "request_id": request_id_var.get("")}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to status codes and the shared error envelope.

    Handler hierarchy:
        ValidationError          → 400 (bad ids, filters, sort or order)
        RequestValidationError   → 400 (missing or mistyped body fields)
        AuthenticationError      → 401
        NotFoundError            → 404
        DatabaseError            → 500, generic message
        ProjectHubError (base)   → 500
        Exception (fallback)     → 500, traceback logged server-side only
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        # only the offending field is public; the rest of context stays in the log
        logger.warning(
            "[%s] Validation error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        details = {"field": exc.field} if exc.field else None
        return JSONResponse(
            status_code=400,
            content=_error_body("validation_error", exc.message, details),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        fields = [
            ".".join(str(part) for part in error.get("loc", ()) if part != "body")
            for error in errors
        ]
        message = "Invalid request"
        if fields and any(error.get("type") == "missing" for error in errors):
            message = "Missing required fields: " + ", ".join(
                field
                for field, error in zip(fields, errors)
                if error.get("type") == "missing"
            )
        logger.warning("[%s] %s", request_id_var.get(""), message)
        return JSONResponse(
            status_code=400,
            content=_error_body(
                "validation_error",
                message,
                {"fields": fields, "errors": [error.get("msg", "") for error in errors]},
            ),
        )

    @app.exception_handler(AuthenticationError)
    async def handle_authentication_error(request: Request, exc: AuthenticationError):
        return JSONResponse(
            status_code=401,
            content=_error_body("unauthorized", exc.message),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body("not_found", exc.message),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        # context can hold driver errors; it stays in the log
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                "server_error", "An internal error occurred. Please try again later."
            ),
        )

    @app.exception_handler(ProjectHubError)
    async def handle_projecthub_error(request: Request, exc: ProjectHubError):
        logger.error("[%s] %s: %s", request_id_var.get(""), type(exc).__name__, exc.message)
        return JSONResponse(
            status_code=500,
            content=_error_body("server_error", exc.message),
        )

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
            content=_error_body(
                "internal_server_error",
                "An unexpected error occurred. Please try again or contact support.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    app = FastAPI(
        title="ProjectHub API",
        description=(
            "Users, session tokens, projects and project file trees, "
            "with paginated, sortable, filterable listings and Google sign-in."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Last added runs first: RequestID → Logging → Session → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "X-Total-Count", "Location"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.session_secret,
        session_cookie="projecthub_session",
        same_site="lax",
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(users.router)
    app.include_router(user_tokens.router)
    app.include_router(projects.router)
    app.include_router(project_files.router)
    app.include_router(auth.router)
    app.include_router(health.router)

    return app


app = create_app()
