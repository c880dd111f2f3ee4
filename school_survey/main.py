"""
School Survey Backend — FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn (uvicorn school_survey.main:app).

Application Architecture:
    ┌──────────────────────────────────────────────────────┐
    │                     FastAPI App                      │
    │                                                      │
    │  Middleware Chain:                                   │
    │  ┌──────────┐ ┌─────────┐ ┌──────┐ ┌──────┐          │
    │  │  Req ID  │→│ Logging │→│ GZip │→│ CORS │          │
    │  └──────────┘ └─────────┘ └──────┘ └──────┘          │
    │                                                      │
    │  Routes:                                             │
    │  POST /api/submit-form[/teachers|/students]          │
    │  GET  /api/search-schools   GET /health              │
    │  GET  /{path} (static files, client shell)           │
    │                                                      │
    │  Exception Handlers → {"success": false, "error"}    │
    │  ValidationError→400 │ NotFound→404 │ Database→500   │
    └──────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (logged, not fatal)
    3. Build the engine + session factory and keep them on app.state
       (skipped when one was injected, e.g. by tests)
    4. Probe the database; an unreachable store aborts startup in
       production and is only logged elsewhere

    Shutdown:
    1. Dispose the engine (close all pooled connections)
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from school_survey import __version__
from school_survey.config import Settings, settings as default_settings
from school_survey.database import (
    create_engine,
    create_session_factory,
    dispose_engine,
    verify_connection,
)
from school_survey.exceptions import DatabaseError, SurveyError, ValidationError
from school_survey.logging_setup import setup_logging
from school_survey.middleware.logging import RequestLoggingMiddleware
from school_survey.middleware.request_id import RequestIDMiddleware, request_id_var
from school_survey.routes import client_shell, health, schools, submissions

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup: logging, config validation, shared connection pool.
    Shutdown: dispose the pool.

    The engine is process-scoped infrastructure stored on app.state; request
    handlers reach it only through the get_db_session dependency.
    """
    settings: Settings = app.state.settings

    setup_logging(settings.log_level)
    logger.info("=" * 60)
    logger.info("School Survey Backend starting up (environment=%s)...", settings.environment)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))
        logger.error("Fix the configuration and restart the server.")

    owns_engine = getattr(app.state, "engine", None) is None
    if owns_engine:
        try:
            engine = create_engine(settings)
        except DatabaseError as e:
            # Keep serving: /health reports the failure and writes return 500
            logger.error("Database unavailable: %s", e.message)
            engine = None
        if engine is not None:
            try:
                await verify_connection(engine)
                logger.info("Successfully connected to database")
            except DatabaseError as e:
                logger.error(e.message)
                if settings.is_production:
                    await dispose_engine(engine)
                    raise
        app.state.engine = engine
        app.state.session_factory = create_session_factory(engine) if engine else None

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    logger.info("School Survey Backend shutting down...")
    if owns_engine:
        await dispose_engine(app.state.engine)
        app.state.engine = None
        app.state.session_factory = None
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def format_validation_errors(errors: List[dict]) -> str:
    """
    Collapse pydantic error entries into one readable sentence.

    Custom presence checks already name their field ("Missing required
    field: schoolName"); other entries are prefixed with the field alias.
    """
    parts = []
    for error in errors:
        message = str(error.get("msg", "Invalid value"))
        if message.startswith("Value error, "):
            parts.append(message[len("Value error, "):])
            continue
        location = ".".join(
            str(p) for p in error.get("loc", ()) if p not in ("body", "query")
        )
        if error.get("type") == "missing" and location:
            parts.append(f"Missing required field: {location}")
        else:
            parts.append(f"{location}: {message}" if location else message)
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exceptions to the `{"success": false, "error": ...}` envelope.

    Handler hierarchy:
        ValidationError / RequestValidationError → 400
        NotFoundError                            → 404
        DatabaseError                            → 500
        SurveyError (base)                       → its status_code
        HTTPException (routing: 405 etc.)        → its status_code
        Exception (fallback)                     → 500

    Outside production the detailed message is returned; in production only
    the public message is. Details are always logged server-side.
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        message = format_validation_errors(exc.errors())
        logger.warning("[%s] Validation error on %s: %s", rid, request.url.path, message)
        if request.app.state.settings.is_production:
            message = ValidationError().public_message
        return _error_response(400, message)

    @app.exception_handler(SurveyError)
    async def handle_survey_error(request: Request, exc: SurveyError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s: %s | Context: %s", rid, type(exc).__name__, exc.message, exc.context)
        else:
            logger.warning("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        production = request.app.state.settings.is_production
        return _error_response(exc.status_code, exc.public_message if production else exc.message)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        production = request.app.state.settings.is_production
        return _error_response(
            500,
            "An unexpected error occurred. Please try again later." if production else str(exc),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the environment-loaded
                  singleton. Kept on app.state.settings for handlers.
    """
    settings = settings or default_settings

    app = FastAPI(
        title="School Survey API",
        description=(
            "Collects school-environment questionnaires from guardians, teachers "
            "and students, and offers a school-name autocomplete."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = None
    app.state.session_factory = None

    # Middleware executes in reverse order of addition:
    # RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    register_exception_handlers(app)

    app.include_router(submissions.router)
    app.include_router(schools.router)
    app.include_router(health.router)
    # Catch-all last
    app.include_router(client_shell.router)

    return app


app = create_app()
