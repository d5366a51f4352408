"""
Spa Booking API - FastAPI Application Factory
==============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() returns a configured FastAPI instance; uvicorn serves
       the module-level `app` (uvicorn spa_booking.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → CORS           │
    │                                                     │
    │  Routes:                                            │
    │    /booking_spa12          GET  POST  DELETE /{id}  │
    │    /api/payments           POST initiate, confirm   │
    │    /api/testimonials       GET  POST  DELETE /{id}  │
    │    /health                 GET                      │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError→400 │ NotFound→404 │ Store→500   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Validate configuration (log problems, keep starting)
    3. Build the Database unless one was injected, ping it once
       (a failed ping is logged; the server still comes up)
    4. Optionally create missing tables

    Shutdown:
    1. Dispose the Database this app created
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from spa_booking import __version__
from spa_booking.config import settings
from spa_booking.database import Database
from spa_booking.exceptions import (
    NotFoundError,
    SpaBookingError,
    StoreError,
    ValidationError,
)
from spa_booking.middleware.logging import RequestLoggingMiddleware
from spa_booking.middleware.request_id import RequestIDMiddleware, request_id_var
from spa_booking.routes import bookings, health, payments, testimonials

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Called once during startup, before any other initialization.
    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access middleware replaces uvicorn's; SQL echo only in DEBUG
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def log_store_parameters(database: Database) -> None:
    """Logs where we are connecting, never the password."""
    url = database.url
    logger.info("Connecting to the database with:")
    logger.info("  driver:   %s", url.drivername)
    logger.info("  host:     %s", url.host)
    logger.info("  port:     %s", url.port)
    logger.info("  database: %s", url.database)
    logger.info("  user:     %s", url.username)
    logger.info("  password: %s", "set" if url.password else "NOT SET")
    logger.info("  env:      %s (TLS %s)", settings.app_env, "on" if database.uses_tls else "off")


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Spa Booking API %s starting up...", __version__)

    try:
        settings.validate_required_for_production()
    except ValueError as e:
        logger.error("Configuration error: %s", str(e))

    database: Optional[Database] = getattr(app.state, "database", None)
    owns_database = database is None
    if owns_database:
        database = Database.from_settings(settings)
        app.state.database = database

    log_store_parameters(database)

    # Failure is logged, not fatal: the API keeps answering (with 500s)
    # instead of crash-looping while the database is unavailable.
    if await database.ping():
        logger.info("Connected to the database successfully!")
        if settings.db_create_schema:
            try:
                await database.create_schema()
                logger.info("Database schema is up to date.")
            except SQLAlchemyError as e:
                logger.error("Could not create the database schema: %s", e)

    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    for route in ("/booking_spa12", "/api/payments/initiate", "/api/payments/confirm", "/api/testimonials"):
        logger.info("  endpoint: %s", route)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Spa Booking API shutting down...")
    if owns_database:
        await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and one response shape.

    Handler hierarchy:
        ValidationError         → 400 Bad Request
        RequestValidationError  → 400 Bad Request (malformed JSON, bad path id)
        NotFoundError           → 404 Not Found
        StoreError              → 500 Internal Server Error
        SpaBookingError (base)  → 500 Internal Server Error
        Exception (fallback)    → 500 Internal Server Error

    Stack traces and driver errors are logged, never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Malformed request: %s", rid, exc.errors())
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "Request body or path parameters are missing or malformed.",
                "details": {"errors": jsonable_encoder(exc.errors())},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(SpaBookingError)
    async def handle_application_error(request: Request, exc: SpaBookingError):
        rid = request_id_var.get("")
        logger.error("[%s] Application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again later.",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database: Optional[Database] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database: An already-built Database to serve from. Tests pass one;
                  in production it is left None and the lifespan builds it
                  from settings (and disposes it on shutdown).
    """
    app = FastAPI(
        title="Spa Booking API",
        description=(
            "Bookings, testimonials and a simulated QR payment flow "
            "for the spa booking website."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    if database is not None:
        app.state.database = database

    # ── Register Middleware ───────────────────────────────────────────────
    # Executes in REVERSE order of addition: RequestID → Logging → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(bookings.router)
    app.include_router(payments.router)
    app.include_router(testimonials.router)
    app.include_router(health.router)

    return app


# uvicorn expects `spa_booking.main:app` to be importable
app = create_app()
