"""
Bahía Escondida Cashless — FastAPI Application Factory
========================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance;
       `run()` starts uvicorn with a graceful-shutdown window.
Who:   uvicorn (`uvicorn app.main:app`) or the `cashless-api` console script.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────┐ ┌──────────────────┐  │
    │  │  Req ID  │→│  Logging    │→│  CORS            │  │
    │  └──────────┘ └─────────────┘ └──────────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  GET /, GET /api/ping                               │
    │  /api/huespedes  /api/transacciones  /api/productos │
    │                                                     │
    │  Exception Handlers:                                │
    │  ValidationError→400 │ NotFound→404 │ Database→500  │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Report missing MONGODB_URI (degraded mode, not fatal)
    3. Connect the storage adapter (retries, then degraded on failure)
    4. Seed the product catalog once, only when connected

    Shutdown (after uvicorn has drained in-flight requests):
    1. Close the MongoDB client
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Callable

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import settings
from app.database import Database
from app.exceptions import (
    CashlessError,
    DatabaseError,
    NotFoundError,
    ValidationError,
)
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import huespedes, productos, root, transacciones
from app.services.seed_service import seed_service

logger = logging.getLogger(__name__)

DatabaseFactory = Callable[[], Database]


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before any other initialization.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),  # Docker captures stdout
        ],
        force=True,
    )

    # Access lines come from RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("pymongo").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup connects the storage adapter and seeds the catalog; shutdown closes it.

    A failed or missing database never aborts startup: the adapter is left
    DEGRADED and data routes answer 500 until the process is restarted.
    """
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("Bahía Escondida Cashless API %s starting up...", __version__)

    try:
        settings.validate_database_config()
    except ValueError as e:
        logger.warning("Configuration: %s", str(e))

    database: Database = app.state.database_factory()
    app.state.database = database

    if await database.connect():
        try:
            await seed_service.ensure_seeded(database)
        except CashlessError as e:
            logger.error("Catalog seeding failed: %s | Context: %s", e.message, e.context)
    else:
        logger.warning("Running in degraded mode: data endpoints will answer 500")

    logger.info("Servidor corriendo en http://%s:%d", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Cerrando servidor...")
    await database.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_body(message: str) -> dict:
    return {"error": message, "request_id": request_id_var.get("")}


def register_exception_handlers(app: FastAPI) -> None:
    """
    Maps exception types to HTTP status codes.

    Handler hierarchy:
        ValidationError   → 400
        NotFoundError     → 404
        DatabaseError     → 500 (DatabaseUnavailableError included)
        CashlessError     → 500
        Exception         → 500 generic

    Responses never contain driver messages or stack traces; those are logged.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", request_id_var.get(""), exc.message)
        return JSONResponse(status_code=400, content=_error_body(exc.message))

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content=_error_body(exc.message))

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error(
            "[%s] Database error: %s | Context: %s",
            request_id_var.get(""),
            exc.message,
            exc.context,
        )
        return JSONResponse(status_code=500, content=_error_body(exc.message))

    @app.exception_handler(CashlessError)
    async def handle_app_error(request: Request, exc: CashlessError):
        logger.error("[%s] Application error: %s | Context: %s", request_id_var.get(""), exc.message, exc.context)
        return JSONResponse(status_code=500, content=_error_body(exc.message))

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
            content=_error_body("Error interno del servidor"),
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(database_factory: DatabaseFactory = Database.from_settings) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        database_factory: Builds the storage adapter during startup. Tests pass
                          a factory returning an adapter over an in-memory client.
    """
    app = FastAPI(
        title="Bahía Escondida Cashless API",
        description=(
            "Guest ledger for the resort's cashless payments: guests, "
            "product catalog and transactions."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database_factory = database_factory

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added = first to execute: RequestID → Logging → CORS
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
    app.include_router(root.router)
    app.include_router(huespedes.router)
    app.include_router(transacciones.router)
    app.include_router(productos.router)

    return app


def run() -> None:
    """
    Console entry point.

    On SIGINT/SIGTERM uvicorn stops accepting connections, waits up to
    SHUTDOWN_GRACE_SECONDS for in-flight requests, then runs the lifespan
    shutdown that closes MongoDB.
    """
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
