"""
Cash Card API: FastAPI Application Factory
==========================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() is the wiring root: it takes (or builds) the engine and
       the repository, hands the repository to the cash card handler and the
       engine to the health router and the lifespan, then registers
       middleware and exception handlers.
Who:   uvicorn imports the module-level `app` (uvicorn cashcard.main:app);
       tests call create_app() with their own repository.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐                   │
    │  │ Req ID   │→│  Logging        │                   │
    │  └──────────┘ └─────────────────┘                   │
    │                                                     │
    │  Routes:                                            │
    │  ┌────────────────────┐ ┌─────────────────┐         │
    │  │ GET /cashcards/{id}│ │ GET /health     │         │
    │  └────────────────────┘ └─────────────────┘         │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ DatabaseError→500 │ Exception→500            │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  logging, schema creation on the app's engine, readiness log
    Shutdown: dispose the app's engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncEngine

from cashcard import __version__, database
from cashcard.config import settings
from cashcard.database import build_session_factory, create_schema
from cashcard.exceptions import DatabaseError
from cashcard.middleware.logging import RequestLoggingMiddleware
from cashcard.middleware.request_id import (
    RequestIDFilter,
    RequestIDMiddleware,
    request_id_var,
)
from cashcard.routes import cash_cards, health
from cashcard.services import CashCardRepository, SQLAlchemyCashCardRepository

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s

    The request ID comes from RequestIDFilter, attached to the stdout handler
    so that records from every logger (ours and third-party) carry it.
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIDFilter())

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s [%(request_id)s]: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[handler],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup sequence:
        1. Setup logging
        2. Create the cash_card table on the app's engine if it does not exist
        3. Log readiness

    Shutdown sequence:
        1. Dispose the app's engine (close all pooled connections)

    Schema creation is not wrapped: if the database cannot be reached the
    process fails to start rather than serving 500s.
    """
    engine: AsyncEngine = app.state.engine

    setup_logging()
    logger.info("Cash Card API %s starting up...", __version__)

    await create_schema(engine)
    logger.info("Database schema ready on %s", engine.url.render_as_string(hide_password=True))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Cash Card API shutting down...")
    await engine.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP responses.

    Handler hierarchy:
        DatabaseError          → 500 (store unavailable / schema missing)
        Exception (fallback)   → 500

    Responses never include SQL, stack traces or context; those are logged.
    The request ID is stamped on each log line by RequestIDFilter.
    """

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        """Database error: generic message to the client, details logged server-side."""
        logger.error("Database error: %s | Context: %s", exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": request_id_var.get(""),
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all for truly unexpected errors; stack trace goes to the log only."""
        logger.error("Unexpected error: %s", str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": "An unexpected error occurred. Please try again or contact support.",
                "request_id": request_id_var.get(""),
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    engine: Optional[AsyncEngine] = None,
    repository: Optional[CashCardRepository] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        engine:     Database the app owns: schema creation at startup, the
                    health check, disposal at shutdown. Defaults to the
                    engine built from settings.database_url.
        repository: Lookup service for the cash card handler. Defaults to a
                    SQLAlchemyCashCardRepository over `engine`.

    Returns:
        Fully configured FastAPI instance. `app.state.engine` and
        `app.state.cash_card_handler` hold the assembled collaborators.
    """
    if engine is None:
        engine = database.engine
    if repository is None:
        repository = SQLAlchemyCashCardRepository(build_session_factory(engine))

    app = FastAPI(
        title="Cash Card API",
        description="Read access to cash cards by identifier.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → routes
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    handler = cash_cards.CashCardHandler(repository)
    app.include_router(cash_cards.create_router(handler))
    app.include_router(health.create_router(engine))

    app.state.engine = engine
    app.state.cash_card_handler = handler

    return app


# ── Application Instance ─────────────────────────────────────────────────
app = create_app()
