"""
FlowRouter Backend - FastAPI Application Factory
================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() registers middleware, exception handlers, the ordinary
       FastAPI routes and finally the flow router's catch-all route.
Who:   uvicorn (`uvicorn flowrouter.main:app`) and the `flowrouter` script.

Route precedence:
    /docs, /openapi.json, /health are registered first and win. Every other
    request for a supported verb reaches ApplicationRouter.routing().

Lifecycle:
    Startup:  configure logging, optionally create the schema.
    Shutdown: dispose the database engine.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from flowrouter import __version__
from flowrouter.config import settings
from flowrouter.database import create_schema, dispose_engine
from flowrouter.exceptions import (
    DatabaseError,
    FlowRouterError,
    NotFoundError,
    ValidationError,
)
from flowrouter.flow import HttpRouter
from flowrouter.middleware.logging import RequestLoggingMiddleware
from flowrouter.middleware.request_id import (
    RequestIDMiddleware,
    request_id_var,
    unexpected_error_response,
)
from flowrouter.routes import health
from flowrouter.routes.application import ApplicationRouter

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """Configure the root logger once, before any other initialization."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[
            logging.StreamHandler(sys.stdout),
        ],
        force=True,
    )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("FlowRouter backend %s starting up...", __version__)

    if settings.db_create_schema:
        await create_schema()

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("FlowRouter backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map application exceptions to JSON error responses.

        ValidationError  → 400
        NotFoundError    → 404
        DatabaseError    → 500 (generic message, details logged)
        FlowRouterError  → 500
        Exception        → 500 (stack trace logged, never returned)

    Exceptions escaping a handler are rendered by RequestIDMiddleware; the
    `Exception` handler here only sees failures raised outside it.
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

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        rid = request_id_var.get("")
        logger.error("[%s] Database error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "An internal error occurred. Please try again later.",
                "request_id": rid,
            },
        )

    @app.exception_handler(FlowRouterError)
    async def handle_application_error(request: Request, exc: FlowRouterError):
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
        return unexpected_error_response(rid)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(flow_router: Optional[HttpRouter] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        flow_router: the catch-all router to mount; defaults to an
            ApplicationRouter bound to the app's BookRepository. Tests pass
            one bound to their own database.
    """
    app = FastAPI(
        title="FlowRouter API",
        description="Expression-based routing on top of FastAPI, with a small book CRUD example.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # Middleware executes in REVERSE order of addition:
    # RequestID → Logging → GZip → CORS
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

    register_exception_handlers(app)

    # Ordinary routes first: the flow router's catch-all would shadow them
    app.include_router(health.router)
    app.include_router((flow_router or ApplicationRouter()).as_api_router())

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "flowrouter.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )
