"""
Inkwell Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance.
Who:   Called by uvicorn to start the server (uvicorn app.main:app).

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────┐ ┌─────────────────┐ ┌──────┐ ┌──────┐ │
    │  │ Req ID   │→│  Logging        │→│ GZip │→│ CORS │ │
    │  └──────────┘ └─────────────────┘ └──────┘ └──────┘ │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │ /users...    │ │ /articles... │ │ GET /health │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌──────────────────────────────────────────────┐   │
    │  │ Validation→400 │ NotFound→404 │ Conflict→409 │   │
    │  │ routing→404/405 │ Database, unexpected→500   │   │
    │  └──────────────────────────────────────────────┘   │
    └─────────────────────────────────────────────────────┘

Every error response has the same shape: {"error": <message>}.
"""

import logging
import sys
from contextlib import asynccontextmanager
from http import HTTPStatus
from typing import AsyncGenerator

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app import __version__
from app.config import settings
from app.database import dispose_engine
from app.error_log import log_error, setup_error_log
from app.exceptions import InkwellError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import RequestIDMiddleware, request_id_var
from app.routes import articles, health, users

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Internal Server Error"

# Methods the route table serves; any other method is simply not allowed
ROUTED_METHODS = {"GET", "POST", "PUT", "DELETE"}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s to stdout.
    The error log (app.error_log) additionally writes to ERROR_LOG_FILE
    when it is configured.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,  # Override any existing logging config
    )
    setup_error_log(settings.error_log_file)

    # Reduce noise from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup:  configure logging, log where the server listens.
    Shutdown: dispose the database engine (close pooled connections).
    """
    setup_logging()
    logger.info("Inkwell Backend %s starting up...", __version__)
    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)

    yield

    logger.info("Inkwell Backend shutting down...")
    await dispose_engine()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def routing_error_message(request: Request, exc: StarletteHTTPException) -> str:
    """
    Message for requests the route table could not dispatch.

    A routed method on a path that exists but does not accept it
    (POST /users/1, PUT /users) reads "Invalid URL for <METHOD> request";
    any other method (PATCH, TRACE, ...) reads "Method Not Allowed".
    """
    if exc.status_code == 405:
        method = request.method.upper()
        if method in ROUTED_METHODS:
            return f"Invalid URL for {method} request"
        return "Method Not Allowed"
    if isinstance(exc.detail, str) and exc.detail:
        return exc.detail
    return HTTPStatus(exc.status_code).phrase


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and `{"error": ...}` bodies.

    Handler hierarchy:
        ValidationError / NotFoundError / ConflictError → their status code
        DatabaseError (and any other 5xx InkwellError)  → 500, logged
        RequestValidationError (malformed JSON body)    → 400
        StarletteHTTPException (routing)                → 404 / 405
        Exception (fallback)                            → 500, logged

    Security: 500 bodies are always "Internal Server Error"; details go
    to the error log only.
    """

    @app.exception_handler(InkwellError)
    async def handle_app_error(request: Request, exc: InkwellError):
        if exc.status_code >= 500:
            log_error(exc, exc.context)
            return JSONResponse(status_code=exc.status_code, content={"error": INTERNAL_ERROR})
        rid = request_id_var.get("")
        logger.info("[%s] %s %s → %d: %s", rid, request.method, request.url.path,
                    exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"error": exc.payload})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        """Only malformed bodies get here; handlers take raw JSON and strings."""
        rid = request_id_var.get("")
        logger.info("[%s] Unparseable request: %s", rid, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(StarletteHTTPException)
    async def handle_routing_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": routing_error_message(request, exc)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all: the stack trace is logged, never returned."""
        log_error(exc)
        return JSONResponse(status_code=500, content={"error": INTERNAL_ERROR})


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app = FastAPI(
        title="Inkwell API",
        description="Users and their articles over a JSON HTTP API.",
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

    app.include_router(users.router)
    app.include_router(articles.router)
    app.include_router(health.router)

    return app


# uvicorn expects `app.main:app` to be importable
app = create_app()
