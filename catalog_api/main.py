"""
Catalog API - FastAPI Application Factory
=========================================

What:  Creates and configures the FastAPI application instance.
Why:   Centralizes middleware registration, dependency wiring, route mounting,
       error handling and lifecycle management in one place.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its own seeded ProductStore.
Who:   Called by uvicorn (uvicorn catalog_api.main:app) or `catalog-api`.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                      FastAPI App                         │
    │                                                          │
    │  Middleware:   Request ID → Request Logging              │
    │  Dependencies: Body Parser (all routes)                  │
    │                → API key → Validation (mutating routes)  │
    │                                                          │
    │  Routes:  GET /   /api/products[...]   * (404 fallback)  │
    │                                                          │
    │  Exception Handlers → one renderer:                      │
    │    VALIDATION→400  AUTHENTICATION→401                    │
    │    NOT_FOUND→404   INTERNAL→500                          │
    └──────────────────────────────────────────────────────────┘
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from catalog_api import __version__
from catalog_api.config import settings
from catalog_api.exceptions import CatalogError, ErrorKind, to_catalog_error
from catalog_api.middleware.body_parser import parse_json_body
from catalog_api.middleware.logging import RequestLoggingMiddleware, original_url
from catalog_api.middleware.request_id import (
    RequestIDMiddleware,
    attach_request_id,
    current_request_id,
)
from catalog_api.routes import fallback, products, root
from catalog_api.schemas.product import ErrorResponse
from catalog_api.services.product_store import ProductStore, seed_products

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s
    Called once during app startup, before anything logs.
    """
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access logger replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    setup_logging()
    logger.info("=" * 60)
    logger.info("Catalog API %s starting up (environment=%s)", __version__, settings.environment)
    logger.info("Catalog seeded with %d products", len(app.state.store))
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info(
        "Example: GET http://%s:%d/api/products?category=electronics&page=1&limit=5",
        settings.host,
        settings.port,
    )
    logger.info('Authentication: include header "x-api-key: api-key-your-key-here"')
    logger.info("=" * 60)

    yield

    logger.info("Catalog API shutting down")


# ══════════════════════════════════════════════════════════════════════════
# Error Handling
# ══════════════════════════════════════════════════════════════════════════

def _format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def render_error(request: Request, exc: BaseException) -> JSONResponse:
    """
    Turn any exception into the error envelope.

    What:    The single error channel. Every exception handler below calls
             this, so all routes share one response shape.
    How:     1. Fold the exception into the taxonomy (to_catalog_error)
             2. Log timestamp, method, path, message and stack
                (WARNING for 4xx, ERROR with traceback for 5xx)
             3. Respond {success: false, status, message, errors?, stack?}

    The stack trace is only put in the body in development mode; it is
    always logged.
    The X-Request-ID header is set here too, since 500s are rendered
    outside RequestIDMiddleware.
    """
    error = to_catalog_error(exc)
    stack = _format_stack(exc)
    rid = current_request_id(request)
    path = original_url(request)
    is_internal = error.kind is ErrorKind.INTERNAL

    logger.log(
        logging.ERROR if is_internal else logging.WARNING,
        "[%s] %s %s failed: %s",
        rid,
        request.method,
        path,
        str(exc) if is_internal else error.message,
        exc_info=exc if is_internal else None,
        extra={
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "request_id": rid,
            "method": request.method,
            "path": path,
            "error_message": error.message,
            "stack": stack,
        },
    )

    body = ErrorResponse(
        status=error.status,
        message=error.message,
        errors=error.errors or None,
        stack=stack if settings.is_development else None,
    )
    response = JSONResponse(
        status_code=error.status_code,
        content=body.model_dump(by_alias=True, exclude_none=True),
    )
    return attach_request_id(response, rid)


def register_exception_handlers(app: FastAPI) -> None:
    """
    Route every exception type the app can see into render_error.

    CatalogError            → raised by our code (all four kinds)
    StarletteHTTPException  → framework-raised HTTP errors
                              (405 → the catch-all "Route ... not found")
    RequestValidationError  → FastAPI parameter validation
    Exception               → anything unexpected (INTERNAL, generic message)
    """

    @app.exception_handler(CatalogError)
    async def handle_catalog_error(request: Request, exc: CatalogError):
        return render_error(request, exc)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 405:
            return render_error(request, fallback.route_not_found(request))
        return render_error(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return render_error(request, exc)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        return render_error(request, exc)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(store: Optional[ProductStore] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        store: Product store to serve. Defaults to a fresh store holding the
               seed catalog, so each app (and each test) starts clean.
    """
    app = FastAPI(
        title="Product Catalog API",
        description=(
            "In-memory product catalog demonstrating middleware composition, "
            "validation, filtering, pagination and centralized error handling."
        ),
        version=__version__,
        lifespan=lifespan,
        # Body parsing runs for every route, before any route-level guard
        dependencies=[Depends(parse_json_body)],
    )

    app.state.store = store if store is not None else ProductStore(seed_products())

    # ── Register Middleware ───────────────────────────────────────────────
    # Middleware executes in REVERSE order of addition:
    # RequestID runs first, then Logging (which reads the request ID).
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    # Fallback must be last: it matches every path
    app.include_router(root.router)
    app.include_router(products.router)
    app.include_router(fallback.router)

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn on the configured port."""
    uvicorn.run(
        "catalog_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
