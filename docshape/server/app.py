"""
Main FastAPI application for docshape.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager

from .config import get_config, ServerConfig
from .routes import create_api_router
from .middleware import RequestLoggingMiddleware
from .dependencies import StoreManager
from ..core.exceptions import QueryNotFoundError, QueryParseError, ValidationError
from ..utils.logging import get_logger, set_level

logger = get_logger("docshape.server")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting docshape server...")
    settings = StoreManager.get_settings()
    set_level(get_config().log_level or settings.log_level)

    store = StoreManager.get_store()
    logger.info(f"Store initialized with {len(store)} saved queries")

    yield

    # Shutdown
    logger.info("Shutting down docshape server...")
    StoreManager.shutdown()
    logger.info("Server shutdown complete")


def create_app(config: ServerConfig = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        config: Optional server configuration

    Returns:
        FastAPI application instance
    """
    if config:
        from .config import set_config
        set_config(config)

    config = get_config()

    app = FastAPI(
        title="docshape API",
        description="""
# docshape - Client-side shaping of document-store results

## Features

- **Field discovery**: Top-level fields with inferred types
- **Filtering**: 16 operators combined with AND/OR
- **Sorting**: Stable, type-aware multi-key sorting
- **Query building**: Mango-style queries from builder rows
- **Saved queries**: CRUD, export and import

        """,
        version="0.1.0",
        docs_url="/docs" if config.docs_enabled else None,
        redoc_url="/redoc" if config.docs_enabled else None,
        openapi_url="/openapi.json" if config.docs_enabled else None,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(QueryNotFoundError)
    async def not_found_handler(request: Request, exc: QueryNotFoundError):
        return JSONResponse(
            status_code=404,
            content={"success": False, "error": "Not found", "detail": str(exc)},
        )

    @app.exception_handler(ValidationError)
    @app.exception_handler(QueryParseError)
    async def bad_request_handler(request: Request, exc: Exception):
        return JSONResponse(
            status_code=400,
            content={"success": False, "error": "Bad request", "detail": str(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error(f"Unhandled exception: {exc}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Internal server error",
                "detail": str(exc) if config.log_level == "DEBUG" else None,
            }
        )

    api_router = create_api_router()
    app.include_router(api_router, prefix=config.api_prefix)

    @app.get("/", include_in_schema=False)
    async def root():
        return {
            "name": "docshape",
            "version": "0.1.0",
            "docs": "/docs",
            "api": config.api_prefix,
        }

    return app
