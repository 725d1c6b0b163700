"""
API routes for docshape server.
"""

from fastapi import APIRouter
from .queries import router as queries_router
from .documents import router as documents_router
from .query import router as query_router
from .admin import router as admin_router


def create_api_router() -> APIRouter:
    """Create the main API router with all sub-routers."""
    api_router = APIRouter()

    # Include sub-routers
    api_router.include_router(
        queries_router,
        prefix="/queries",
        tags=["Saved Queries"],
    )
    api_router.include_router(
        documents_router,
        prefix="/documents",
        tags=["Documents"],
    )
    api_router.include_router(
        query_router,
        prefix="/query",
        tags=["Query"],
    )
    api_router.include_router(
        admin_router,
        tags=["Admin"],
    )

    return api_router
