"""
Saved-query endpoints.
"""

from __future__ import annotations

from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from ..models import ErrorResponse, SuccessResponse
from ..dependencies import get_store
from ...core.exceptions import QueryNotFoundError, ValidationError
from ...storage import BaseQueryStore

router = APIRouter()

EXPORT_FILENAME = "saved-queries.json"


@router.get(
    "",
    summary="List saved queries",
    description="Get every saved query in creation order.",
)
def list_queries(
    store: BaseQueryStore = Depends(get_store),
) -> List[Dict[str, Any]]:
    """List all saved queries."""
    return [record.to_dict() for record in store.list()]


@router.post(
    "",
    status_code=201,
    responses={
        201: {"description": "Query saved"},
    },
    summary="Save a query",
    description="Store a query; the server assigns its ID and timestamps.",
)
def create_query(
    data: Dict[str, Any] = Body(...),
    store: BaseQueryStore = Depends(get_store),
) -> Dict[str, Any]:
    """Save a new query."""
    return store.create(data).to_dict()


@router.get(
    "/export/all",
    summary="Export saved queries",
    description="Download every saved query as a JSON attachment.",
)
def export_queries(
    store: BaseQueryStore = Depends(get_store),
):
    """Export all saved queries."""
    return JSONResponse(
        content=store.export_all(),
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post(
    "/import",
    response_model=SuccessResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Body is not a list of records"},
    },
    summary="Import saved queries",
    description="Replace every saved query with the posted list.",
)
def import_queries(
    records: Any = Body(...),
    store: BaseQueryStore = Depends(get_store),
):
    """Replace all saved queries."""
    try:
        count = store.import_all(records)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return SuccessResponse(
        message=f"Imported {count} saved queries",
        data={"count": count},
    )


@router.get(
    "/{query_id}",
    responses={
        404: {"model": ErrorResponse, "description": "Query not found"},
    },
    summary="Get a saved query",
)
def get_query(
    query_id: str,
    store: BaseQueryStore = Depends(get_store),
) -> Dict[str, Any]:
    """Get a saved query by ID."""
    try:
        return store.get(query_id).to_dict()
    except QueryNotFoundError:
        raise HTTPException(status_code=404, detail=f"Query '{query_id}' not found")


@router.put(
    "/{query_id}",
    responses={
        404: {"model": ErrorResponse, "description": "Query not found"},
    },
    summary="Update a saved query",
    description="Merge the posted fields into a saved query.",
)
def update_query(
    query_id: str,
    updates: Dict[str, Any] = Body(...),
    store: BaseQueryStore = Depends(get_store),
) -> Dict[str, Any]:
    """Update a saved query."""
    try:
        return store.update(query_id, updates).to_dict()
    except QueryNotFoundError:
        raise HTTPException(status_code=404, detail=f"Query '{query_id}' not found")


@router.delete(
    "/{query_id}",
    response_model=SuccessResponse,
    responses={
        404: {"model": ErrorResponse, "description": "Query not found"},
    },
    summary="Delete a saved query",
)
def delete_query(
    query_id: str,
    store: BaseQueryStore = Depends(get_store),
):
    """Delete a saved query."""
    try:
        store.delete(query_id)
    except QueryNotFoundError:
        raise HTTPException(status_code=404, detail=f"Query '{query_id}' not found")

    return SuccessResponse(message=f"Query '{query_id}' deleted")
