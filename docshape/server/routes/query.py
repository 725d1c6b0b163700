"""
Structured query endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ..models import (
    BuildQueryRequest,
    ErrorResponse,
    ParseQueryRequest,
    ParseQueryResponse,
    QueryResponse,
)
from ..dependencies import get_query_builder
from ...core.exceptions import QueryParseError
from ...core.types import UNSET
from ...query.parser import QueryParser
from ...query.selector import QueryOptions, QuerySelectorBuilder

router = APIRouter()


@router.post(
    "/build",
    response_model=QueryResponse,
    response_model_exclude_none=True,
    summary="Build a query",
    description="Translate query-builder rows into a Mango-style query.",
)
def build_query(
    request: BuildQueryRequest,
    builder: QuerySelectorBuilder = Depends(get_query_builder),
):
    """Build a structured query."""
    if request.no_limit:
        limit = None
    elif "limit" in request.model_fields_set:
        limit = request.limit
    else:
        limit = UNSET

    options = QueryOptions(
        fields=request.fields,
        sort=request.sort.model_dump() if request.sort else None,
        limit=limit,
    )
    query = builder.build(
        [c.model_dump() for c in request.conditions],
        options,
    )
    return query.to_dict()


@router.post(
    "/parse",
    response_model=ParseQueryResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Text is not a valid query"},
    },
    summary="Parse a query",
    description=(
        "Parse hand-written or generated query text and map its selector "
        "onto client-side filter conditions."
    ),
)
def parse_query(
    request: ParseQueryRequest,
    builder: QuerySelectorBuilder = Depends(get_query_builder),
):
    """Parse query text."""
    parser = QueryParser(default_limit=builder.default_limit)
    try:
        query = parser.parse(request.text)
    except QueryParseError as e:
        raise HTTPException(status_code=400, detail=str(e))

    conditions = parser.conditions_from_selector(query.selector)

    return {
        "query": query.to_dict(),
        "conditions": [c.to_dict() for c in conditions],
    }
