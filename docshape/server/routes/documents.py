"""
Document shaping endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request

from config import Settings

from ..models import (
    ErrorResponse,
    FieldsRequest,
    FieldsResponse,
    ProcessRequest,
    ProcessResponse,
)
from ..config import get_config
from ..dependencies import get_processor, get_settings
from ...query.executor import DocumentProcessor
from ...query.fields import extract_fields, extract_user_fields
from ...query.inference import infer_field_types

router = APIRouter()


def _check_size(documents) -> None:
    limit = get_config().max_documents_per_request
    if len(documents) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Too many documents in one request ({len(documents)} > {limit})",
        )


@router.post(
    "/fields",
    response_model=FieldsResponse,
    responses={
        413: {"model": ErrorResponse, "description": "Too many documents"},
    },
    summary="Discover fields",
    description="List the top-level fields of a collection with inferred types.",
)
def discover_fields(
    request: FieldsRequest,
    settings: Settings = Depends(get_settings),
):
    """Extract field names and infer their types."""
    _check_size(request.documents)
    engine = settings.engine_config

    if request.include_internal:
        fields = extract_fields(request.documents, sample_size=engine.field_sample_size)
    else:
        fields = extract_user_fields(
            request.documents,
            prefix=engine.internal_field_prefix,
            sample_size=engine.field_sample_size,
        )

    types = infer_field_types(
        request.documents,
        fields,
        sample_size=engine.type_sample_size,
    )

    return FieldsResponse(
        fields=fields,
        types={name: field_type.value for name, field_type in types.items()},
    )


@router.post(
    "/process",
    response_model=ProcessResponse,
    responses={
        413: {"model": ErrorResponse, "description": "Too many documents"},
    },
    summary="Process documents",
    description="Filter, sort and paginate a document collection.",
)
def process_documents(
    request: ProcessRequest,
    http_request: Request,
    processor: DocumentProcessor = Depends(get_processor),
):
    """Run the filter/sort/paginate pipeline."""
    _check_size(request.documents)

    result = processor.process(
        request.documents,
        filters=[c.model_dump(exclude_unset=True) for c in request.filters],
        logic=request.logic,
        sort_keys=[k.model_dump() for k in request.sort],
        page=request.page,
        page_size=request.page_size,
    )
    http_request.state.stats = result.stats

    return ProcessResponse(**result.to_dict())
