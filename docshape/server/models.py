"""
Pydantic models for API requests and responses.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator
from typing import List, Dict, Any, Optional, Union

from ..core.types import FieldType, FilterLogic, SortDirection


# =============================================================================
# COMMON MODELS
# =============================================================================

class SuccessResponse(BaseModel):
    """Generic success response."""
    success: bool = True
    message: str = "Operation completed successfully"
    data: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Error response."""
    success: bool = False
    error: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    version: str
    uptime_seconds: float
    saved_queries: int = 0


# =============================================================================
# DOCUMENT MODELS
# =============================================================================

class FilterConditionModel(BaseModel):
    """
    One client-side filter condition.

    Omitting ``value`` leaves the condition vacuous (it matches everything).
    """
    field: str = ""
    operator: str = "equals"
    value: Any = None
    type: Optional[str] = None

    @field_validator('type')
    @classmethod
    def validate_type(cls, v):
        if v is not None and v not in {t.value for t in FieldType}:
            raise ValueError(f"Unknown field type: {v}")
        return v


class SortKeyModel(BaseModel):
    """One sort key; ``type`` is inferred when omitted."""
    field: str
    direction: str = "asc"
    type: Optional[str] = None

    @field_validator('direction')
    @classmethod
    def normalize_direction(cls, v):
        return SortDirection.parse(v).value


class FieldsRequest(BaseModel):
    """Request to discover the fields of a document collection."""
    documents: List[Any]
    include_internal: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "documents": [
                        {"_id": "a", "name": "Ada", "age": 36},
                        {"_id": "b", "name": "Linus", "joined": "2021-04-01"}
                    ]
                }
            ]
        }
    }


class FieldsResponse(BaseModel):
    """Discovered fields with inferred types."""
    fields: List[str]
    types: Dict[str, str]


class ProcessRequest(BaseModel):
    """Request to filter, sort and paginate documents."""
    documents: List[Any]
    filters: List[FilterConditionModel] = Field(default_factory=list)
    logic: str = "AND"
    sort: List[SortKeyModel] = Field(default_factory=list)
    page: int = Field(default=1, ge=1)
    page_size: Optional[int] = Field(default=None, ge=1, le=100000)

    @field_validator('logic')
    @classmethod
    def normalize_logic(cls, v):
        return FilterLogic.parse(v).value

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "documents": [{"name": "Ada", "age": 36}, {"name": "Linus", "age": 28}],
                    "filters": [{"field": "age", "operator": "greaterThan", "value": "30", "type": "number"}],
                    "logic": "AND",
                    "sort": [{"field": "name", "direction": "asc"}],
                    "page": 1,
                    "page_size": 25
                }
            ]
        }
    }


class PageInfoModel(BaseModel):
    """Position of a page within a result set."""
    page: int
    page_size: int
    total_items: int
    total_pages: int
    start_index: int
    end_index: int
    has_next: bool
    has_previous: bool


class ProcessResponse(BaseModel):
    """Processed page of documents."""
    items: List[Any]
    total: int
    fields: List[str]
    page: PageInfoModel
    stats: Dict[str, Any]


# =============================================================================
# QUERY MODELS
# =============================================================================

class QueryConditionModel(BaseModel):
    """One row of the visual query builder."""
    field: str = ""
    operator: str = "$eq"
    value: Any = ""


class QuerySortModel(BaseModel):
    """Sort choice for a built query."""
    field: str
    direction: str = "asc"


class BuildQueryRequest(BaseModel):
    """
    Request to build a structured query.

    Omitting ``limit`` uses the configured default; ``null``,
    ``"unbounded"`` or ``no_limit`` request every row.
    """
    conditions: List[QueryConditionModel] = Field(default_factory=list)
    fields: List[str] = Field(default_factory=list)
    sort: Optional[QuerySortModel] = None
    limit: Optional[Union[int, str]] = None
    no_limit: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "conditions": [{"field": "age", "operator": "$gt", "value": "25"}],
                    "fields": ["name", "age"],
                    "sort": {"field": "age", "direction": "desc"},
                    "limit": 25
                }
            ]
        }
    }


class QueryResponse(BaseModel):
    """A structured, Mango-shaped query."""
    selector: Dict[str, Any]
    limit: int
    fields: Optional[List[str]] = None
    sort: Optional[List[Dict[str, str]]] = None


class ParseQueryRequest(BaseModel):
    """Free-text query (JSON, optionally inside Markdown code fences)."""
    text: str = Field(..., min_length=1)


class ParseQueryResponse(BaseModel):
    """Parsed query and its client-side filter equivalent."""
    query: QueryResponse
    conditions: List[FilterConditionModel]
