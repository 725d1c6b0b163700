"""
docshape - Client-side shaping of document-store query results.

Example:
    >>> from docshape import DocumentProcessor, build_query
    >>>
    >>> # Build a query for the document store
    >>> query = build_query([{"field": "age", "operator": "$gt", "value": "25"}])
    >>> query.to_dict()
    {'selector': {'age': {'$gt': 25}}, 'limit': 25}
    >>>
    >>> # Filter, sort and page the fetched rows
    >>> result = DocumentProcessor().process(
    ...     rows,
    ...     filters=[{"field": "city", "operator": "equals", "value": "Oslo"}],
    ...     sort_keys=[{"field": "age", "direction": "desc"}],
    ... )
"""

from .core import (
    # Types
    UNSET,
    FieldType,
    SortDirection,
    FilterLogic,
    SortKey,
    # Documents
    get_field_value,
    # Exceptions
    DocShapeError,
    ValidationError,
    QueryParseError,
    StorageError,
    QueryNotFoundError,
    SerializationError,
)

from .query import (
    # Components
    extract_fields,
    infer_field_type,
    compare_values,
    sort_documents,
    evaluate,
    FilterCondition,
    FilterSet,
    apply_filters,
    QueryDescriptor,
    QuerySelectorBuilder,
    build_query,
    paginate,
    # Pipeline
    DocumentProcessor,
    ProcessResult,
    parse_query_text,
)

__version__ = "0.1.0"
__author__ = "docshape Team"

__all__ = [
    # Types
    "UNSET",
    "FieldType",
    "SortDirection",
    "FilterLogic",
    "SortKey",
    "get_field_value",
    # Exceptions
    "DocShapeError",
    "ValidationError",
    "QueryParseError",
    "StorageError",
    "QueryNotFoundError",
    "SerializationError",
    # Components
    "extract_fields",
    "infer_field_type",
    "compare_values",
    "sort_documents",
    "evaluate",
    "FilterCondition",
    "FilterSet",
    "apply_filters",
    "QueryDescriptor",
    "QuerySelectorBuilder",
    "build_query",
    "paginate",
    "DocumentProcessor",
    "ProcessResult",
    "parse_query_text",
]
