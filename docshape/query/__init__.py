"""
Query processing module for docshape.

This module provides:
- Field discovery and type inference
- Type-aware comparison and multi-key sorting
- Client-side filtering with AND/OR logic
- Mango-style query construction and parsing
- Pagination and the full processing pipeline

Example:
    >>> from docshape.query import DocumentProcessor, build_query
    >>>
    >>> # Shape a fetched collection
    >>> result = DocumentProcessor().process(
    ...     documents,
    ...     filters=[{"field": "status", "operator": "equals", "value": "active"}],
    ...     sort_keys=[{"field": "created", "direction": "desc"}],
    ... )
    >>>
    >>> # Build a store query
    >>> query = build_query([{"field": "age", "operator": "$gt", "value": "25"}])
"""

from .fields import (
    INTERNAL_FIELD_PREFIX,
    extract_fields,
    extract_user_fields,
    is_internal_field,
)

from .inference import (
    DEFAULT_SAMPLE_SIZE,
    detect_value_type,
    infer_type,
    infer_field_type,
    infer_field_types,
)

from .comparator import compare_values, collation_key

from .sorter import sort_documents, resolve_sort_keys

from .filters import (
    FilterOperator,
    FilterCondition,
    FilterSet,
    evaluate,
    apply_filters,
    parse_operator,
)

from .selector import (
    DEFAULT_LIMIT,
    UNBOUNDED_LIMIT,
    SelectorOperator,
    QueryCondition,
    QueryOptions,
    QueryDescriptor,
    QuerySelectorBuilder,
    build_query,
)

from .paginator import PageInfo, paginate, page_info

from .parser import (
    QueryParser,
    parse_query,
    parse_query_text,
    conditions_from_selector,
)

from .executor import (
    DocumentProcessor,
    ProcessResult,
    ExecutionStats,
    process_documents,
)

__all__ = [
    # Fields
    "INTERNAL_FIELD_PREFIX",
    "extract_fields",
    "extract_user_fields",
    "is_internal_field",
    # Inference
    "DEFAULT_SAMPLE_SIZE",
    "detect_value_type",
    "infer_type",
    "infer_field_type",
    "infer_field_types",
    # Ordering
    "compare_values",
    "collation_key",
    "sort_documents",
    "resolve_sort_keys",
    # Filtering
    "FilterOperator",
    "FilterCondition",
    "FilterSet",
    "evaluate",
    "apply_filters",
    "parse_operator",
    # Query construction
    "DEFAULT_LIMIT",
    "UNBOUNDED_LIMIT",
    "SelectorOperator",
    "QueryCondition",
    "QueryOptions",
    "QueryDescriptor",
    "QuerySelectorBuilder",
    "build_query",
    # Pagination
    "PageInfo",
    "paginate",
    "page_info",
    # Parsing
    "QueryParser",
    "parse_query",
    "parse_query_text",
    "conditions_from_selector",
    # Pipeline
    "DocumentProcessor",
    "ProcessResult",
    "ExecutionStats",
    "process_documents",
]
