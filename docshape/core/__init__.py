"""
Core types, document access and exceptions for docshape.
"""

from .types import (
    UNSET,
    FieldType,
    SortDirection,
    FilterLogic,
    SortKey,
)
from .document import document_body, get_field_value
from .exceptions import (
    DocShapeError,
    ValidationError,
    QueryParseError,
    StorageError,
    QueryNotFoundError,
    SerializationError,
)

__all__ = [
    # Types
    "UNSET",
    "FieldType",
    "SortDirection",
    "FilterLogic",
    "SortKey",
    # Documents
    "document_body",
    "get_field_value",
    # Exceptions
    "DocShapeError",
    "ValidationError",
    "QueryParseError",
    "StorageError",
    "QueryNotFoundError",
    "SerializationError",
]
