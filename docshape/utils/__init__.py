"""
Utility functions for docshape.
"""

from .coercion import (
    coerce_number,
    coerce_integer,
    coerce_boolean,
    coerce_date,
    date_to_millis,
    to_text,
)
from .validation import (
    validate_documents,
    validate_page,
    validate_page_size,
    validate_query_id,
    validate_records,
)
from .logging import setup_logger, get_logger, LogContext

__all__ = [
    "coerce_number",
    "coerce_integer",
    "coerce_boolean",
    "coerce_date",
    "date_to_millis",
    "to_text",
    "validate_documents",
    "validate_page",
    "validate_page_size",
    "validate_query_id",
    "validate_records",
    "setup_logger",
    "get_logger",
    "LogContext",
]
