"""
Runtime type inference for document fields.

Inference is a heuristic over a small sample of values, not a
guarantee: fields holding mixed types collapse to STRING.
"""

from __future__ import annotations

from itertools import islice
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ..core.document import get_field_value
from ..core.types import FieldType
from ..utils.coercion import coerce_date, coerce_number
from ..utils.validation import validate_documents
from .fields import extract_fields

# Number of non-null values inspected per field
DEFAULT_SAMPLE_SIZE = 10


def _is_date_like(value: Any) -> bool:
    # coerce_date enforces the YYYY-MM-DD prefix on strings
    return coerce_date(value) is not None


def detect_value_type(value: Any) -> FieldType:
    """Classify a single value."""
    if value is None:
        return FieldType.NULL
    if isinstance(value, (list, tuple)):
        return FieldType.ARRAY
    if isinstance(value, bool):
        return FieldType.BOOLEAN
    if isinstance(value, (int, float)):
        return FieldType.NUMBER
    if isinstance(value, dict):
        return FieldType.OBJECT
    if _is_date_like(value):
        return FieldType.DATE
    return FieldType.STRING


def infer_type(
    samples: Iterable[Any],
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> FieldType:
    """
    Infer a field's type from sampled values.

    The first ``sample_size`` non-null values are checked, in order, for
    all-numeric (numbers or numeric strings), all-boolean, all-date
    (``YYYY-MM-DD`` prefix and a valid date) and all-array. Anything
    else, including an empty sample, is STRING.

    Args:
        samples: Field values in document order
        sample_size: Maximum number of non-null values to inspect

    Returns:
        The inferred FieldType
    """
    values: List[Any] = list(
        islice((value for value in samples if value is not None), sample_size)
    )

    if not values:
        return FieldType.STRING

    if all(coerce_number(value) is not None for value in values):
        return FieldType.NUMBER

    if all(isinstance(value, bool) for value in values):
        return FieldType.BOOLEAN

    if all(_is_date_like(value) for value in values):
        return FieldType.DATE

    if all(isinstance(value, (list, tuple)) for value in values):
        return FieldType.ARRAY

    return FieldType.STRING


def infer_field_type(
    documents: Sequence[Any],
    field: str,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> FieldType:
    """Infer the type of one field across a document collection."""
    validate_documents(documents)
    return infer_type(
        (get_field_value(document, field) for document in documents),
        sample_size=sample_size,
    )


def infer_field_types(
    documents: Sequence[Any],
    fields: Optional[Iterable[str]] = None,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> Dict[str, FieldType]:
    """
    Infer types for several fields.

    Args:
        documents: Document collection
        fields: Field names; defaults to every extracted top-level field
        sample_size: Non-null values inspected per field

    Returns:
        Mapping of field name to FieldType, in field order
    """
    validate_documents(documents)
    if fields is None:
        fields = extract_fields(documents)

    return {
        field: infer_field_type(documents, field, sample_size=sample_size)
        for field in fields
    }
