"""
Field discovery across heterogeneous documents.
"""

from __future__ import annotations

from itertools import islice
from typing import Any, Callable, List, Optional, Sequence, Set

from ..core.document import document_body
from ..utils.validation import validate_documents

# Store-internal metadata fields (_id, _rev, _attachments, ...)
INTERNAL_FIELD_PREFIX = "_"


def is_internal_field(name: str, prefix: str = INTERNAL_FIELD_PREFIX) -> bool:
    """Whether a field name is reserved store metadata."""
    return bool(prefix) and name.startswith(prefix)


def extract_fields(
    documents: Sequence[Any],
    include: Optional[Callable[[str], bool]] = None,
    sample_size: Optional[int] = None,
) -> List[str]:
    """
    Collect the distinct top-level field names of a document collection.

    Nested objects and arrays are not descended into.

    Args:
        documents: Documents or ``{"doc": ...}`` rows
        include: Optional predicate; names it rejects are left out
        sample_size: Only scan the first N documents

    Returns:
        Field names, de-duplicated and sorted ascending
    """
    validate_documents(documents)

    scanned = documents if sample_size is None else islice(documents, sample_size)

    names: Set[str] = set()
    for document in scanned:
        names.update(document_body(document).keys())

    if include is not None:
        names = {name for name in names if include(name)}

    return sorted(names)


def extract_user_fields(
    documents: Sequence[Any],
    prefix: str = INTERNAL_FIELD_PREFIX,
    sample_size: Optional[int] = None,
) -> List[str]:
    """Field names for filter and sort pickers, without internal fields."""
    return extract_fields(
        documents,
        include=lambda name: not is_internal_field(name, prefix),
        sample_size=sample_size,
    )
