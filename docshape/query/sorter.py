"""
Stable multi-key sorting of document collections.

Sort keys are applied in priority order: the first key whose values
differ decides, later keys only break ties, and documents that tie on
every key keep their input order.
"""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Iterable, List, Mapping, Sequence, Tuple, Union

from ..core.document import get_field_value
from ..core.types import FieldType, SortKey
from ..utils.validation import validate_documents
from .comparator import compare_values
from .inference import DEFAULT_SAMPLE_SIZE, infer_field_type

SortKeyLike = Union[SortKey, Mapping[str, Any]]


def as_sort_key(item: SortKeyLike) -> SortKey:
    """Accept a SortKey or its dictionary form."""
    if isinstance(item, SortKey):
        return item
    return SortKey.from_dict(item)


def resolve_sort_keys(
    documents: Sequence[Any],
    sort_keys: Iterable[SortKeyLike],
    sample_size: int = DEFAULT_SAMPLE_SIZE,
) -> List[SortKey]:
    """
    Fill in the type of every sort key that does not declare one.

    Types are inferred over ``documents``, which should be the full
    collection rather than a filtered subset so a key's type does not
    change as filters change.

    Returns:
        New SortKey objects; the inputs are not modified
    """
    validate_documents(documents)

    resolved = []
    for item in sort_keys:
        key = as_sort_key(item)
        field_type = key.type
        if field_type is None and key.field:
            field_type = infer_field_type(documents, key.field, sample_size=sample_size)
        resolved.append(SortKey(field=key.field, direction=key.direction, type=field_type))
    return resolved


def sort_documents(
    documents: Sequence[Any],
    sort_keys: Iterable[SortKeyLike],
) -> List[Any]:
    """
    Sort documents by an ordered list of sort keys.

    Keys without a type compare as STRING; use ``resolve_sort_keys``
    first to infer types. Keys with an empty field are ignored.

    Args:
        documents: Documents or ``{"doc": ...}`` rows (not modified)
        sort_keys: SortKey objects or dicts, highest priority first

    Returns:
        A new list in sorted order
    """
    validate_documents(documents)

    keys = [key for key in map(as_sort_key, sort_keys) if key.field]
    if not keys:
        return list(documents)

    types = [key.type or FieldType.STRING for key in keys]

    # Read each field once per document rather than once per comparison
    rows: List[Tuple[Tuple[Any, ...], Any]] = [
        (tuple(get_field_value(document, key.field) for key in keys), document)
        for document in documents
    ]

    def compare_rows(left, right) -> int:
        for index, key in enumerate(keys):
            result = compare_values(left[0][index], right[0][index], types[index])
            if result != 0:
                return -result if key.descending else result
        return 0

    # sorted() is stable, so full ties keep their input order
    return [document for _, document in sorted(rows, key=cmp_to_key(compare_rows))]
