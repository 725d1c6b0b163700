"""
Serialization utilities for docshape storage.

Provides encoding/decoding for:
- Saved-query records (JSON or msgpack)
- View configuration (filter conditions and sort keys as JSON lists)
"""

from __future__ import annotations

import json
from typing import Any, Dict, Iterable, List, Optional, Union

import msgpack

from ..core.exceptions import SerializationError
from ..core.types import SortKey
from ..query.filters import ConditionLike, FilterCondition, as_condition
from ..query.sorter import SortKeyLike, as_sort_key
from .base import StoreFormat


def _parse_format(format: Union[StoreFormat, str]) -> StoreFormat:
    try:
        return StoreFormat(format)
    except ValueError:
        raise SerializationError(f"Unknown store format: {format}")


def serialize_records(
    records: List[Dict[str, Any]],
    format: Union[StoreFormat, str] = StoreFormat.JSON,
) -> bytes:
    """
    Encode saved-query records.

    JSON output is indented for hand editing; msgpack is compact.
    """
    format = _parse_format(format)
    try:
        if format == StoreFormat.MSGPACK:
            return msgpack.packb(records, use_bin_type=True)
        return json.dumps(records, indent=2).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Cannot encode records: {e}") from e


def deserialize_records(
    data: bytes,
    format: Union[StoreFormat, str] = StoreFormat.JSON,
) -> List[Dict[str, Any]]:
    """
    Decode saved-query records.

    Empty input decodes to an empty list.

    Raises:
        SerializationError: If the data is corrupt or not a list
    """
    format = _parse_format(format)
    if not data or not data.strip():
        return []

    try:
        if format == StoreFormat.MSGPACK:
            records = msgpack.unpackb(data, raw=False)
        else:
            records = json.loads(data.decode("utf-8"))
    except (ValueError, msgpack.UnpackException) as e:
        raise SerializationError(f"Cannot decode records: {e}") from e

    if not isinstance(records, list):
        raise SerializationError(
            f"Stored records must be a list, got {type(records).__name__}"
        )
    return records


# =============================================================================
# VIEW CONFIGURATION
# =============================================================================

def _load_list(text: Optional[str], what: str) -> List[Any]:
    if not text:
        return []
    try:
        items = json.loads(text)
    except ValueError as e:
        raise SerializationError(f"Cannot decode {what}: {e}") from e
    if not isinstance(items, list):
        raise SerializationError(f"{what.capitalize()} must be a JSON list")
    if not all(isinstance(item, dict) for item in items):
        raise SerializationError(f"{what.capitalize()} must be a list of objects")
    return items


def dump_filters(conditions: Iterable[ConditionLike]) -> str:
    """Encode filter conditions as a JSON list."""
    return json.dumps([as_condition(c).to_dict() for c in conditions])


def load_filters(text: Optional[str]) -> List[FilterCondition]:
    """Decode filter conditions written by ``dump_filters``."""
    return [FilterCondition.from_dict(item) for item in _load_list(text, "filters")]


def dump_sort_keys(sort_keys: Iterable[SortKeyLike]) -> str:
    """Encode sort keys as a JSON list."""
    return json.dumps([as_sort_key(k).to_dict() for k in sort_keys])


def load_sort_keys(text: Optional[str]) -> List[SortKey]:
    """Decode sort keys written by ``dump_sort_keys``."""
    return [SortKey.from_dict(item) for item in _load_list(text, "sort keys")]
