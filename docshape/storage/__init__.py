"""
Saved-query stores for docshape.

Available Stores:
    - MemoryQueryStore: In-memory store (fast, volatile)
    - FileQueryStore: Single-file store, JSON or msgpack

Example:
    >>> from docshape.storage import FileQueryStore
    >>>
    >>> store = FileQueryStore("./data/saved_queries.json")
    >>> saved = store.create({"name": "Adults", "query": {"selector": {"age": {"$gte": 18}}}})
    >>>
    >>> # Back up and restore
    >>> backup = store.export_all()
    >>> store.import_all(backup)
"""

from pathlib import Path
from typing import Union

from .base import (
    BaseQueryStore,
    SavedQuery,
    StoreFormat,
    new_query_id,
    utc_timestamp,
)

from .memory import MemoryQueryStore
from .disk import FileQueryStore
from .serialization import (
    serialize_records,
    deserialize_records,
    dump_filters,
    load_filters,
    dump_sort_keys,
    load_sort_keys,
)

__all__ = [
    # Base
    "BaseQueryStore",
    "SavedQuery",
    "StoreFormat",
    "new_query_id",
    "utc_timestamp",
    # Implementations
    "MemoryQueryStore",
    "FileQueryStore",
    # Serialization
    "serialize_records",
    "deserialize_records",
    "dump_filters",
    "load_filters",
    "dump_sort_keys",
    "load_sort_keys",
    # Factory
    "create_store",
]


def create_store(
    store_type: str,
    path: Union[str, Path, None] = None,
    **kwargs
) -> BaseQueryStore:
    """
    Factory function to create a saved-query store.

    Args:
        store_type: "memory" or "file"
        path: Path for the file store
        **kwargs: Store-specific options

    Returns:
        Store instance
    """
    store_type = store_type.lower()

    if store_type == "memory":
        return MemoryQueryStore()
    elif store_type == "file":
        if path is None:
            raise ValueError("path required for file store")
        return FileQueryStore(path=path, **kwargs)
    else:
        raise ValueError(f"Unknown store type: {store_type}")
