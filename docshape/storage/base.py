"""
Abstract base class for saved-query stores.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
import threading
import uuid


class StoreFormat(str, Enum):
    """On-disk encodings for saved queries."""
    JSON = "json"
    MSGPACK = "msgpack"


# Keys managed by the store rather than the caller
RESERVED_KEYS = ("id", "createdAt", "updatedAt")


def utc_timestamp() -> str:
    """Current time as an ISO-8601 UTC string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_query_id() -> str:
    """Generate a saved-query ID."""
    return uuid.uuid4().hex


@dataclass
class SavedQuery:
    """
    A saved query record.

    The store owns ``id`` and the timestamps; every other key the caller
    supplies (name, database, query, results, ...) is kept verbatim in
    ``attributes``.
    """

    id: str
    created_at: str
    updated_at: str
    attributes: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> Optional[str]:
        return self.attributes.get("name")

    def to_dict(self) -> Dict[str, Any]:
        """Flat record with camelCase timestamps."""
        return {
            "id": self.id,
            **self.attributes,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SavedQuery":
        """
        Create a record from its flat form.

        Missing IDs and timestamps are generated.
        """
        now = utc_timestamp()
        created_at = data.get("createdAt") or now
        return cls(
            id=str(data.get("id") or new_query_id()),
            created_at=created_at,
            updated_at=data.get("updatedAt") or created_at,
            attributes={k: v for k, v in data.items() if k not in RESERVED_KEYS},
        )


class BaseQueryStore(ABC):
    """
    Abstract base class for saved-query stores.

    All store implementations must provide:
    - CRUD operations keyed by ID
    - Whole-store export and import
    """

    def __init__(self):
        self._lock = threading.RLock()

    @property
    @abstractmethod
    def size(self) -> int:
        """Number of saved queries."""
        pass

    # =========================================================================
    # CRUD OPERATIONS
    # =========================================================================

    @abstractmethod
    def list(self) -> List[SavedQuery]:
        """All saved queries in creation order."""
        pass

    @abstractmethod
    def get(self, id: str) -> SavedQuery:
        """
        Retrieve a saved query.

        Raises:
            QueryNotFoundError: If no query has this ID
        """
        pass

    @abstractmethod
    def create(self, data: Mapping[str, Any]) -> SavedQuery:
        """
        Save a new query.

        Args:
            data: Caller fields; any ``id`` or timestamps are ignored

        Returns:
            The stored record
        """
        pass

    @abstractmethod
    def update(self, id: str, updates: Mapping[str, Any]) -> SavedQuery:
        """
        Merge fields into a saved query.

        ``id`` and ``createdAt`` are preserved; ``updatedAt`` is refreshed.

        Raises:
            QueryNotFoundError: If no query has this ID
        """
        pass

    @abstractmethod
    def delete(self, id: str) -> SavedQuery:
        """
        Delete a saved query.

        Returns:
            The deleted record

        Raises:
            QueryNotFoundError: If no query has this ID
        """
        pass

    # =========================================================================
    # BULK OPERATIONS
    # =========================================================================

    @abstractmethod
    def export_all(self) -> List[Dict[str, Any]]:
        """All records in their flat form."""
        pass

    @abstractmethod
    def import_all(self, records: Any) -> int:
        """
        Replace every saved query.

        Returns:
            Number of records imported

        Raises:
            ValidationError: If records is not a list of dictionaries
        """
        pass

    # =========================================================================
    # CONTEXT MANAGER
    # =========================================================================

    def close(self) -> None:
        """Release resources."""
        pass

    def __enter__(self) -> "BaseQueryStore":
        return self

    def __exit__(self, *args) -> None:
        self.close()

    def __len__(self) -> int:
        return self.size
