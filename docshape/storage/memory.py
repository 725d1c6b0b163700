"""
In-memory saved-query store.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, List, Mapping

from ..core.exceptions import QueryNotFoundError
from ..utils.logging import get_logger
from ..utils.validation import validate_records
from .base import RESERVED_KEYS, BaseQueryStore, SavedQuery, new_query_id, utc_timestamp

logger = get_logger(__name__)


class MemoryQueryStore(BaseQueryStore):
    """
    In-memory saved-query store.

    Volatile: records are lost when the process exits.
    Use for development, tests and single-session servers.

    Example:
        >>> store = MemoryQueryStore()
        >>> saved = store.create({"name": "Active users", "query": {"selector": {"active": True}}})
        >>> store.get(saved.id).name
        'Active users'
    """

    def __init__(self):
        super().__init__()
        # Insertion order is creation order
        self._records: Dict[str, SavedQuery] = {}

    @property
    def size(self) -> int:
        return len(self._records)

    # =========================================================================
    # CRUD OPERATIONS
    # =========================================================================

    def list(self) -> List[SavedQuery]:
        with self._lock:
            return list(self._records.values())

    def get(self, id: str) -> SavedQuery:
        with self._lock:
            return self._require(id)

    def create(self, data: Mapping[str, Any]) -> SavedQuery:
        with self._lock:
            now = utc_timestamp()
            record = SavedQuery(
                id=self._unused_id(),
                created_at=now,
                updated_at=now,
                attributes=_caller_fields(data),
            )
            records = dict(self._records)
            records[record.id] = record
            self._commit(records)

        logger.info(f"Saved query '{record.id}' created")
        return record

    def update(self, id: str, updates: Mapping[str, Any]) -> SavedQuery:
        with self._lock:
            current = self._require(id)
            record = replace(
                current,
                updated_at=utc_timestamp(),
                attributes={**current.attributes, **_caller_fields(updates)},
            )
            records = dict(self._records)
            records[id] = record
            self._commit(records)

        logger.info(f"Saved query '{id}' updated")
        return record

    def delete(self, id: str) -> SavedQuery:
        with self._lock:
            record = self._require(id)
            records = dict(self._records)
            del records[id]
            self._commit(records)

        logger.info(f"Saved query '{id}' deleted")
        return record

    # =========================================================================
    # BULK OPERATIONS
    # =========================================================================

    def export_all(self) -> List[Dict[str, Any]]:
        with self._lock:
            return [record.to_dict() for record in self._records.values()]

    def import_all(self, records: Any) -> int:
        validate_records(records)

        imported = [SavedQuery.from_dict(data) for data in records]

        with self._lock:
            self._commit({record.id: record for record in imported})
            count = len(self._records)

        logger.info(f"Imported {count} saved queries")
        return count

    # =========================================================================
    # INTERNALS
    # =========================================================================

    def _require(self, id: str) -> SavedQuery:
        record = self._records.get(id)
        if record is None:
            raise QueryNotFoundError(f"Saved query '{id}' not found")
        return record

    def _unused_id(self) -> str:
        id = new_query_id()
        while id in self._records:
            id = new_query_id()
        return id

    def _commit(self, records: Dict[str, SavedQuery]) -> None:
        """Persist the new record set, then make it current."""
        self._persist(records)
        self._records = records

    def _persist(self, records: Dict[str, SavedQuery]) -> None:
        """Hook for durable subclasses; called under the lock before a mutation takes effect."""
        pass

    def __contains__(self, id: str) -> bool:
        return id in self._records

    def __repr__(self) -> str:
        return f"MemoryQueryStore(size={self.size})"


def _caller_fields(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in dict(data).items() if k not in RESERVED_KEYS}
