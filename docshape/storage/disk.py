"""
File-backed saved-query store.

Keeps every record in one file, rewritten atomically after each
mutation.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Union

from ..core.exceptions import StorageError
from ..utils.logging import get_logger
from .base import SavedQuery, StoreFormat
from .memory import MemoryQueryStore
from .serialization import deserialize_records, serialize_records

logger = get_logger(__name__)


class FileQueryStore(MemoryQueryStore):
    """
    Saved-query store persisted to a single file.

    Records are cached in memory and the whole file is rewritten
    after every create, update, delete or import.

    Example:
        >>> store = FileQueryStore("./data/saved_queries.json")
        >>> saved = store.create({"name": "Recent orders"})
        >>>
        >>> # Later, reload
        >>> store = FileQueryStore("./data/saved_queries.json")
        >>> store.get(saved.id).name
        'Recent orders'

    File Structure:
        saved_queries.json   # [{"id": ..., "name": ..., "createdAt": ..., "updatedAt": ...}, ...]
    """

    def __init__(
        self,
        path: Union[str, Path],
        format: Union[StoreFormat, str] = StoreFormat.JSON,
        create_if_missing: bool = True,
    ):
        """
        Initialize the store.

        Args:
            path: Path of the data file
            format: "json" or "msgpack"
            create_if_missing: Create the file (and its directory) with no records
        """
        super().__init__()

        self._path = Path(path)
        self._format = StoreFormat(format)

        if not self._path.exists():
            if not create_if_missing:
                raise StorageError(f"Store file not found: {path}")
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._persist({})
            logger.info(f"Created saved-query store at {self._path}")

        self._load()

    @property
    def path(self) -> Path:
        return self._path

    @property
    def format(self) -> StoreFormat:
        return self._format

    def _load(self) -> None:
        """Load records from disk."""
        with self._lock:
            try:
                with open(self._path, "rb") as f:
                    data = f.read()
            except OSError as e:
                raise StorageError(f"Failed to read {self._path}: {e}") from e

            records = [SavedQuery.from_dict(item) for item in deserialize_records(data, self._format)]
            self._records = {record.id: record for record in records}

        logger.debug(f"Loaded {self.size} saved queries from {self._path}")

    def reload(self) -> None:
        """Re-read the file, discarding the in-memory cache."""
        self._load()

    def _persist(self, records: Dict[str, SavedQuery]) -> None:
        """Write the records to disk atomically; the old file survives a failure."""
        data = serialize_records(
            [record.to_dict() for record in records.values()],
            self._format,
        )
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            with open(tmp_path, "wb") as f:
                f.write(data)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Failed to write {self._path}: {e}") from e

    def __repr__(self) -> str:
        return f"FileQueryStore(path='{self._path}', format={self._format.value}, size={self.size})"
