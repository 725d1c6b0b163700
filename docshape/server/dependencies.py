"""
FastAPI dependencies for the docshape server.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional
import time

from config import Settings, load_config

from .config import get_config
from ..query.executor import DocumentProcessor
from ..query.selector import QuerySelectorBuilder
from ..storage import BaseQueryStore, create_store
from ..utils.logging import get_logger

logger = get_logger(__name__)


# =============================================================================
# STATE SINGLETON
# =============================================================================

class StoreManager:
    """
    Manages the engine settings and the saved-query store.

    Provides singleton instances for the application.
    """

    _settings: Optional[Settings] = None
    _store: Optional[BaseQueryStore] = None
    _start_time: float = 0

    @classmethod
    def get_settings(cls) -> Settings:
        """Get or load the engine settings."""
        if cls._settings is None:
            config = get_config()
            settings = load_config(config.config_path)

            # Server options override the settings file
            if config.store_backend or config.data_dir:
                settings.store_config = replace(
                    settings.store_config,
                    backend=config.store_backend or settings.store_config.backend,
                    data_dir=config.data_dir or settings.store_config.data_dir,
                )
            cls._settings = settings
        return cls._settings

    @classmethod
    def get_store(cls) -> BaseQueryStore:
        """Get or create the saved-query store."""
        if cls._store is None:
            store_config = cls.get_settings().store_config
            if store_config.backend == "memory":
                cls._store = create_store("memory")
            else:
                cls._store = create_store(
                    "file",
                    path=store_config.path,
                    format=store_config.format,
                )
            cls._start_time = time.time()
            logger.info(f"Saved-query store ready: {cls._store!r}")
        return cls._store

    @classmethod
    def get_uptime(cls) -> float:
        """Get server uptime in seconds."""
        if cls._start_time == 0:
            return 0
        return time.time() - cls._start_time

    @classmethod
    def shutdown(cls) -> None:
        """Close the store and forget cached state."""
        if cls._store is not None:
            cls._store.close()
            cls._store = None
        cls._settings = None
        cls._start_time = 0


def get_settings() -> Settings:
    """Dependency to get the engine settings."""
    return StoreManager.get_settings()


def get_store() -> BaseQueryStore:
    """Dependency to get the saved-query store."""
    return StoreManager.get_store()


def get_processor() -> DocumentProcessor:
    """Dependency to get a configured document processor."""
    return DocumentProcessor(StoreManager.get_settings())


def get_query_builder() -> QuerySelectorBuilder:
    """Dependency to get a configured query builder."""
    return QuerySelectorBuilder.from_settings(StoreManager.get_settings())


def get_uptime() -> float:
    """Dependency to get server uptime."""
    return StoreManager.get_uptime()
