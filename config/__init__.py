"""
Configuration module for docshape.

This module provides configuration management including
loading settings from YAML files and environment variables.

Example:
    >>> from config import Settings, load_config
    >>>
    >>> # Load default config
    >>> settings = load_config()
    >>>
    >>> # Access settings
    >>> print(settings.query_config.default_limit)
    >>> print(settings.pagination_config.items_per_page)
"""

from .settings import (
    Settings,
    EngineConfig,
    QueryConfig,
    PaginationConfig,
    StoreConfig,
    load_config,
    get_default_config_path,
)

__all__ = [
    "Settings",
    "EngineConfig",
    "QueryConfig",
    "PaginationConfig",
    "StoreConfig",
    "load_config",
    "get_default_config_path",
]
