"""
Configuration management for docshape.

Provides dataclasses for configuration and utilities
for loading settings from YAML files.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional

import yaml


@dataclass
class EngineConfig:
    """Field discovery and type inference configuration."""
    internal_field_prefix: str = "_"
    type_sample_size: int = 10
    field_sample_size: Optional[int] = None


@dataclass
class QueryConfig:
    """Structured query construction configuration."""
    default_limit: int = 25
    unbounded_limit: int = 1_000_000


@dataclass
class PaginationConfig:
    """Pagination configuration."""
    items_per_page: int = 25
    page_size_options: List[int] = field(default_factory=lambda: [10, 25, 50, 100])


@dataclass
class StoreConfig:
    """Saved-query store configuration."""
    backend: Literal["memory", "file"] = "file"
    data_dir: str = "./docshape_data"
    file_name: str = "saved_queries.json"
    format: Literal["json", "msgpack"] = "json"

    @property
    def path(self) -> Path:
        return Path(self.data_dir) / self.file_name


@dataclass
class Settings:
    """
    Main settings container for docshape.

    Attributes:
        engine_config: Field discovery and inference settings
        query_config: Query builder settings
        pagination_config: Pagination settings
        store_config: Saved-query store settings
        log_level: Logging level
    """
    engine_config: EngineConfig = field(default_factory=EngineConfig)
    query_config: QueryConfig = field(default_factory=QueryConfig)
    pagination_config: PaginationConfig = field(default_factory=PaginationConfig)
    store_config: StoreConfig = field(default_factory=StoreConfig)

    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, data: dict) -> "Settings":
        """Create Settings from dictionary."""
        data = dict(data)

        # Extract nested configs
        engine_data = data.pop("engine_config", None) or {}
        query_data = data.pop("query_config", None) or {}
        pagination_data = data.pop("pagination_config", None) or {}
        store_data = data.pop("store_config", None) or {}

        return cls(
            engine_config=EngineConfig(**engine_data),
            query_config=QueryConfig(**query_data),
            pagination_config=PaginationConfig(**pagination_data),
            store_config=StoreConfig(**store_data),
            **data
        )

    def to_dict(self) -> dict:
        """Convert Settings to dictionary."""
        from dataclasses import asdict
        return asdict(self)


def get_default_config_path() -> Path:
    """Get path to default configuration file."""
    # Environment variable wins
    env_config = os.environ.get("DOCSHAPE_CONFIG")
    if env_config:
        return Path(env_config)

    # Check for config in current directory
    local_config = Path("./config/default_config.yaml")
    if local_config.exists():
        return local_config

    return Path(__file__).parent / "default_config.yaml"


def load_config(config_path: Optional[str] = None) -> Settings:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default.

    Returns:
        Settings object with loaded configuration

    Example:
        >>> settings = load_config()
        >>> settings = load_config("./my_config.yaml")
    """
    if config_path is None:
        path = get_default_config_path()
    else:
        path = Path(config_path)

    if not path.exists():
        # Return default settings if no config file
        return Settings()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        return Settings()

    return Settings.from_dict(data)
