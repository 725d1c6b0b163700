"""
Server configuration.
"""

from dataclasses import dataclass, field
from typing import Optional, List
import os


@dataclass
class ServerConfig:
    """Configuration for the docshape server."""

    # Server settings
    host: str = "127.0.0.1"
    port: int = 3001
    workers: int = 1
    reload: bool = False

    # API settings
    api_prefix: str = "/api"
    docs_enabled: bool = True

    # Engine settings file (None uses DOCSHAPE_CONFIG or the bundled default)
    config_path: Optional[str] = None

    # Saved-query store ("memory" or "file"; None defers to the engine settings)
    store_backend: Optional[str] = None
    data_dir: Optional[str] = None

    cors_origins: List[str] = field(default_factory=lambda: ["*"])

    # Limits
    max_documents_per_request: int = 100000

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        origins = os.getenv("DOCSHAPE_CORS_ORIGINS", "*")
        return cls(
            host=os.getenv("DOCSHAPE_HOST", "127.0.0.1"),
            port=int(os.getenv("DOCSHAPE_PORT", "3001")),
            workers=int(os.getenv("DOCSHAPE_WORKERS", "1")),
            config_path=os.getenv("DOCSHAPE_CONFIG"),
            store_backend=os.getenv("DOCSHAPE_STORE"),
            data_dir=os.getenv("DOCSHAPE_DATA_DIR"),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("DOCSHAPE_LOG_LEVEL", "INFO"),
            max_documents_per_request=int(os.getenv("DOCSHAPE_MAX_DOCUMENTS", "100000")),
        )


# Global configuration
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get server configuration."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def set_config(config: ServerConfig) -> None:
    """Set server configuration."""
    global _config
    _config = config
