"""
docshape REST API Server.

A FastAPI-based REST API for document shaping and saved queries.

Quick Start:
    >>> from docshape.server import create_app, run_server
    >>>
    >>> # Create and run server
    >>> app = create_app()
    >>> run_server(app, host="127.0.0.1", port=3001)

Or using command line:
    $ python -m docshape.server --port 3001
"""

from .app import create_app
from .config import ServerConfig, get_config
from .models import (
    # Documents
    FieldsRequest,
    FieldsResponse,
    ProcessRequest,
    ProcessResponse,
    # Queries
    BuildQueryRequest,
    ParseQueryRequest,
    QueryResponse,
    # Common
    HealthResponse,
    SuccessResponse,
    ErrorResponse,
)

__all__ = [
    # App
    "create_app",
    "run_server",
    # Config
    "ServerConfig",
    "get_config",
    # Models
    "FieldsRequest",
    "FieldsResponse",
    "ProcessRequest",
    "ProcessResponse",
    "BuildQueryRequest",
    "ParseQueryRequest",
    "QueryResponse",
    "HealthResponse",
    "SuccessResponse",
    "ErrorResponse",
]


def run_server(
    app=None,
    host: str = "127.0.0.1",
    port: int = 3001,
    log_level: str = "info",
):
    """
    Run the docshape server.

    Args:
        app: FastAPI application (creates default if None)
        host: Host to bind to
        port: Port to bind to
        log_level: Logging level
    """
    import uvicorn

    if app is None:
        app = create_app()

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=log_level,
    )
