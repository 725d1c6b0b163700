"""
Command-line entry point for docshape server.

Usage:
    python -m docshape.server [OPTIONS]

Options:
    --host TEXT         Host to bind to (default: 127.0.0.1)
    --port INTEGER      Port to bind to (default: 3001)
    --config TEXT       Engine settings YAML file
    --store TEXT        Saved-query store (memory, file)
    --data-dir TEXT     Saved-query data directory
    --reload            Enable auto-reload
    --log-level TEXT    Log level (DEBUG, INFO, WARNING, ERROR)
"""

import argparse
import uvicorn

from .config import ServerConfig, set_config
from .app import create_app


def main():
    parser = argparse.ArgumentParser(
        description="docshape Server - document shaping and saved-query REST API"
    )

    parser.add_argument(
        "--host",
        type=str,
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=3001,
        help="Port to bind to (default: 3001)"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Engine settings YAML file"
    )
    parser.add_argument(
        "--store",
        type=str,
        default=None,
        choices=["memory", "file"],
        help="Saved-query store backend"
    )
    parser.add_argument(
        "--data-dir",
        type=str,
        default=None,
        help="Saved-query data directory"
    )
    parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level"
    )

    args = parser.parse_args()

    config = ServerConfig(
        host=args.host,
        port=args.port,
        config_path=args.config,
        store_backend=args.store,
        data_dir=args.data_dir,
        reload=args.reload,
        log_level=args.log_level,
    )

    set_config(config)

    print(f"""
╔══════════════════════════════════════════════════════════╗
║                    docshape Server                       ║
╠══════════════════════════════════════════════════════════╣
║  Host:      {config.host:<44} ║
║  Port:      {config.port:<44} ║
║  Store:     {config.store_backend or 'from settings':<44} ║
║  Log Level: {config.log_level:<44} ║
║  API Docs:  http://{config.host}:{config.port}/docs{' ':<24} ║
╚══════════════════════════════════════════════════════════╝
    """)

    if config.reload:
        # Reload needs an import string; the worker rebuilds the config from env
        uvicorn.run(
            "docshape.server.app:create_app",
            factory=True,
            host=config.host,
            port=config.port,
            reload=True,
            log_level=config.log_level.lower(),
        )
    else:
        uvicorn.run(
            create_app(config),
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
        )


if __name__ == "__main__":
    main()
