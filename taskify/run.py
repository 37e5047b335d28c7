"""CLI entry point for launching the Taskify API with uvicorn.

Usage:
    taskify-server                      # Start with settings from the environment
    taskify-server --port 8080          # Start on a custom port
    taskify-server --in-memory          # Keep tasks in memory, no MongoDB needed
"""

from __future__ import annotations

import argparse
import logging

import uvicorn

from taskify.config import Settings
from taskify.logging_setup import setup_logging
from taskify.main import create_app
from taskify.store import InMemoryTaskStore

logger = logging.getLogger(__name__)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Start the Taskify API server")
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to bind to (default: {settings.HOST})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to bind to (default: {settings.PORT})",
    )
    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL.lower(),
        choices=["critical", "error", "warning", "info", "debug"],
        help="Logging level",
    )
    parser.add_argument(
        "--in-memory",
        action="store_true",
        help="Serve from an in-memory store instead of MongoDB",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run the API server."""
    settings = Settings()
    args = build_parser(settings).parse_args(argv)

    setup_logging(args.log_level)

    store = InMemoryTaskStore() if args.in_memory else None
    app = create_app(settings, store=store)

    logger.info("Server running on port %d", args.port)
    uvicorn.run(
        app,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        log_config=None,
    )


if __name__ == "__main__":
    main()
