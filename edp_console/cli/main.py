#!/usr/bin/env python3
"""EDP admin console CLI - server and database management."""

import argparse
import asyncio
import sys

from edp_console.settings import settings
from edp_console.utils.db_manager import db_manager
from edp_console.utils.logger import logger, setup_logging


def run_server(host: str | None = None, port: int | None = None) -> None:
    """Run the admin console server."""
    import uvicorn

    host = host or settings.host or "127.0.0.1"
    port = port or settings.port or 8000

    logger.info(f"Starting EDP admin console at http://{host}:{port}")

    uvicorn.run(
        "edp_console.api.app:app",
        host=host,
        port=port,
        reload=settings.debug,
        log_level="info" if settings.debug else "warning",
    )


async def init_database() -> None:
    """Create the read model tables."""
    logger.info("Initializing database...")
    try:
        await db_manager.create_db_and_tables_async()
    finally:
        await db_manager.close()
    logger.info("Database initialized successfully")


def main() -> None:
    """Main CLI entry point."""
    setup_logging(settings)

    parser = argparse.ArgumentParser(
        prog="edp-console", description="EDP admin console - CD pipeline management"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # run command
    run_parser = subparsers.add_parser("run", help="Run the API server")
    run_parser.add_argument(
        "--host", type=str, default=None, help="Host to bind to (default: 127.0.0.1)"
    )
    run_parser.add_argument(
        "--port", type=int, default=None, help="Port to bind to (default: 8000)"
    )

    # db command
    db_parser = subparsers.add_parser("db", help="Database management")
    db_subparsers = db_parser.add_subparsers(dest="db_command")
    db_subparsers.add_parser("init", help="Create database tables")

    args = parser.parse_args()

    if args.command == "run":
        run_server(args.host, args.port)
    elif args.command == "db":
        if args.db_command == "init":
            asyncio.run(init_database())
        else:
            db_parser.print_help()
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
