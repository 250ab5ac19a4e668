#!/usr/bin/env python3
"""
Main CLI entry point for the Forum backend server.
"""

import os
import sys

import click
import uvicorn

from forum import __version__
from forum.config import settings
from forum.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="forum")
def cli() -> None:
    """Forum CLI - run the API server."""
    pass


@cli.command()
@click.option(
    "--host",
    default=settings.api_host,
    help="Host to bind to (default: FORUM_API_HOST or 0.0.0.0)",
)
@click.option(
    "--port",
    default=settings.api_port,
    type=int,
    help="Port to bind to (default: FORUM_API_PORT or 3000)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=settings.api_reload,
    help="Enable auto-reload for development",
)
@click.option(
    "--workers",
    default=1,
    type=int,
    help="Number of worker processes (default: 1)",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(
    host: str,
    port: int,
    reload: bool,
    workers: int,
    log_level: str,
) -> None:
    """Start the Forum API server."""
    configure_logging(debug=(log_level == "debug"), level=log_level)

    logger.info(
        "Starting Forum API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Reloaded and worker processes re-import settings from the environment
    if log_level == "debug":
        os.environ["FORUM_DEBUG"] = "true"
        os.environ["FORUM_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("FORUM_DEBUG", "false")
        os.environ.setdefault("FORUM_LOG_LEVEL", log_level)

    if workers > 1 and not os.getenv("FORUM_JWT_SECRET"):
        # Each worker would otherwise sign with its own ephemeral secret
        click.echo("✗ FORUM_JWT_SECRET must be set when running multiple workers", err=True)
        sys.exit(1)

    try:
        uvicorn.run(
            "forum.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=reload,
            workers=(workers if not reload else 1),  # reload doesn't work with multiple workers
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command("check-db")
def check_db() -> None:
    """Verify that the configured database is reachable."""
    import asyncio

    from forum.database.connection import init_database, test_database_connection

    configure_logging()

    async def do_check():
        init_database()
        ok, error = await test_database_connection()
        if ok:
            click.echo("✓ Database connection OK")
        else:
            click.echo(f"✗ {error}", err=True)
            sys.exit(1)

    asyncio.run(do_check())


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
