#!/usr/bin/env python3
"""
Main CLI entry point for Quill backend server.
"""

import asyncio
import os
import sys

import click
import uvicorn

from quill import __version__
from quill.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="quill")
def cli() -> None:
    """Quill CLI - run the server, seed data and issue tokens."""
    pass


@cli.command()
@click.option("--host", default="0.0.0.0", help="Host to bind to (default: 0.0.0.0)")
@click.option("--port", default=8089, type=int, help="Port to bind to (default: 8089)")
@click.option("--reload", is_flag=True, default=False, help="Enable auto-reload for development")
@click.option("--workers", default=1, type=int, help="Number of worker processes (default: 1)")
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, workers: int, log_level: str) -> None:
    """Start the Quill API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info(
        "Starting Quill API server",
        host=host,
        port=port,
        reload=reload,
        workers=workers,
        log_level=log_level,
    )

    # Settings are read at import time by the app module
    if log_level == "debug":
        os.environ["QUILL_DEBUG"] = "true"
        os.environ["QUILL_LOG_LEVEL"] = "debug"
    else:
        os.environ.setdefault("QUILL_DEBUG", "false")
        os.environ.setdefault("QUILL_LOG_LEVEL", log_level)

    try:
        if reload or workers > 1:
            uvicorn.run(
                "quill.api.app:app",
                host=host,
                port=port,
                reload=reload,
                workers=(workers if not reload else 1),  # reload doesn't work with multiple workers
                log_level=log_level,
                access_log=True,
            )
        else:
            from quill.api.app import app

            uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
def seed() -> None:
    """Seed the database with the development user and default types."""
    from quill.database.connection import get_async_session
    from quill.database.seed_data import seed_initial_data

    configure_logging()

    async def do_seed():
        async with get_async_session() as db:
            await seed_initial_data(db)

    try:
        asyncio.run(do_seed())
        click.echo("✓ Database seeded successfully")
    except Exception as e:
        logger.error("Failed to seed database", error=str(e))
        click.echo(f"✗ Error seeding database: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option(
    "--user-id",
    required=True,
    type=click.UUID,
    help="User the token authenticates as. In no-auth mode only the default user is accepted.",
)
def token(user_id) -> None:
    """Issue an access token through the configured auth provider.

    With QUILL_AUTH_PROVIDER=none every request already acts as the default
    user, so asking for any other user is an error.
    """
    from quill.auth.factory import get_auth_adapter

    configure_logging()

    try:
        adapter = get_auth_adapter()
        click.echo(asyncio.run(adapter.issue_token(user_id=user_id)))
    except Exception as e:
        logger.error("Failed to issue token", error=str(e))
        click.echo(f"✗ Error issuing token: {e}", err=True)
        sys.exit(1)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
