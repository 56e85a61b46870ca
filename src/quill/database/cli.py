#!/usr/bin/env python3
"""
CLI entry point for Quill database migrations.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from quill import __version__
from quill.logging import configure_logging, get_logger

logger = get_logger(__name__)

# src/quill/database/cli.py -> project root
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def get_alembic_config() -> Config:
    """Load alembic.ini from the project root, with scripts resolved next to it."""
    alembic_ini = PROJECT_ROOT / "alembic.ini"
    if not alembic_ini.exists():
        raise FileNotFoundError(f"alembic.ini not found at {alembic_ini}")

    config = Config(str(alembic_ini))
    config.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return config


def run_alembic(action: str, fn: Callable[..., object], *args, **kwargs) -> None:
    """Run an alembic command, logging the outcome and exiting non-zero on failure."""
    try:
        fn(get_alembic_config(), *args, **kwargs)
    except Exception as e:
        logger.error(f"Database {action} failed", error=str(e))
        sys.exit(1)
    logger.info(f"Database {action} completed", **kwargs)


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.version_option(version=__version__, prog_name="quill-migrate")
def main(log_level: str) -> None:
    """Quill database migration management."""
    configure_logging(debug=(log_level == "debug"))


@main.command()
@click.argument("revision", default="head")
def upgrade(revision: str) -> None:
    """Upgrade database to a revision (default: head)."""
    run_alembic("upgrade", command.upgrade, revision=revision)


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    run_alembic("downgrade", command.downgrade, revision=revision)


@main.command()
@click.argument("revision", default="head")
def stamp(revision: str) -> None:
    """Mark the database as being at a revision without running migrations."""
    run_alembic("stamp", command.stamp, revision=revision)


@main.command()
@click.option("-m", "--message", required=True, help="Revision message")
@click.option("--autogenerate/--no-autogenerate", default=True, help="Auto-generate migration")
def revision(message: str, autogenerate: bool) -> None:
    """Create a new migration revision."""
    run_alembic("revision", command.revision, message=message, autogenerate=autogenerate)


@main.command()
def current() -> None:
    """Show current database revision."""
    run_alembic("current lookup", command.current)


@main.command()
def history() -> None:
    """Show migration history."""
    run_alembic("history lookup", command.history)


if __name__ == "__main__":
    main()
