#!/usr/bin/env python3
"""
`memberhub-migrate`: Alembic migrations for the memberhub schema.
"""

import asyncio
import os
import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from memberhub import __version__
from memberhub.logging import configure_logging, get_logger

from .connection import (
    dispose_database,
    get_async_session,
    init_database,
    test_database_connection,
)
from .seed_data import seed_initial_data

logger = get_logger(__name__)

ALEMBIC_INI = Path(__file__).resolve().parents[3] / "alembic.ini"


def get_alembic_config() -> Config:
    if not ALEMBIC_INI.exists():
        raise FileNotFoundError(f"alembic.ini not found at {ALEMBIC_INI}")
    return Config(str(ALEMBIC_INI))


def run_alembic(action: str, fn: Callable[[Config], None]) -> None:
    """Run one Alembic command, exiting non-zero when it fails."""
    try:
        fn(get_alembic_config())
    except Exception as e:
        logger.error("Migration command failed", action=action, error=str(e))
        sys.exit(1)


async def _seed() -> None:
    try:
        async with get_async_session() as db:
            await seed_initial_data(db)
    finally:
        await dispose_database()


async def _check() -> tuple[bool, str | None]:
    init_database()
    try:
        return await test_database_connection()
    finally:
        await dispose_database()


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.option(
    "--database-url",
    envvar="MEMBERHUB_DATABASE_URL",
    help="PostgreSQL URL; overrides MEMBERHUB_DATABASE_URL for this run",
)
@click.version_option(version=__version__, prog_name="memberhub-migrate")
def main(log_level: str, database_url: str | None) -> None:
    """Memberhub database migration management."""
    configure_logging(debug=(log_level == "debug"))
    if database_url:
        # Read by alembic/env.py and the session pool alike
        os.environ["MEMBERHUB_DATABASE_URL"] = database_url


@main.command()
@click.argument("revision", default="head")
@click.option("--seed", is_flag=True, help="Insert missing default member types afterwards")
def upgrade(revision: str, seed: bool) -> None:
    """Upgrade database to a revision (default: head)."""
    logger.info("Upgrading database", revision=revision)
    run_alembic("upgrade", lambda config: command.upgrade(config, revision))

    if seed:
        try:
            asyncio.run(_seed())
        except Exception as e:
            logger.error("Seeding after upgrade failed", error=str(e))
            sys.exit(1)
    logger.info("Database upgrade completed", revision=revision, seeded=seed)


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Downgrade database to a revision (default: -1)."""
    logger.info("Downgrading database", revision=revision)
    run_alembic("downgrade", lambda config: command.downgrade(config, revision))


@main.command()
def current() -> None:
    """Show current database revision."""
    run_alembic("current", command.current)


@main.command()
def check() -> None:
    """Verify the database is reachable."""
    ok, error = asyncio.run(_check())
    if not ok:
        click.echo(error, err=True)
        sys.exit(1)
    click.echo("Database connection OK")


if __name__ == "__main__":
    main()
