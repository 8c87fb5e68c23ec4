#!/usr/bin/env python3
"""
Main CLI entry point for Memberhub backend server.
"""

import os
import sys

import click
import uvicorn

from memberhub import __version__
from memberhub.config import settings
from memberhub.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="memberhub")
def cli() -> None:
    """Memberhub CLI - run the server and seed the database."""
    pass


@cli.command()
@click.option("--host", default=settings.api_host, show_default=True, help="Host to bind to")
@click.option(
    "--port", default=settings.api_port, type=int, show_default=True, help="Port to bind to"
)
@click.option(
    "--reload",
    is_flag=True,
    default=settings.api_reload,
    help="Enable auto-reload for development",
)
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
def serve(host: str, port: int, reload: bool, log_level: str) -> None:
    """Start the Memberhub API server."""
    configure_logging(debug=(log_level == "debug"))

    logger.info("Starting Memberhub API server", host=host, port=port, reload=reload)

    # The app configures logging from MEMBERHUB_DEBUG when uvicorn imports it
    if log_level == "debug":
        os.environ["MEMBERHUB_DEBUG"] = "true"
    else:
        os.environ.setdefault("MEMBERHUB_DEBUG", "false")

    try:
        uvicorn.run(
            "memberhub.api.app:app",
            host=host,
            port=port,
            reload=reload,
            log_level=log_level,
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


@cli.command()
def seed() -> None:
    """Seed the database with the default member types."""
    import asyncio

    from memberhub.database.connection import dispose_database, get_async_session
    from memberhub.database.seed_data import seed_initial_data

    configure_logging()

    async def do_seed():
        try:
            async with get_async_session() as db:
                await seed_initial_data(db)
            click.echo("✓ Database seeded successfully")
        except Exception as e:
            logger.error("Failed to seed database", error=str(e))
            click.echo(f"✗ Error seeding database: {e}", err=True)
            sys.exit(1)
        finally:
            await dispose_database()

    asyncio.run(do_seed())


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    cli()
