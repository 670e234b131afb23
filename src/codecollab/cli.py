"""Command-line interface for CodeCollab.

This module provides the CLI commands for running and managing
the CodeCollab API.
"""

import asyncio
from typing import NoReturn

import click

from codecollab import __version__
from codecollab.core.config import get_settings
from codecollab.core.logging import configure_logging, get_logger


@click.group()
@click.version_option(version=__version__, prog_name="CodeCollab")
def cli() -> None:
    """CodeCollab - share and review code snippets.

    Settings are read from CODECOLLAB_* environment variables and .env.
    """


@cli.command()
@click.option(
    "--host",
    type=str,
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--reload",
    is_flag=True,
    default=False,
    help="Enable auto-reload for development",
)
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the CodeCollab API server."""
    import uvicorn

    settings = get_settings()

    bind_host = host or settings.host
    bind_port = port or settings.port

    configure_logging(settings)

    logger = get_logger(__name__)
    logger.info(
        "Starting CodeCollab server",
        host=bind_host,
        port=bind_port,
        reload=reload,
        environment=settings.environment,
    )

    uvicorn.run(
        "codecollab.infrastructure.api.app:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level=settings.log_level.lower(),
        access_log=True,
    )


@cli.command("init-db")
def init_db() -> None:
    """Create all tables and seed the default badges.

    Safe to run repeatedly: existing tables and badges are left alone.
    """
    from codecollab.infrastructure.persistence.database import DatabaseManager

    settings = get_settings()
    configure_logging(settings)

    async def initialize() -> int:
        db = DatabaseManager(settings)
        try:
            if not await db.check_connection():
                raise click.ClickException("Cannot connect to the database")
            await db.create_tables()
            return await db.seed_default_badges()
        finally:
            await db.disconnect()

    created = asyncio.run(initialize())
    click.echo(f"Database initialized successfully ({created} badges seeded).")


@cli.command()
def info() -> None:
    """Display CodeCollab configuration."""
    settings = get_settings()

    click.echo(f"""
CodeCollab v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}
  Debug:        {settings.debug}
  API Prefix:   {settings.api_prefix}

Server:
  Host:         {settings.host}
  Port:         {settings.port}

Database:
  URL:          {settings.database_url}
  Echo:         {settings.db_echo}

Security:
  Token Expire: {settings.access_token_expire_minutes} minutes
  Refresh Exp:  {settings.refresh_token_expire_days} days
  Issuer:       {settings.jwt_issuer}

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Main entry point for the CLI.

    This function is called when the `codecollab` command is run
    or when using `python -m codecollab`.
    """
    cli()


if __name__ == "__main__":
    main()
