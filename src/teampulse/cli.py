"""Command-line interface for TeamPulse.

Operational commands for the credential core: creating the refresh-token
table, purging expired tokens and hashing passwords for seed data.
"""

import asyncio
from typing import NoReturn

import click
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.engine import make_url

from teampulse import __version__
from teampulse.core.config import Settings, get_settings
from teampulse.core.logging import configure_logging, get_logger
from teampulse.domain.result import Err


def _load_settings() -> Settings:
    try:
        settings = get_settings()
    except PydanticValidationError as e:
        fields = ", ".join(".".join(str(part) for part in err["loc"]) or "settings" for err in e.errors())
        raise click.ClickException(f"Invalid configuration: {fields}") from e
    configure_logging(settings)
    return settings


@click.group()
@click.version_option(version=__version__, prog_name="TeamPulse")
def cli() -> None:
    """TeamPulse - team and roster management API.

    Settings are read from TEAMPULSE_* environment variables and .env.
    """


@cli.command()
@click.option(
    "--force",
    is_flag=True,
    help="Skip confirmation prompt",
)
def init_db(force: bool) -> None:
    """Create the refresh token table.

    Use this only in development. In production, use migrations instead.
    """
    from teampulse.infrastructure.persistence.database import DatabaseManager

    settings = _load_settings()

    if settings.is_production and not force:
        click.echo(
            "ERROR: Running in production mode. Use migrations instead of init-db.",
            err=True,
        )
        raise SystemExit(1)

    if not force:
        click.confirm(
            "This will create the database tables. Continue?",
            abort=True,
            default=False,
        )

    async def initialize() -> None:
        db = DatabaseManager(settings)
        try:
            await db.create_tables()
        finally:
            await db.disconnect()

    asyncio.run(initialize())
    click.echo("Database initialized successfully.")


@cli.command()
def purge_expired_tokens() -> None:
    """Delete expired refresh tokens.

    Meant to be run on a schedule (cron, Kubernetes CronJob).
    """
    from teampulse.application.use_cases import PurgeExpiredRefreshTokensUseCase
    from teampulse.infrastructure.persistence import DatabaseManager, SqlAlchemyRefreshTokenRepository

    settings = _load_settings()
    logger = get_logger(__name__)

    async def purge() -> int:
        db = DatabaseManager(settings)
        try:
            async with db.session() as session:
                use_case = PurgeExpiredRefreshTokensUseCase(SqlAlchemyRefreshTokenRepository(session))
                result = await use_case.execute()
                if isinstance(result, Err):
                    raise click.ClickException(result.error.message)
                return result.value
        finally:
            await db.disconnect()

    purged = asyncio.run(purge())
    logger.info("Purge command finished", purged=purged)
    click.echo(f"Purged {purged} expired refresh token(s).")


@cli.command()
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password to hash (prompts if not provided)",
)
def hash_password(password: str) -> None:
    """Print the hash of a password, for seeding user records."""
    from teampulse.infrastructure.auth.password_hasher import create_password_hasher

    settings = _load_settings()
    hasher = create_password_hasher(settings)

    result = asyncio.run(hasher.hash(password))
    if isinstance(result, Err):
        raise click.ClickException(result.error.message)
    click.echo(result.value)


@cli.command()
def info() -> None:
    """Display TeamPulse configuration. Secrets are never shown."""
    from teampulse.application.token_factory import TokenFactory

    settings = _load_settings()
    database_url = make_url(settings.database_url).render_as_string(hide_password=True)

    click.echo(f"""
{settings.app_name} v{settings.app_version}
{'=' * 40}

Configuration:
  Environment:  {settings.environment}

Database:
  URL:          {database_url}
  Echo:         {settings.db_echo}

Security:
  Hasher:       {settings.password_hasher}
  Access Exp:   {int(TokenFactory.ACCESS_TOKEN_LIFETIME.total_seconds() // 60)} minutes
  Refresh Exp:  {TokenFactory.REFRESH_TOKEN_LIFETIME.days} days

Logging:
  Level:        {settings.log_level}
  Format:       {settings.log_format}
""")


def main() -> NoReturn:
    """Entry point for the ``teampulse`` command and ``python -m teampulse``."""
    cli()


if __name__ == "__main__":
    main()
