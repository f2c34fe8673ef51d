"""Tests for the teampulse command-line interface."""

import asyncio
import uuid
from datetime import datetime, timedelta, timezone

import bcrypt
import pytest
from click.testing import CliRunner

from teampulse import __version__
from teampulse.cli import cli
from teampulse.core.config import get_settings
from teampulse.domain.entities import RefreshToken
from teampulse.infrastructure.persistence import DatabaseManager, SqlAlchemyRefreshTokenRepository

ACCESS_SECRET = "cli-access-secret-that-is-at-least-32-chars"
REFRESH_SECRET = "cli-refresh-secret-that-is-at-least-32-chars"


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def cli_env(tmp_path) -> dict[str, str]:
    return {
        "TEAMPULSE_ENVIRONMENT": "testing",
        "TEAMPULSE_JWT_SECRET": ACCESS_SECRET,
        "TEAMPULSE_JWT_REFRESH_SECRET": REFRESH_SECRET,
        "TEAMPULSE_BCRYPT_ROUNDS": "4",
        "TEAMPULSE_LOG_LEVEL": "WARNING",
        "TEAMPULSE_DATABASE_URL": f"sqlite+aiosqlite:///{tmp_path / 'teampulse.db'}",
    }


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


def test_version(runner: CliRunner):
    result = runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert f"version {__version__}" in result.output


def test_info_never_prints_secrets(runner: CliRunner, cli_env):
    result = runner.invoke(cli, ["info"], env=cli_env)

    assert result.exit_code == 0, result.output
    assert "testing" in result.output
    assert "bcrypt" in result.output
    assert "15 minutes" in result.output
    assert "7 days" in result.output
    assert ACCESS_SECRET not in result.output
    assert REFRESH_SECRET not in result.output


def test_invalid_configuration(runner: CliRunner, cli_env):
    env = {**cli_env, "TEAMPULSE_JWT_REFRESH_SECRET": ACCESS_SECRET}
    result = runner.invoke(cli, ["info"], env=env)

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_hash_password(runner: CliRunner, cli_env):
    result = runner.invoke(cli, ["hash-password", "--password", "SecureP@ss123!"], env=cli_env)

    assert result.exit_code == 0, result.output
    hashed = result.output.strip().splitlines()[-1]
    assert hashed.startswith("$2b$04$")
    assert bcrypt.checkpw(b"SecureP@ss123!", hashed.encode())


def test_hash_password_prompts(runner: CliRunner, cli_env):
    result = runner.invoke(cli, ["hash-password"], env=cli_env, input="SecureP@ss123!\nSecureP@ss123!\n")

    assert result.exit_code == 0, result.output
    assert "$2b$04$" in result.output


def test_init_db_refuses_production_without_force(runner: CliRunner, cli_env):
    env = {**cli_env, "TEAMPULSE_ENVIRONMENT": "production"}
    result = runner.invoke(cli, ["init-db"], env=env, input="y\n")

    assert result.exit_code == 1
    assert "Use migrations" in result.output


def test_init_db_then_purge(runner: CliRunner, cli_env, monkeypatch):
    result = runner.invoke(cli, ["init-db", "--force"], env=cli_env)
    assert result.exit_code == 0, result.output
    assert "Database initialized successfully." in result.output

    for key, value in cli_env.items():
        monkeypatch.setenv(key, value)
    get_settings.cache_clear()

    async def seed_expired_token() -> None:
        db = DatabaseManager(get_settings())
        try:
            async with db.session() as session:
                token = RefreshToken.create(
                    id=str(uuid.uuid4()),
                    token="expired-jwt",
                    user_id=str(uuid.uuid4()),
                    expires_at=datetime.now(timezone.utc) - timedelta(hours=1),
                ).value
                await SqlAlchemyRefreshTokenRepository(session).save(token)
        finally:
            await db.disconnect()

    asyncio.run(seed_expired_token())
    get_settings.cache_clear()

    result = runner.invoke(cli, ["purge-expired-tokens"], env=cli_env)
    assert result.exit_code == 0, result.output
    assert "Purged 1 expired refresh token(s)." in result.output

    result = runner.invoke(cli, ["purge-expired-tokens"], env=cli_env)
    assert "Purged 0 expired refresh token(s)." in result.output
