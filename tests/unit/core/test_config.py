"""Tests for Settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from teampulse.core.config import Settings, get_settings

ACCESS_SECRET = "a" * 32
REFRESH_SECRET = "b" * 32


def make_settings(**overrides) -> Settings:
    values = {"jwt_secret": ACCESS_SECRET, "jwt_refresh_secret": REFRESH_SECRET}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def test_settings_defaults():
    """Test that settings load with correct defaults."""
    settings = make_settings()

    assert settings.app_name == "TeamPulse"
    assert settings.environment == "development"
    assert settings.password_hasher == "bcrypt"
    assert settings.bcrypt_rounds == 10
    assert settings.database_url == "sqlite+aiosqlite:///./tp_data/teampulse.db"
    assert settings.log_format == "json"
    assert settings.is_development is True
    assert settings.is_production is False
    assert settings.is_testing is False


def test_settings_env_override():
    """Test that environment variables override defaults."""
    with patch.dict(
        os.environ,
        {
            "TEAMPULSE_JWT_SECRET": ACCESS_SECRET,
            "TEAMPULSE_JWT_REFRESH_SECRET": REFRESH_SECRET,
            "TEAMPULSE_ENVIRONMENT": "production",
            "TEAMPULSE_PASSWORD_HASHER": "argon2",
            "TEAMPULSE_BCRYPT_ROUNDS": "12",
        },
    ):
        settings = Settings(_env_file=None)

    assert settings.environment == "production"
    assert settings.is_production is True
    assert settings.password_hasher == "argon2"
    assert settings.bcrypt_rounds == 12


def test_secrets_are_required():
    with patch.dict(os.environ, {}, clear=True):
        with pytest.raises(ValidationError):
            Settings(_env_file=None)


@pytest.mark.parametrize("field", ["jwt_secret", "jwt_refresh_secret"])
def test_short_secret_rejected(field):
    with pytest.raises(ValidationError):
        make_settings(**{field: "too-short"})


def test_secrets_must_differ():
    with pytest.raises(ValidationError, match="must be different"):
        make_settings(jwt_refresh_secret=ACCESS_SECRET)


@pytest.mark.parametrize("rounds", [3, 32])
def test_bcrypt_rounds_bounds(rounds):
    with pytest.raises(ValidationError):
        make_settings(bcrypt_rounds=rounds)


def test_settings_are_immutable():
    settings = make_settings()
    with pytest.raises(ValidationError):
        settings.environment = "production"


def test_get_settings_is_cached():
    get_settings.cache_clear()
    try:
        with patch.dict(
            os.environ,
            {"TEAMPULSE_JWT_SECRET": ACCESS_SECRET, "TEAMPULSE_JWT_REFRESH_SECRET": REFRESH_SECRET},
        ):
            assert get_settings() is get_settings()
    finally:
        get_settings.cache_clear()
