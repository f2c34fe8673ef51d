"""Tests for the password hasher adapters."""

from unittest.mock import patch

import pytest

from teampulse.core.config import Settings
from teampulse.domain.errors import RepositoryError
from teampulse.domain.result import Err, Ok
from teampulse.infrastructure.auth.password_hasher import (
    Argon2PasswordHasher,
    BcryptPasswordHasher,
    create_password_hasher,
)


@pytest.fixture
def argon2_hasher() -> Argon2PasswordHasher:
    # Minimal cost parameters keep the tests fast
    return Argon2PasswordHasher(time_cost=1, memory_cost=8, parallelism=1)


class TestBcryptPasswordHasher:
    @pytest.mark.asyncio
    async def test_hash_and_verify(self, password_hasher: BcryptPasswordHasher):
        hashed = await password_hasher.hash("SecureP@ss123!")
        assert isinstance(hashed, Ok)
        assert hashed.value.startswith("$2b$04$")

        assert await password_hasher.verify("SecureP@ss123!", hashed.value) == Ok(True)
        assert await password_hasher.verify("wrong", hashed.value) == Ok(False)

    @pytest.mark.asyncio
    async def test_same_password_gets_different_salts(self, password_hasher: BcryptPasswordHasher):
        first = (await password_hasher.hash("SecureP@ss123!")).value
        second = (await password_hasher.hash("SecureP@ss123!")).value
        assert first != second

    @pytest.mark.asyncio
    @pytest.mark.parametrize("hashed", ["", "not-a-hash", "$2b$04$tooshort"])
    async def test_invalid_hash_verifies_false(self, password_hasher: BcryptPasswordHasher, hashed):
        assert await password_hasher.verify("anything", hashed) == Ok(False)

    @pytest.mark.asyncio
    async def test_passwords_are_truncated_to_72_bytes(self, password_hasher: BcryptPasswordHasher):
        base = "a" * 72
        hashed = (await password_hasher.hash(base + "first-suffix")).value
        assert await password_hasher.verify(base + "second-suffix", hashed) == Ok(True)
        assert await password_hasher.verify("a" * 71, hashed) == Ok(False)

    @pytest.mark.asyncio
    async def test_unicode_password(self, password_hasher: BcryptPasswordHasher):
        hashed = (await password_hasher.hash("contraseña-ñandú")).value
        assert await password_hasher.verify("contraseña-ñandú", hashed) == Ok(True)

    @pytest.mark.asyncio
    async def test_unexpected_failure_becomes_repository_error(self, password_hasher: BcryptPasswordHasher):
        with patch("teampulse.infrastructure.auth.password_hasher.bcrypt.gensalt", side_effect=RuntimeError("rng")):
            result = await password_hasher.hash("SecureP@ss123!")

        assert isinstance(result, Err)
        assert isinstance(result.error, RepositoryError)
        assert result.error.operation == "hash"

    @pytest.mark.parametrize("rounds", [3, 32])
    def test_rounds_out_of_range(self, rounds):
        with pytest.raises(ValueError):
            BcryptPasswordHasher(rounds=rounds)


class TestArgon2PasswordHasher:
    @pytest.mark.asyncio
    async def test_hash_and_verify(self, argon2_hasher: Argon2PasswordHasher):
        hashed = (await argon2_hasher.hash("SecureP@ss123!")).value
        assert hashed.startswith("$argon2id$")
        assert await argon2_hasher.verify("SecureP@ss123!", hashed) == Ok(True)
        assert await argon2_hasher.verify("wrong", hashed) == Ok(False)

    @pytest.mark.asyncio
    async def test_invalid_hash_verifies_false(self, argon2_hasher: Argon2PasswordHasher):
        assert await argon2_hasher.verify("anything", "not-a-hash") == Ok(False)

    @pytest.mark.asyncio
    async def test_needs_rehash(self, argon2_hasher: Argon2PasswordHasher):
        hashed = (await argon2_hasher.hash("SecureP@ss123!")).value
        assert argon2_hasher.needs_rehash(hashed) is False
        stronger = Argon2PasswordHasher(time_cost=2, memory_cost=8, parallelism=1)
        assert stronger.needs_rehash(hashed) is True


class TestCreatePasswordHasher:
    def test_bcrypt_is_default(self, settings: Settings):
        hasher = create_password_hasher(settings)
        assert isinstance(hasher, BcryptPasswordHasher)
        assert hasher.rounds == 4

    def test_argon2(self, settings: Settings):
        hasher = create_password_hasher(settings.model_copy(update={"password_hasher": "argon2"}))
        assert isinstance(hasher, Argon2PasswordHasher)
