"""Tests for LogoutUseCase and PurgeExpiredRefreshTokensUseCase."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from teampulse.application.use_cases import LogoutUseCase, PurgeExpiredRefreshTokensUseCase
from teampulse.domain.entities import RefreshToken
from teampulse.domain.errors import RepositoryError
from teampulse.domain.result import Err, Ok
from teampulse.infrastructure.persistence.repositories import SqlAlchemyRefreshTokenRepository

USER_ID = "0b7e7c1e-6f0a-4f2e-9d55-6a2c1f4b8e11"


class TestLogout:
    @pytest.mark.asyncio
    async def test_logout_deletes_refresh_token(self, db_session, token_factory):
        repo = SqlAlchemyRefreshTokenRepository(db_session)
        token = token_factory.create_refresh_token(USER_ID).value
        await repo.save(token)

        result = await LogoutUseCase(repo).execute(token.token)

        assert result == Ok(None)
        assert (await repo.find_by_token(token.token)) == Ok(None)

    @pytest.mark.asyncio
    async def test_logout_is_idempotent(self, db_session):
        use_case = LogoutUseCase(SqlAlchemyRefreshTokenRepository(db_session))
        assert await use_case.execute("unknown-token") == Ok(None)
        assert await use_case.execute("unknown-token") == Ok(None)

    @pytest.mark.asyncio
    async def test_logout_propagates_repository_errors(self):
        error = RepositoryError.for_operation("delete_by_token", "Failed to delete refresh token")
        repo = AsyncMock()
        repo.delete_by_token.return_value = Err(error)

        result = await LogoutUseCase(repo).execute("token")
        assert isinstance(result, Err)
        assert result.error is error


class TestPurgeExpiredRefreshTokens:
    @pytest.mark.asyncio
    async def test_purges_only_expired_tokens(self, db_session, token_factory):
        repo = SqlAlchemyRefreshTokenRepository(db_session)
        valid = token_factory.create_refresh_token(USER_ID).value
        issued = token_factory.create_refresh_token(USER_ID).value
        expired = RefreshToken.create(
            id=issued.id,
            token=issued.token,
            user_id=USER_ID,
            expires_at=datetime.now(timezone.utc) - timedelta(days=1),
        ).value
        await repo.save(valid)
        await repo.save(expired)

        result = await PurgeExpiredRefreshTokensUseCase(repo).execute()

        assert result == Ok(1)
        remaining = (await repo.find_by_user_id(USER_ID)).value
        assert [token.id for token in remaining] == [valid.id]

    @pytest.mark.asyncio
    async def test_purge_propagates_repository_errors(self):
        error = RepositoryError.for_operation("delete_expired", "Failed to delete expired refresh tokens")
        repo = AsyncMock()
        repo.delete_expired.return_value = Err(error)

        result = await PurgeExpiredRefreshTokensUseCase(repo).execute()
        assert isinstance(result, Err)
        assert result.error is error
