"""SQLAlchemy implementation of the refresh token repository port.

Every failure from below (database errors, or a stored row that no longer
passes ``RefreshToken.create``) is logged and returned as a single
``RepositoryError`` tagged with the operation name. Nothing is retried.

The repository flushes but never commits; the caller owns the transaction.
"""

from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from teampulse.core.logging import get_logger
from teampulse.domain.entities import RefreshToken
from teampulse.domain.errors import ApplicationError, RepositoryError
from teampulse.domain.result import Err, Ok, Result, collect
from teampulse.domain.value_objects import UserId
from teampulse.infrastructure.persistence.models import RefreshTokenModel

logger = get_logger(__name__)


class SqlAlchemyRefreshTokenRepository:
    """Refresh token storage backed by an ``AsyncSession``."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session

    @staticmethod
    def _to_model(entity: RefreshToken) -> RefreshTokenModel:
        return RefreshTokenModel(
            id=entity.id,
            token=entity.token,
            user_id=entity.user_id,
            expires_at=entity.expires_at,
            created_at=entity.created_at,
        )

    @staticmethod
    def _to_entity(model: RefreshTokenModel) -> Result[RefreshToken, ApplicationError]:
        # SQLite hands datetimes back naive; RefreshToken.create reads them as UTC.
        return RefreshToken.create(
            id=model.id,
            token=model.token,
            user_id=model.user_id,
            expires_at=model.expires_at,
            created_at=model.created_at,
        )

    @staticmethod
    def _failure(operation: str, message: str, error: BaseException) -> Err[RepositoryError]:
        logger.error(
            "Refresh token repository operation failed",
            operation=operation,
            error_type=type(error).__name__,
            error=str(error),
        )
        return Err(RepositoryError.for_operation(operation, message, cause=error))

    def _to_entities(self, models: Sequence[RefreshTokenModel]) -> Result[list[RefreshToken], ApplicationError]:
        return collect(self._to_entity(model) for model in models)

    async def find_by_token(self, token: str) -> Result[RefreshToken | None, RepositoryError]:
        operation = "find_by_token"
        try:
            result = await self._session.execute(select(RefreshTokenModel).where(RefreshTokenModel.token == token))
            model = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            return self._failure(operation, "Failed to find refresh token", e)

        if model is None:
            return Ok(None)

        entity = self._to_entity(model)
        if isinstance(entity, Err):
            return self._failure(operation, "Stored refresh token is invalid", entity.error)
        return entity

    async def find_by_user_id(self, user_id: UserId) -> Result[list[RefreshToken], RepositoryError]:
        operation = "find_by_user_id"
        try:
            result = await self._session.execute(
                select(RefreshTokenModel)
                .where(RefreshTokenModel.user_id == user_id)
                .order_by(RefreshTokenModel.created_at)
            )
            models = result.scalars().all()
        except SQLAlchemyError as e:
            return self._failure(operation, "Failed to find refresh tokens for user", e)

        entities = self._to_entities(models)
        if isinstance(entities, Err):
            return self._failure(operation, "Stored refresh token is invalid", entities.error)
        return entities

    async def save(self, refresh_token: RefreshToken) -> Result[RefreshToken, RepositoryError]:
        """Insert the token, or overwrite the stored row with the same id."""
        try:
            await self._session.merge(self._to_model(refresh_token))
            await self._session.flush()
        except SQLAlchemyError as e:
            return self._failure("save", "Failed to save refresh token", e)
        return Ok(refresh_token)

    async def delete_by_token(self, token: str) -> Result[bool, RepositoryError]:
        try:
            result = await self._session.execute(
                delete(RefreshTokenModel)
                .where(RefreshTokenModel.token == token)
                .execution_options(synchronize_session="fetch")
            )
            await self._session.flush()
        except SQLAlchemyError as e:
            return self._failure("delete_by_token", "Failed to delete refresh token", e)
        return Ok(result.rowcount > 0)

    async def delete_by_user_id(self, user_id: UserId) -> Result[int, RepositoryError]:
        try:
            result = await self._session.execute(
                delete(RefreshTokenModel)
                .where(RefreshTokenModel.user_id == user_id)
                .execution_options(synchronize_session="fetch")
            )
            await self._session.flush()
        except SQLAlchemyError as e:
            return self._failure("delete_by_user_id", "Failed to delete refresh tokens for user", e)
        return Ok(result.rowcount)

    async def delete_expired(self) -> Result[int, RepositoryError]:
        now = datetime.now(timezone.utc)
        try:
            result = await self._session.execute(
                delete(RefreshTokenModel)
                .where(RefreshTokenModel.expires_at <= now)
                .execution_options(synchronize_session="fetch")
            )
            await self._session.flush()
        except SQLAlchemyError as e:
            return self._failure("delete_expired", "Failed to delete expired refresh tokens", e)

        deleted = result.rowcount
        logger.info("Expired refresh tokens deleted", count=deleted)
        return Ok(deleted)
