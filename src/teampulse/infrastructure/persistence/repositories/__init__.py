"""Repository adapters."""

from teampulse.infrastructure.persistence.repositories.refresh_token_repository import (
    SqlAlchemyRefreshTokenRepository,
)

__all__ = ["SqlAlchemyRefreshTokenRepository"]
