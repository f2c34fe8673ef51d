"""SQLAlchemy models."""

from teampulse.infrastructure.persistence.models.refresh_token import RefreshTokenModel

__all__ = ["RefreshTokenModel"]
