"""Persistence adapters (SQLAlchemy 2.0 async)."""

from teampulse.infrastructure.persistence.database import Base, DatabaseManager
from teampulse.infrastructure.persistence.models import RefreshTokenModel
from teampulse.infrastructure.persistence.repositories import SqlAlchemyRefreshTokenRepository

__all__ = [
    "Base",
    "DatabaseManager",
    "RefreshTokenModel",
    "SqlAlchemyRefreshTokenRepository",
]
