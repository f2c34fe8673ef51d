"""Repository ports.

Ports are ``typing.Protocol`` classes; adapters live under
``teampulse.infrastructure.persistence``.
"""

from teampulse.domain.repositories.refresh_token_repository import RefreshTokenRepository
from teampulse.domain.repositories.user_repository import UserRepository

__all__ = [
    "RefreshTokenRepository",
    "UserRepository",
]
