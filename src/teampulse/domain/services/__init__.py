"""Domain service ports."""

from teampulse.domain.services.password_hasher import PasswordHasher

__all__ = ["PasswordHasher"]
