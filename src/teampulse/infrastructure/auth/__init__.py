"""Authentication adapters: password hashing and bearer credential checks."""

from teampulse.infrastructure.auth.auth_service import AuthenticatedUser, AuthService
from teampulse.infrastructure.auth.password_hasher import (
    Argon2PasswordHasher,
    BcryptPasswordHasher,
    create_password_hasher,
)

__all__ = [
    "AuthService",
    "AuthenticatedUser",
    "Argon2PasswordHasher",
    "BcryptPasswordHasher",
    "create_password_hasher",
]
