"""User entity as seen by the authentication flows.

Only the fields needed to authenticate a user and issue tokens are modelled
here. Managing users (creation, profile updates) happens elsewhere.
"""

from dataclasses import dataclass

from teampulse.domain.value_objects import Email, Role, UserId


@dataclass(frozen=True)
class User:
    """Authenticatable user.

    Attributes:
        id: Unique identifier (UUID string).
        email: Normalized login email.
        role: Role used for authorization checks.
        password_hash: Self-describing hash produced by a PasswordHasher.
    """

    id: UserId
    email: Email
    role: Role
    password_hash: str
