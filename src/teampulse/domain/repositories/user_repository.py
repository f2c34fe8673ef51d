"""User lookup port used by the authentication flows."""

from typing import Protocol

from teampulse.domain.entities import User
from teampulse.domain.errors import RepositoryError
from teampulse.domain.result import Result
from teampulse.domain.value_objects import Email, UserId


class UserRepository(Protocol):
    """Read-only access to users for login and token refresh."""

    async def find_by_email(self, email: Email) -> Result[User | None, RepositoryError]: ...

    async def find_by_id(self, user_id: UserId) -> Result[User | None, RepositoryError]: ...
