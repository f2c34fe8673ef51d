"""User role value object.

Roles are ordered: USER < ADMIN < SUPER_ADMIN. Hierarchy questions
(``has_level_of``, ``can_perform``) compare levels; membership questions
(``AuthService.check_user_role``) compare exact values.
"""

from enum import Enum

from teampulse.domain.errors import ValidationError
from teampulse.domain.result import Err, Ok, Result


class Role(str, Enum):
    """Role of a user in TeamPulse."""

    USER = "USER"
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"

    @classmethod
    def create(cls, value: str) -> Result["Role", ValidationError]:
        """Parse a role name (case-insensitive, surrounding whitespace ignored)."""
        if isinstance(value, Role):
            return Ok(value)
        if not isinstance(value, str) or not value.strip():
            return Err(ValidationError.for_field("role", "Role is required"))

        normalized = value.strip().upper()
        try:
            return Ok(cls(normalized))
        except ValueError:
            allowed = ", ".join(role.value for role in cls)
            return Err(
                ValidationError.invalid_value(
                    "role", value, f"Invalid role: {normalized}. Must be one of: {allowed}"
                )
            )

    @property
    def level(self) -> int:
        return _ROLE_LEVELS[self]

    def has_level_of(self, other: "Role") -> bool:
        """True if this role is at least as privileged as ``other``."""
        return self.level >= other.level

    def can_perform(self, required: "Role") -> bool:
        """True if this role may perform an action requiring ``required``."""
        return self.has_level_of(required)

    def is_user(self) -> bool:
        return self is Role.USER

    def is_admin(self) -> bool:
        """ADMIN or higher."""
        return self.has_level_of(Role.ADMIN)

    def is_super_admin(self) -> bool:
        return self is Role.SUPER_ADMIN

    def __str__(self) -> str:
        return self.value


_ROLE_LEVELS = {
    Role.USER: 1,
    Role.ADMIN: 2,
    Role.SUPER_ADMIN: 3,
}
