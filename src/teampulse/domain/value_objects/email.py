"""Email address value object."""

from dataclasses import dataclass

from pydantic import EmailStr, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from teampulse.domain.errors import ValidationError
from teampulse.domain.result import Err, Ok, Result

MAX_EMAIL_LENGTH = 255

_email_adapter = TypeAdapter(EmailStr)


@dataclass(frozen=True)
class Email:
    """A normalized (trimmed, lower-cased) email address.

    Use ``Email.create`` rather than the constructor.
    """

    value: str

    @classmethod
    def create(cls, value: str) -> Result["Email", ValidationError]:
        if not isinstance(value, str) or not value.strip():
            return Err(ValidationError.for_field("email", "Email is required"))

        normalized = value.strip().lower()
        if len(normalized) > MAX_EMAIL_LENGTH:
            return Err(
                ValidationError.invalid_value(
                    "email", value, f"Email must be at most {MAX_EMAIL_LENGTH} characters"
                )
            )

        try:
            _email_adapter.validate_python(normalized)
        except PydanticValidationError:
            return Err(ValidationError.invalid_value("email", value, "Invalid email format"))

        return Ok(cls(normalized))

    def __str__(self) -> str:
        return self.value
