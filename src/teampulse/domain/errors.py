"""Application error taxonomy.

Errors are values: operations return them inside ``Err`` rather than raising
them. They still derive from ``Exception`` so they can be chained with
``__cause__`` and raised by ``unwrap`` where a failure is a programming error.

The set of variants is closed. Each one fixes a ``code``, a ``category`` (which
determines the transport status) and a default ``severity`` (which determines
the log level). Only ``InternalError`` is non-operational: its message and
metadata must never reach a client.

Every variant is built through a named constructor (``ValidationError.for_field``,
``AuthenticationError.invalid_token``...). Instances are read-only;
``with_context`` returns a copy with merged metadata.
"""

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, TypeVar

from pydantic import ValidationError as PydanticValidationError

_ErrorT = TypeVar("_ErrorT", bound="ApplicationError")


class ErrorCategory(str, Enum):
    """Semantic classification of an error; determines the transport status."""

    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    AUTHORIZATION = "authorization"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    BUSINESS_RULE = "business_rule"
    EXTERNAL = "external"
    INTERNAL = "internal"


class ErrorSeverity(str, Enum):
    """How bad an error is; determines the log level."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


def format_timestamp(value: datetime) -> str:
    """Render a datetime as ISO-8601 UTC with millisecond precision."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class ApplicationError(Exception):
    """Base of the error taxonomy.

    Attributes:
        code: Stable machine-readable error code.
        category: Semantic category (maps to a transport status).
        severity: Severity level (maps to a log level).
        timestamp: When the error was created (UTC).
        metadata: Read-only key/value context. ``metadata["field"]`` names the
            offending input when there is one.
        is_operational: True for expected failures that are safe to describe
            to the caller, False for bugs.
    """

    code: ClassVar[str]
    category: ClassVar[ErrorCategory]
    default_severity: ClassVar[ErrorSeverity] = ErrorSeverity.MEDIUM
    is_operational: ClassVar[bool] = True

    def __init__(
        self,
        message: str,
        *,
        severity: ErrorSeverity | None = None,
        metadata: Mapping[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._severity = severity or self.default_severity
        self._metadata: Mapping[str, Any] = MappingProxyType(dict(metadata or {}))
        self._timestamp = datetime.now(timezone.utc)
        if cause is not None:
            self.__cause__ = cause

    @property
    def name(self) -> str:
        return type(self).__name__

    @property
    def message(self) -> str:
        return self._message

    @property
    def severity(self) -> ErrorSeverity:
        return self._severity

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self._metadata

    @property
    def timestamp(self) -> datetime:
        return self._timestamp

    @property
    def field(self) -> str | None:
        """The offending input field, if the error is about one."""
        return self._metadata.get("field")

    def with_context(self: _ErrorT, **context: Any) -> _ErrorT:
        """Return a copy of this error with ``context`` merged into its metadata.

        The original error is left untouched.
        """
        clone = type(self).__new__(type(self))
        Exception.__init__(clone, *self.args)
        clone.__dict__.update(self.__dict__)
        clone._metadata = MappingProxyType({**self._metadata, **context})
        clone.__cause__ = self.__cause__
        return clone

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logging."""
        data: dict[str, Any] = {
            "name": self.name,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": format_timestamp(self.timestamp),
            "metadata": dict(self.metadata),
            "is_operational": self.is_operational,
        }
        if self.__cause__ is not None:
            data["cause"] = repr(self.__cause__)
        return data

    def __repr__(self) -> str:
        return f"{self.name}(code={self.code!r}, message={self._message!r}, metadata={dict(self._metadata)!r})"


class ValidationError(ApplicationError):
    """Input failed validation (400)."""

    code = "VALIDATION_ERROR"
    category = ErrorCategory.VALIDATION
    default_severity = ErrorSeverity.LOW

    @classmethod
    def create(cls, message: str, metadata: Mapping[str, Any] | None = None) -> "ValidationError":
        return cls(message, metadata=metadata)

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        """Create a validation error about a single input field."""
        return cls(message, metadata={"field": field})

    @classmethod
    def invalid_value(cls, field: str, value: Any, message: str) -> "ValidationError":
        """Create a validation error carrying the rejected value (value objects)."""
        return cls(message, metadata={"field": field, "value": value})

    @classmethod
    def from_pydantic(cls, error: PydanticValidationError, field: str | None = None) -> "ValidationError":
        """Convert a pydantic validation failure.

        The first issue provides the message; all issues are kept in metadata.
        """
        issues = error.errors(include_url=False, include_context=False, include_input=False)
        first = issues[0] if issues else None
        if field is None:
            field = ".".join(str(part) for part in first["loc"]) if first and first["loc"] else "unknown"
        message = first["msg"] if first else "Validation failed"
        return cls(message, metadata={"field": field, "errors": issues})


class AuthenticationError(ApplicationError):
    """Authentication missing or invalid (401)."""

    code = "AUTHENTICATION_ERROR"
    category = ErrorCategory.AUTHENTICATION
    default_severity = ErrorSeverity.MEDIUM

    @classmethod
    def create(cls, message: str, metadata: Mapping[str, Any] | None = None) -> "AuthenticationError":
        return cls(message, metadata=metadata)

    @classmethod
    def invalid_credentials(cls) -> "AuthenticationError":
        return cls(
            "Invalid email or password",
            metadata={"field": "credentials", "reason": "invalid_credentials"},
        )

    @classmethod
    def invalid_token(cls, field: str) -> "AuthenticationError":
        """Generic token rejection.

        The message is identical for every cause (bad signature, expiry,
        wrong issuer or audience, malformed token).
        """
        return cls("Invalid or expired token", metadata={"field": field})

    @classmethod
    def missing_token(cls) -> "AuthenticationError":
        return cls(
            "Authentication token is required",
            metadata={"field": "authorization", "reason": "missing_token"},
        )


class AuthorizationError(ApplicationError):
    """Authenticated caller lacks permission (403)."""

    code = "AUTHORIZATION_ERROR"
    category = ErrorCategory.AUTHORIZATION
    default_severity = ErrorSeverity.MEDIUM

    @classmethod
    def create(cls, message: str, metadata: Mapping[str, Any] | None = None) -> "AuthorizationError":
        return cls(message, metadata=metadata)

    @classmethod
    def insufficient_permissions(cls, required: Iterable[str], actual: str) -> "AuthorizationError":
        required = [str(role) for role in required]
        return cls(
            f"Access denied. Required role: {' or '.join(required)}",
            metadata={"required_roles": required, "user_role": str(actual)},
        )


class NotFoundError(ApplicationError):
    """Requested resource does not exist (404)."""

    code = "NOT_FOUND_ERROR"
    category = ErrorCategory.NOT_FOUND
    default_severity = ErrorSeverity.LOW

    @classmethod
    def create(cls, message: str, metadata: Mapping[str, Any] | None = None) -> "NotFoundError":
        return cls(message, metadata=metadata)

    @classmethod
    def for_resource(cls, resource: str, identifier: str) -> "NotFoundError":
        return cls(f"{resource} not found", metadata={"resource": resource, "identifier": identifier})


class ConflictError(ApplicationError):
    """Operation conflicts with current state (409)."""

    code = "CONFLICT_ERROR"
    category = ErrorCategory.CONFLICT
    default_severity = ErrorSeverity.LOW

    @classmethod
    def create(cls, message: str, metadata: Mapping[str, Any] | None = None) -> "ConflictError":
        return cls(message, metadata=metadata)

    @classmethod
    def duplicate(cls, resource: str, identifier: str) -> "ConflictError":
        return cls(
            f"{resource} already exists",
            metadata={"resource": resource, "identifier": identifier, "reason": "duplicate"},
        )


class BusinessRuleError(ApplicationError):
    """Valid request that violates a business rule (422)."""

    code = "BUSINESS_RULE_ERROR"
    category = ErrorCategory.BUSINESS_RULE
    default_severity = ErrorSeverity.MEDIUM

    @classmethod
    def create(
        cls, message: str, rule: str | None = None, metadata: Mapping[str, Any] | None = None
    ) -> "BusinessRuleError":
        merged = dict(metadata or {})
        if rule:
            merged["rule"] = rule
        return cls(message, metadata=merged)


class ExternalServiceError(ApplicationError):
    """A downstream service failed (502)."""

    code = "EXTERNAL_SERVICE_ERROR"
    category = ErrorCategory.EXTERNAL
    default_severity = ErrorSeverity.HIGH

    @classmethod
    def create(cls, service: str, message: str, cause: BaseException | None = None) -> "ExternalServiceError":
        return cls(message, metadata={"service": service}, cause=cause)

    @classmethod
    def timeout(cls, service: str) -> "ExternalServiceError":
        return cls(f"{service} request timed out", metadata={"service": service})

    @classmethod
    def unavailable(cls, service: str) -> "ExternalServiceError":
        return cls(f"{service} is currently unavailable", metadata={"service": service})


class RepositoryError(ApplicationError):
    """A persistence operation failed (500).

    Operational, but only the operation name is kept in metadata. The
    underlying exception is chained as ``__cause__`` for server-side logs.
    """

    code = "REPOSITORY_ERROR"
    category = ErrorCategory.INTERNAL
    default_severity = ErrorSeverity.HIGH

    @property
    def operation(self) -> str | None:
        return self.metadata.get("operation")

    @classmethod
    def create(
        cls, message: str, operation: str | None = None, cause: BaseException | None = None
    ) -> "RepositoryError":
        metadata = {"operation": operation} if operation else None
        return cls(message, metadata=metadata, cause=cause)

    @classmethod
    def for_operation(cls, operation: str, message: str, cause: BaseException | None = None) -> "RepositoryError":
        return cls.create(message, operation=operation, cause=cause)


class InternalError(ApplicationError):
    """Unexpected failure or bug (500). Never exposed verbatim."""

    code = "INTERNAL_ERROR"
    category = ErrorCategory.INTERNAL
    default_severity = ErrorSeverity.CRITICAL
    is_operational = False

    GENERIC_MESSAGE: ClassVar[str] = "An unexpected error occurred"

    @classmethod
    def create(
        cls,
        message: str | None = None,
        cause: BaseException | None = None,
        metadata: Mapping[str, Any] | None = None,
    ) -> "InternalError":
        return cls(message or cls.GENERIC_MESSAGE, metadata=metadata, cause=cause)

    @classmethod
    def from_exception(cls, error: BaseException) -> "InternalError":
        """Wrap a foreign exception, keeping it as the cause."""
        return cls(str(error) or cls.GENERIC_MESSAGE, cause=error)
