"""Framework-agnostic error handler for the transport boundary.

Turns any failure into a transport status plus a JSON-safe body, and logs it
at a level derived from its severity. Operational errors are returned as they
are; non-operational errors (bugs) are logged in full and replaced with a
generic response.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from http import HTTPStatus
from types import MappingProxyType
from typing import Any, Literal, Protocol

from pydantic import ValidationError as PydanticValidationError

from teampulse.core.logging import get_logger
from teampulse.domain.errors import (
    ApplicationError,
    ErrorCategory,
    ErrorSeverity,
    InternalError,
    ValidationError,
    format_timestamp,
)

LogLevel = Literal["info", "warning", "error"]

HTTP_STATUS_BY_CATEGORY: Mapping[ErrorCategory, HTTPStatus] = MappingProxyType(
    {
        ErrorCategory.VALIDATION: HTTPStatus.BAD_REQUEST,
        ErrorCategory.AUTHENTICATION: HTTPStatus.UNAUTHORIZED,
        ErrorCategory.AUTHORIZATION: HTTPStatus.FORBIDDEN,
        ErrorCategory.NOT_FOUND: HTTPStatus.NOT_FOUND,
        ErrorCategory.CONFLICT: HTTPStatus.CONFLICT,
        ErrorCategory.BUSINESS_RULE: HTTPStatus.UNPROCESSABLE_ENTITY,
        ErrorCategory.EXTERNAL: HTTPStatus.BAD_GATEWAY,
        ErrorCategory.INTERNAL: HTTPStatus.INTERNAL_SERVER_ERROR,
    }
)

INVALID_REQUEST_MESSAGE = "Invalid request data"
NON_OPERATIONAL_MESSAGE = "Non-operational error detected - possible programming error"


def status_for_category(category: ErrorCategory) -> int:
    """Return the HTTP status code for an error category."""
    return int(HTTP_STATUS_BY_CATEGORY[category])


def log_level_for_severity(severity: ErrorSeverity) -> LogLevel:
    match severity:
        case ErrorSeverity.LOW:
            return "info"
        case ErrorSeverity.MEDIUM:
            return "warning"
        case ErrorSeverity.HIGH | ErrorSeverity.CRITICAL:
            return "error"


class ErrorLogger(Protocol):
    """The subset of the structlog logger API the handler needs."""

    def info(self, event: str, **kw: Any) -> Any: ...

    def warning(self, event: str, **kw: Any) -> Any: ...

    def error(self, event: str, **kw: Any) -> Any: ...


@dataclass(frozen=True)
class ErrorResponse:
    """Body returned to the client."""

    name: str
    code: str
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    timestamp: str
    metadata: Mapping[str, Any] | None = None

    @classmethod
    def from_error(cls, error: ApplicationError) -> "ErrorResponse":
        """Build a response that is safe to send to the client.

        Operational errors keep their message and (non-empty) metadata.
        Non-operational errors are reduced to a generic internal error.
        """
        if not error.is_operational:
            return cls(
                name=InternalError.__name__,
                code=InternalError.code,
                message=InternalError.GENERIC_MESSAGE,
                category=ErrorCategory.INTERNAL,
                severity=error.severity,
                timestamp=format_timestamp(error.timestamp),
            )
        return cls(
            name=error.name,
            code=error.code,
            message=error.message,
            category=error.category,
            severity=error.severity,
            timestamp=format_timestamp(error.timestamp),
            metadata=dict(error.metadata) if error.metadata else None,
        )

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "name": self.name,
            "code": self.code,
            "message": self.message,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.timestamp,
        }
        if self.metadata:
            body["metadata"] = dict(self.metadata)
        return body


@dataclass(frozen=True)
class HandledError:
    """Outcome of ``ErrorHandler.handle``."""

    status_code: int
    body: ErrorResponse
    error: ApplicationError = field(repr=False, compare=False)


class ErrorHandler:
    """Maps errors to transport responses and logs them."""

    def __init__(self, logger: ErrorLogger | None = None) -> None:
        self._logger = logger or get_logger(__name__)

    def handle(self, error: object) -> HandledError:
        """Handle any error value.

        ApplicationErrors pass through, pydantic validation failures become a
        ValidationError, and everything else (exceptions, primitives, None)
        becomes an InternalError.
        """
        app_error = self.normalize(error)
        self._log(app_error)

        body = ErrorResponse.from_error(app_error)
        if app_error.is_operational:
            status_code = status_for_category(app_error.category)
        else:
            status_code = int(HTTPStatus.INTERNAL_SERVER_ERROR)
        return HandledError(status_code=status_code, body=body, error=app_error)

    @staticmethod
    def normalize(error: object) -> ApplicationError:
        if isinstance(error, ApplicationError):
            return error
        if isinstance(error, PydanticValidationError):
            issues = error.errors(include_url=False, include_context=False, include_input=False)
            return ValidationError.create(INVALID_REQUEST_MESSAGE, metadata={"issues": issues})
        if isinstance(error, BaseException):
            return InternalError.from_exception(error)
        return InternalError.create(metadata={"original_error": repr(error)})

    def _log(self, error: ApplicationError) -> None:
        context: dict[str, Any] = {
            "code": error.code,
            "category": error.category.value,
            "severity": error.severity.value,
            "is_operational": error.is_operational,
            "error_timestamp": format_timestamp(error.timestamp),
        }
        if error.metadata:
            context["metadata"] = dict(error.metadata)
        if error.__cause__ is not None:
            context["cause"] = repr(error.__cause__)

        log = getattr(self._logger, log_level_for_severity(error.severity))
        log(error.message, **context)

        if not error.is_operational:
            self._logger.error(
                NON_OPERATIONAL_MESSAGE,
                error_name=error.name,
                code=error.code,
                exc_info=error.__cause__ or error,
            )
