"""Result type for explicit success/failure handling.

Every operation in the credential core returns either ``Ok(value)`` or
``Err(error)`` instead of raising for expected failures. Both variants are
immutable and support structural pattern matching:

    match token_factory.verify_access_token(token):
        case Ok(payload):
            ...
        case Err(error):
            ...
"""

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
E = TypeVar("E", bound=BaseException)


@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    """Successful result carrying a value."""

    value: T

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    """Failed result carrying an error."""

    error: E

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True


Result = Union[Ok[T], Err[E]]


def unwrap(result: "Result[T, E]") -> T:
    """Return the value of an Ok result or raise the carried error.

    Only use this where an Err is a programming error (tests, startup code).
    """
    if isinstance(result, Err):
        raise result.error
    return result.value


def unwrap_or(result: "Result[T, E]", default: T) -> T:
    """Return the value of an Ok result, or ``default`` for an Err."""
    if isinstance(result, Err):
        return default
    return result.value


def map_ok(result: "Result[T, E]", fn: Callable[[T], U]) -> "Result[U, E]":
    """Apply ``fn`` to the value of an Ok result; pass an Err through."""
    if isinstance(result, Err):
        return result
    return Ok(fn(result.value))


def and_then(result: "Result[T, E]", fn: Callable[[T], "Result[U, E]"]) -> "Result[U, E]":
    """Chain a Result-returning operation onto an Ok result."""
    if isinstance(result, Err):
        return result
    return fn(result.value)


def collect(results: Iterable["Result[T, E]"]) -> "Result[list[T], E]":
    """Turn a sequence of results into a result of a list.

    The first Err encountered is returned; otherwise all values are collected
    in order.
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)


def combine(results: Mapping[str, "Result[Any, E]"]) -> "Result[dict[str, Any], E]":
    """Turn a mapping of results into a result of a dict keyed the same way.

    The first Err in iteration order is returned.
    """
    values: dict[str, Any] = {}
    for key, result in results.items():
        if isinstance(result, Err):
            return result
        values[key] = result.value
    return Ok(values)
