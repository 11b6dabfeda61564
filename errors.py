"""Error taxonomy shared by the services and the response layer."""

from __future__ import annotations

import functools
from enum import Enum
from http import HTTPStatus
from typing import Any, Callable, TypeVar

F = TypeVar("F", bound=Callable[..., Any])


class ErrorKind(Enum):
    """Error categories and the HTTP status each one maps to."""

    VALIDATION = HTTPStatus.BAD_REQUEST
    AUTHENTICATION = HTTPStatus.UNAUTHORIZED
    NOT_FOUND = HTTPStatus.NOT_FOUND
    CONFLICT = HTTPStatus.CONFLICT
    INTERNAL = HTTPStatus.INTERNAL_SERVER_ERROR
    NOT_IMPLEMENTED = HTTPStatus.NOT_IMPLEMENTED

    @property
    def status(self) -> int:
        return int(self.value)


class ApiError(Exception):
    """An error that may cross the service boundary and reach the client."""

    kind = ErrorKind.INTERNAL
    operational = True

    def __init__(self, message: str, code: str, details: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<{type(self).__name__} {self.code}: {self.message}>"


class ValidationError(ApiError):
    kind = ErrorKind.VALIDATION

    def __init__(
        self,
        errors: dict[str, list[str]] | None = None,
        message: str = "Validation failed",
        code: str = "VALIDATION_ERROR",
    ) -> None:
        super().__init__(message, code, {"errors": errors} if errors else None)
        self.errors = errors or {}


class AuthenticationError(ApiError):
    kind = ErrorKind.AUTHENTICATION


class NotFoundError(ApiError):
    kind = ErrorKind.NOT_FOUND


class ConflictError(ApiError):
    kind = ErrorKind.CONFLICT


class NotImplementedApiError(ApiError):
    kind = ErrorKind.NOT_IMPLEMENTED


class InternalError(ApiError):
    kind = ErrorKind.INTERNAL
    operational = False


class HashingError(Exception):
    """Raised when a password cannot be hashed or a stored hash is malformed."""


class TokenError(Exception):
    """Base class for identity token failures."""


class TokenExpired(TokenError):
    pass


class TokenInvalid(TokenError):
    pass


class DuplicateEmailError(Exception):
    """Raised by the store when the unique email index rejects a write."""


def wrap_errors(code: str, message: str) -> Callable[[F], F]:
    """Re-wrap anything that is not an ``ApiError`` into an ``InternalError``.

    Store duplicates that slip past an explicit uniqueness check (two
    concurrent registrations, for instance) surface as ``EMAIL_EXISTS``.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except ApiError:
                raise
            except DuplicateEmailError as exc:
                raise ConflictError("Email already exists", "EMAIL_EXISTS") from exc
            except Exception as exc:
                raise InternalError(message, code) from exc

        return wrapper  # type: ignore[return-value]

    return decorator
