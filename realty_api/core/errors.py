"""Error taxonomy shared by services, storage backends and routers."""

from __future__ import annotations


class ApiError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    code = "internal error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.code)
        self.message = message or self.code


class ValidationError(ApiError):
    status_code = 400
    code = "invalid request"


class AuthError(ApiError):
    """Base class for authentication-related exceptions."""

    status_code = 401
    code = "Unauthorized"


class InvalidCredentialsError(AuthError):
    code = "invalid credentials"


class TokenMissingError(AuthError):
    code = "Unauthorized"


class TokenInvalidError(AuthError):
    code = "Invalid token"


class NotFoundError(ApiError):
    status_code = 404
    code = "not found"


class StorageError(ApiError):
    """Raised by storage backends on I/O, driver or constraint failures.

    The message is for server logs only; clients always see ``code``.
    """

    status_code = 500
    code = "db"


class RateLimitedError(ApiError):
    status_code = 429
    code = "too many requests"


def public_message(exc: ApiError) -> str:
    """Text safe to return to clients."""
    if isinstance(exc, ValidationError):
        return exc.message
    return exc.code
