"""Domain exceptions mapped to HTTP responses by the application module."""
from __future__ import annotations


class CatalogError(Exception):
    """Base class for errors that carry their own HTTP status."""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(CatalogError):
    status_code = 400
    default_message = "Invalid request"


class DuplicateEmail(CatalogError):
    status_code = 400
    default_message = "User with this email already exists"


class InvalidCredentials(CatalogError):
    """Unknown email and wrong password share this error and its message."""

    status_code = 401
    default_message = "Invalid email or password"


class AuthTokenInvalid(CatalogError):
    status_code = 401
    default_message = "Invalid or expired token"


class NotFound(CatalogError):
    status_code = 404
    default_message = "Not found"


class StorageConflict(CatalogError):
    """An update touched no row even though the row still exists."""

    status_code = 500
    default_message = "Record changed during update"


class ConfigurationError(CatalogError):
    """Required startup configuration is missing or invalid.

    Raised while loading settings; the process must not serve traffic.
    """

    default_message = "Invalid configuration"
