"""Domain errors and their HTTP status codes.

Every failure the API reports is one of these. The application registers a
single exception handler for `SafeSpaceError` that renders `{"error": message}`
with the class's status code.
"""

from __future__ import annotations

from fastapi import status

__all__ = [
    "SafeSpaceError",
    "InvalidIdentifier",
    "InvalidInput",
    "Unauthenticated",
    "Forbidden",
    "NotFound",
    "StorageError",
    "RoleLookupError",
]


class SafeSpaceError(Exception):
    """Base class for errors surfaced to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidIdentifier(SafeSpaceError):
    """An identifier failed UUID-format validation."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"Invalid {field} format: '{value}'. Expected UUID.")
        self.field = field
        self.value = value


class InvalidInput(SafeSpaceError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class Unauthenticated(SafeSpaceError):
    """No usable credentials were presented."""

    status_code = status.HTTP_401_UNAUTHORIZED


class Forbidden(SafeSpaceError):
    """The caller is authenticated but not allowed to perform the action."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFound(SafeSpaceError):
    """A lookup by a valid identifier returned nothing."""

    status_code = status.HTTP_404_NOT_FOUND


class StorageError(SafeSpaceError):
    """The backing store rejected or failed an operation."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class RoleLookupError(StorageError):
    """The role store could not be queried (distinct from a missing role)."""

    status_code = status.HTTP_502_BAD_GATEWAY
