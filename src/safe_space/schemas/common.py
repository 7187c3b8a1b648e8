"""Shared Pydantic schemas for common API elements."""

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Acknowledgement for operations without a resource body."""

    success: bool = True
    message: str | None = None


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str


def reject_null(value: object) -> object:
    """Refuse an explicit null for a field that may only be omitted."""
    if value is None:
        raise ValueError("may not be null")
    return value
