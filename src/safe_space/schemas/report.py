"""Report-related Pydantic schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ReportCreate(BaseModel):
    """Schema for reporting a post or a comment."""

    post_id: str | None = None
    comment_id: str | None = None
    reporter_id: str | None = Field(None, description="Must match the caller when given")
    reason: str = Field(..., min_length=1)
    description: str | None = None

    model_config = ConfigDict(str_strip_whitespace=True)


class ReportResponse(BaseModel):
    """Schema for a stored report."""

    id: str
    post_id: str | None
    comment_id: str | None
    reporter_id: str
    reason: str
    description: str | None
    status: Literal["pending", "reviewed", "resolved", "dismissed"]
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
