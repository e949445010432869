"""Access-log schemas."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LogAccessRequest(BaseModel):
    """Record that an email opened a file."""

    model_config = ConfigDict(populate_by_name=True)

    email: str = Field(default="", max_length=320)
    file_name: str = Field(default="", alias="fileName", max_length=500)


class LogAccessResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    access_count: int | None = Field(default=None, alias="accessCount")
    timestamp: str | None = None
