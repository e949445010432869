"""Login schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from vaultgate.schemas.files import VaultFile


class LoginRequest(BaseModel):
    """Login request.

    Empty fields are accepted here and rejected by the login service, so a
    missing field and a malformed email get distinct messages.
    """

    email: str = Field(default="", max_length=320)
    password: str = Field(default="", max_length=200)


class LoginResponse(BaseModel):
    """Successful login. ``error`` carries a non-fatal content warning."""

    success: bool = True
    files: list[VaultFile] = Field(default_factory=list)
    count: int | None = None
    error: str | None = None
