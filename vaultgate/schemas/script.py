"""Response envelopes returned by the Apps Script backend."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from vaultgate.schemas.files import VaultFile

logger = logging.getLogger(__name__)


class ScriptResponse(BaseModel):
    """Common ``{success, error?}`` envelope."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    success: bool = False
    error: str | None = None


class GetPasswordResponse(ScriptResponse):
    password: str | None = None


class ListFilesResponse(ScriptResponse):
    files: list[VaultFile] | None = None
    count: int | None = None

    @field_validator("files", mode="before")
    @classmethod
    def _drop_malformed_entries(cls, value: object) -> object:
        """Skip entries that do not parse so one bad row does not hide the rest."""
        if not isinstance(value, list):
            return value
        files: list[VaultFile] = []
        for entry in value:
            try:
                files.append(VaultFile.model_validate(entry))
            except ValidationError as exc:
                logger.warning("Skipping malformed file entry from backend: %s", exc)
        return files


class LogAccessResponse(ScriptResponse):
    message: str | None = None
    access_count: int | None = Field(default=None, alias="accessCount")
    timestamp: str | None = None


class GetAccessCountResponse(ScriptResponse):
    count: int | None = None


class BackendHealthResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    status: str
    timestamp: str | None = None
