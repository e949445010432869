"""Vault file schemas."""

from __future__ import annotations

from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from vaultgate.services.datetime_service import normalize_file_date
from vaultgate.services.viewer_service import embed_url_for, icon_for, label_for

FileType = Literal["doc", "sheet", "slides", "pdf", "text", "video", "youtube", "file"]
_FILE_TYPES: frozenset[str] = frozenset(get_args(FileType))


class VaultFile(BaseModel):
    """One file from the backend folder listing, with viewer metadata."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    mime_type: str = Field(default="", alias="mimeType")
    web_view_link: str = Field(default="", alias="webViewLink")
    icon_link: str = Field(default="", alias="iconLink")
    created_date: str = Field(default="", alias="createdDate")
    modified_date: str = Field(default="", alias="modifiedDate")
    file_type: FileType = Field(default="file", alias="fileType")
    youtube_url: str | None = Field(default=None, alias="youtubeUrl")

    @field_validator("file_type", mode="before")
    @classmethod
    def _coerce_unknown_type(cls, value: object) -> object:
        if not isinstance(value, str) or value not in _FILE_TYPES:
            return "file"
        return value

    @field_validator("created_date", "modified_date", mode="before")
    @classmethod
    def _null_date_to_empty(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("created_date", "modified_date")
    @classmethod
    def _normalize_date(cls, value: str) -> str:
        return normalize_file_date(value)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def icon(self) -> str:
        return icon_for(self.file_type)

    @computed_field(alias="typeLabel")  # type: ignore[prop-decorator]
    @property
    def type_label(self) -> str:
        return label_for(self.file_type)

    @computed_field(alias="embedUrl")  # type: ignore[prop-decorator]
    @property
    def embed_url(self) -> str | None:
        return embed_url_for(self)
