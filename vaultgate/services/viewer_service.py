"""How each file type is presented: list icon, label and embedded viewer URL."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from vaultgate.schemas.files import FileType, VaultFile

FILE_TYPE_ICONS: dict[str, str] = {
    "doc": "[DOC]",
    "sheet": "[SHEET]",
    "slides": "[SLIDES]",
    "pdf": "[PDF]",
    "text": "[TXT]",
    "video": "[VIDEO]",
    "youtube": "[YT]",
    "file": "[FILE]",
}

FILE_TYPE_LABELS: dict[str, str] = {
    "doc": "Google Doc",
    "sheet": "Google Sheet",
    "slides": "Google Slides",
    "pdf": "PDF Document",
    "text": "Text File",
    "video": "Video",
    "youtube": "YouTube Video",
    "file": "File",
}

_YOUTUBE_ID_PATTERNS = (
    re.compile(r"youtube\.com/watch\?v=([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtu\.be/([a-zA-Z0-9_-]{11})"),
    re.compile(r"youtube\.com/embed/([a-zA-Z0-9_-]{11})"),
)

_DOCS_PREVIEW_PATHS: dict[str, str] = {
    "doc": "document",
    "sheet": "spreadsheets",
    "slides": "presentation",
}

_DRIVE_PREVIEW_TYPES = frozenset({"pdf", "video"})


def icon_for(file_type: FileType | str) -> str:
    return FILE_TYPE_ICONS.get(file_type, FILE_TYPE_ICONS["file"])


def label_for(file_type: FileType | str) -> str:
    return FILE_TYPE_LABELS.get(file_type, FILE_TYPE_LABELS["file"])


def extract_youtube_id(url: str) -> str | None:
    """Extract the 11-character video id from a watch, short or embed URL."""
    for pattern in _YOUTUBE_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def embed_url_for(file: VaultFile) -> str | None:
    """Return the iframe URL for a file, or None if it must open in a new tab."""
    if file.file_type == "youtube":
        if not file.youtube_url:
            return None
        video_id = extract_youtube_id(file.youtube_url)
        return f"https://www.youtube.com/embed/{video_id}" if video_id else None

    docs_path = _DOCS_PREVIEW_PATHS.get(file.file_type)
    if docs_path is not None:
        return f"https://docs.google.com/{docs_path}/d/{file.id}/preview"

    if file.file_type in _DRIVE_PREVIEW_TYPES:
        return f"https://drive.google.com/file/d/{file.id}/preview"

    return None
