from __future__ import annotations

import mimetypes
from typing import Optional

FOLDER_MIME: str = "application/vnd.google-apps.folder"
DEFAULT_MIME: str = "application/octet-stream"

GOOGLE_APP_PREFIX: str = "application/vnd.google-apps."


def guess_mime_type(filename: Optional[str]) -> str:
    """
    Guess the MIME type of a blob from its filename.

    Unknown or missing extensions fall back to ``application/octet-stream``.
    """
    if not filename:
        return DEFAULT_MIME
    mime_type, _ = mimetypes.guess_type(filename, strict=False)
    return mime_type or DEFAULT_MIME


def is_folder(mime_type: str) -> bool:
    return mime_type == FOLDER_MIME


def is_google_app(mime_type: str) -> bool:
    """Google Docs/Sheets/Slides etc. have no binary media to download."""
    return mime_type.startswith(GOOGLE_APP_PREFIX)


def is_download_disallowed(mime_type: str) -> bool:
    return is_folder(mime_type) or is_google_app(mime_type)
