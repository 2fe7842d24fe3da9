from .mime import (
    DEFAULT_MIME,
    FOLDER_MIME,
    guess_mime_type,
    is_download_disallowed,
    is_folder,
    is_google_app,
)
from .query import build_title_query, escape_query_value
from .time import parse_rfc3339, parse_rfc3339_or_none

__all__ = [
    "DEFAULT_MIME",
    "FOLDER_MIME",
    "guess_mime_type",
    "is_folder",
    "is_google_app",
    "is_download_disallowed",
    "escape_query_value",
    "build_title_query",
    "parse_rfc3339",
    "parse_rfc3339_or_none",
]
