"""Field selectors for Google Drive v2 responses."""

from __future__ import annotations

FILE_FIELDS: str = (
    "id,"
    "title,"
    "mimeType,"
    "parents(id),"
    "labels(trashed),"
    "modifiedDate,"
    "createdDate,"
    "fileSize,"
    "md5Checksum,"
    "downloadUrl,"
    "properties(key,value)"
)

LIST_FIELDS: str = f"nextPageToken,items({FILE_FIELDS})"
