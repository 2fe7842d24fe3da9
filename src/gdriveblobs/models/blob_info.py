"""Data model for stored blobs."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(slots=True)
class BlobInfo:
    """
    Metadata of a blob (or folder) stored on Drive.

    Notes:
        - ``title`` is the filename; blobs are looked up by it.
        - ``key`` is the content key: the MD5 checksum Drive computed for the
          uploaded media, also stored on the file as the custom property
          ``key``. Folders have no key.
    """

    file_id: str
    title: str
    mime_type: str
    parents: list[str] = field(default_factory=list)

    key: Optional[str] = None
    size: Optional[int] = None
    md5_checksum: Optional[str] = None
    download_url: Optional[str] = None
    trashed: bool = False
    modified_time: Optional[datetime] = None
    created_time: Optional[datetime] = None
    properties: dict[str, str] = field(default_factory=dict)
