"""Public model exports for gdriveblobs."""

from __future__ import annotations

from .blob_info import BlobInfo

__all__ = ["BlobInfo"]
