"""Internal controller exports for gdriveblobs."""

from __future__ import annotations

from .drive_controller import CHUNK_SIZE_MULTIPLE, DEFAULT_CHUNK_SIZE, GoogleDriveController

__all__ = ["CHUNK_SIZE_MULTIPLE", "DEFAULT_CHUNK_SIZE", "GoogleDriveController"]
