"""gdriveblobs public API."""

from __future__ import annotations

from gdriveblobs.auth import AuthInfo, OAuthClient
from gdriveblobs.controller import DEFAULT_CHUNK_SIZE
from gdriveblobs.errors import (
    ApiError,
    AuthError,
    ConflictError,
    GDriveBlobsError,
    HttpErrorInfo,
    InvalidArgumentError,
    NetworkError,
    NotFoundError,
    PermissionError,
    QuotaExceededError,
    RateLimitError,
    map_http_error,
)
from gdriveblobs.models import BlobInfo
from gdriveblobs.store import GoogleDriveBlobs

__all__ = [
    # High-level
    "GoogleDriveBlobs",
    "BlobInfo",
    "DEFAULT_CHUNK_SIZE",
    # Auth
    "AuthInfo",
    "OAuthClient",
    # Errors
    "GDriveBlobsError",
    "AuthError",
    "PermissionError",
    "InvalidArgumentError",
    "NotFoundError",
    "ConflictError",
    "RateLimitError",
    "QuotaExceededError",
    "NetworkError",
    "ApiError",
    "HttpErrorInfo",
    "map_http_error",
]
