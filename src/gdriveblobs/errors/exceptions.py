"""Exception hierarchy and HTTP error mapping for gdriveblobs."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional


class GDriveBlobsError(Exception):
    """
    Base exception for gdriveblobs.

    Attributes:
        details: Structured information (HTTP status, reason, blob key...).
        cause: The original exception raised by the transport, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause

    @property
    def status_code(self) -> Optional[int]:
        """HTTP status of the failed request, when there was one."""
        value = self.details.get("status_code")
        return value if isinstance(value, int) else None


class AuthError(GDriveBlobsError):
    """Raised when the access token is rejected (HTTP 401) or cannot be refreshed."""


class PermissionError(GDriveBlobsError):
    """Raised when access is denied (HTTP 403 non-quota)."""


class InvalidArgumentError(GDriveBlobsError):
    """Raised for bad arguments, locally or as reported by Drive (HTTP 400)."""


class NotFoundError(GDriveBlobsError):
    """Raised when a blob or Drive file does not exist (HTTP 404)."""


class ConflictError(GDriveBlobsError):
    """Raised on HTTP 409/412."""


class RateLimitError(GDriveBlobsError):
    """Raised when rate-limited (HTTP 429)."""


class QuotaExceededError(GDriveBlobsError):
    """Raised when a usage or storage quota is exceeded (HTTP 403 with quota reason)."""


class NetworkError(GDriveBlobsError):
    """Raised when the request could not reach Drive (socket errors, timeouts)."""


class ApiError(GDriveBlobsError):
    """Raised for everything else (5xx, unknown 4xx, malformed responses)."""


@dataclass(frozen=True)
class HttpErrorInfo:
    """Status line and decoded error payload of a failed Drive request."""

    status_code: int
    reason: str | None = None
    message: str | None = None
    details: dict[str, Any] | None = None

    @classmethod
    def from_response(
        cls,
        status_code: int,
        content: bytes | str | None,
        *,
        reason: str | None = None,
    ) -> "HttpErrorInfo":
        """
        Build from a raw response body.

        Drive error bodies look like
        ``{"error": {"message": ..., "errors": [{"domain": ..., "reason": ...}]}}``.
        Bodies that are not JSON are ignored.
        """
        message = None
        details: dict[str, Any] = {}

        if isinstance(content, (bytes, bytearray)):
            content = content.decode("utf-8", errors="replace")

        payload: Any = None
        if content:
            try:
                payload = json.loads(content)
            except ValueError:
                payload = None

        if isinstance(payload, dict) and isinstance(payload.get("error"), dict):
            err = payload["error"]
            message = err.get("message") or None
            errors = err.get("errors") or []
            if isinstance(errors, list) and errors and isinstance(errors[0], dict):
                details["domain"] = errors[0].get("domain")
                details["reason_detail"] = errors[0].get("reason")
                if isinstance(errors[0].get("reason"), str):
                    reason = errors[0]["reason"]

        return cls(
            status_code=status_code,
            reason=reason,
            message=message,
            details=details or None,
        )


_QUOTA_REASON_KEYWORDS: tuple[str, ...] = (
    "quota",
    "rateLimitExceeded",
    "userRateLimitExceeded",
    "dailyLimitExceeded",
    "usageLimits",
    "storageQuotaExceeded",
)


def _is_quota_reason(reason: str | None) -> bool:
    if not reason:
        return False
    lowered = reason.lower()
    return any(key.lower() in lowered for key in _QUOTA_REASON_KEYWORDS)


def map_http_error(
    info: HttpErrorInfo,
    *,
    cause: Optional[BaseException] = None,
) -> GDriveBlobsError:
    """
    Map an HTTP error to a gdriveblobs exception.

        - 400 -> InvalidArgumentError
        - 401 -> AuthError
        - 403 -> QuotaExceededError if the reason is quota-related,
                 PermissionError otherwise
        - 404 -> NotFoundError
        - 409/412 -> ConflictError
        - 429 -> RateLimitError
        - anything else -> ApiError
    """
    details: dict[str, Any] = {
        "status_code": info.status_code,
        "reason": info.reason,
    }
    if info.details:
        details.update(info.details)

    message = info.message or f"HTTP error {info.status_code}"

    if info.status_code == 400:
        return InvalidArgumentError(message, details=details, cause=cause)
    if info.status_code == 401:
        return AuthError(message, details=details, cause=cause)
    if info.status_code == 403:
        if _is_quota_reason(info.reason):
            return QuotaExceededError(message, details=details, cause=cause)
        return PermissionError(message, details=details, cause=cause)
    if info.status_code == 404:
        return NotFoundError(message, details=details, cause=cause)
    if info.status_code in (409, 412):
        return ConflictError(message, details=details, cause=cause)
    if info.status_code == 429:
        return RateLimitError(message, details=details, cause=cause)

    return ApiError(message, details=details, cause=cause)
