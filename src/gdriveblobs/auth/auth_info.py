"""Authentication information for gdriveblobs (OAuth refresh token)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping, Optional

DEFAULT_TOKEN_URI: str = "https://oauth2.googleapis.com/token"

_REQUIRED_KEYS: tuple[str, ...] = ("client_id", "client_secret", "refresh_token")


@dataclass(slots=True, frozen=True)
class AuthInfo:
    """
    Authentication information.

    Only OAuth is supported:
        kind = "oauth"
        data must include:
            - client_id
            - client_secret
            - refresh_token
        data may include:
            - token_uri (default: Google's OAuth2 token endpoint)
            - access_token (a still-valid access token, saves one refresh)
    """

    kind: str
    data: dict[str, Any]

    def __post_init__(self) -> None:
        if self.kind != "oauth":
            raise ValueError("AuthInfo.kind must be 'oauth'")

        if not isinstance(self.data, dict):
            raise TypeError("AuthInfo.data must be a dict")

        for key in _REQUIRED_KEYS:
            value = self.data.get(key)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"AuthInfo.data['{key}'] must be a non-empty string")

    @classmethod
    def from_env(
        cls,
        prefix: str = "GDRIVEBLOBS_",
        environ: Optional[Mapping[str, str]] = None,
    ) -> "AuthInfo":
        """
        Read credentials from environment variables.

        Reads ``{prefix}CLIENT_ID``, ``{prefix}CLIENT_SECRET``,
        ``{prefix}REFRESH_TOKEN`` and, optionally, ``{prefix}TOKEN_URI``.
        """
        env = os.environ if environ is None else environ
        data: dict[str, Any] = {
            key: env.get(f"{prefix}{key.upper()}", "").strip() for key in _REQUIRED_KEYS
        }
        token_uri = env.get(f"{prefix}TOKEN_URI", "").strip()
        if token_uri:
            data["token_uri"] = token_uri
        return cls(kind="oauth", data=data)

    @property
    def client_id(self) -> str:
        return str(self.data["client_id"])

    @property
    def client_secret(self) -> str:
        return str(self.data["client_secret"])

    @property
    def refresh_token(self) -> str:
        return str(self.data["refresh_token"])

    @property
    def token_uri(self) -> str:
        return str(self.data.get("token_uri") or DEFAULT_TOKEN_URI)

    @property
    def access_token(self) -> Optional[str]:
        value = self.data.get("access_token")
        return value if isinstance(value, str) and value else None
