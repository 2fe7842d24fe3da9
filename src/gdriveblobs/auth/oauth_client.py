"""OAuth client utilities for gdriveblobs."""

from __future__ import annotations

import logging
from typing import Optional, Sequence

from gdriveblobs.errors import AuthError, InvalidArgumentError

from .auth_info import AuthInfo

logger = logging.getLogger(__name__)


def _validate_scopes(scopes: Sequence[str]) -> list[str]:
    if not scopes or not all(isinstance(s, str) and s.strip() for s in scopes):
        raise InvalidArgumentError("scopes must be a non-empty sequence of strings")
    return list(scopes)


class OAuthClient:
    """Create and refresh OAuth credentials and build Drive API service objects."""

    def __init__(self, auth_info: AuthInfo) -> None:
        if auth_info.kind != "oauth":
            raise InvalidArgumentError("OAuthClient requires AuthInfo(kind='oauth')")
        self._auth_info = auth_info

    def get_credentials(self, scopes: Sequence[str], ensure_valid: bool = True):
        """
        Return OAuth credentials for the given scopes.

        The credentials start from the configured refresh token (and access
        token, if one was supplied).

        Args:
            scopes: OAuth scopes.
            ensure_valid: If True, refresh when there is no valid access token.

        Returns:
            google.oauth2.credentials.Credentials

        Raises:
            AuthError: on refresh failures.
            InvalidArgumentError: if scopes is invalid.
        """
        use_scopes = _validate_scopes(scopes)

        from google.oauth2.credentials import Credentials

        info = self._auth_info
        creds = Credentials(
            token=info.access_token,
            refresh_token=info.refresh_token,
            token_uri=info.token_uri,
            client_id=info.client_id,
            client_secret=info.client_secret,
            scopes=use_scopes,
        )

        if ensure_valid and not creds.valid:
            self.refresh(creds)
        return creds

    def refresh(self, creds) -> str:
        """
        Exchange the refresh token for a new access token (mutates ``creds``).

        Returns:
            The new access token.

        Raises:
            AuthError: if the token endpoint rejects the request or is unreachable.
        """
        from google.auth.exceptions import GoogleAuthError
        from google.auth.transport.requests import Request

        try:
            creds.refresh(Request())
        except GoogleAuthError as exc:
            raise AuthError(
                "Failed to refresh OAuth access token",
                details={"token_uri": self._auth_info.token_uri},
                cause=exc,
            ) from exc

        logger.debug("Refreshed access token (expires %s)", creds.expiry)
        return creds.token

    def build_drive_service(self, creds, *, timeout: Optional[float] = 60):
        """
        Build a Drive v2 API service resource bound to ``creds``.

        The transport does not refresh on 401 by itself; the controller
        refreshes and retries instead.

        Returns:
            googleapiclient.discovery.Resource
        """
        import google_auth_httplib2
        import httplib2
        from googleapiclient.discovery import build

        http = google_auth_httplib2.AuthorizedHttp(
            creds,
            http=httplib2.Http(timeout=timeout),
            refresh_status_codes=(),
        )
        try:
            return build("drive", "v2", http=http, cache_discovery=False)
        except Exception as exc:
            raise AuthError("Failed to build Drive service", cause=exc) from exc

    @staticmethod
    def authorize(
        client_id: str,
        client_secret: str,
        scopes: Sequence[str],
        *,
        port: int = 0,
    ) -> AuthInfo:
        """
        Run the installed-app consent flow once and return an AuthInfo.

        The returned AuthInfo carries the refresh token Google issued; store
        it and pass it to GoogleDriveBlobs from then on.

        Raises:
            AuthError: if the flow fails or Google does not issue a refresh token.
        """
        use_scopes = _validate_scopes(scopes)

        from google_auth_oauthlib.flow import InstalledAppFlow

        client_config = {
            "installed": {
                "client_id": client_id,
                "client_secret": client_secret,
                "auth_uri": "https://accounts.google.com/o/oauth2/auth",
                "token_uri": "https://oauth2.googleapis.com/token",
                "redirect_uris": ["http://localhost"],
            }
        }
        try:
            flow = InstalledAppFlow.from_client_config(client_config, scopes=use_scopes)
            creds = flow.run_local_server(port=port, access_type="offline", prompt="consent")
        except Exception as exc:
            raise AuthError("OAuth authorization flow failed", cause=exc) from exc

        if not creds.refresh_token:
            raise AuthError("Authorization did not return a refresh token")

        return AuthInfo(
            kind="oauth",
            data={
                "client_id": client_id,
                "client_secret": client_secret,
                "refresh_token": creds.refresh_token,
                "token_uri": creds.token_uri,
                "access_token": creds.token,
            },
        )
