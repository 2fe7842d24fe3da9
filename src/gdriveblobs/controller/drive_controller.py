"""Google Drive v2 API controller (internal use only)."""

from __future__ import annotations

import io
import logging
from typing import Any, BinaryIO, Callable, Iterator, Optional, Sequence, TypeVar

from gdriveblobs.auth import AuthInfo, OAuthClient
from gdriveblobs.errors import (
    ApiError,
    AuthError,
    GDriveBlobsError,
    HttpErrorInfo,
    NetworkError,
    map_http_error,
)
from gdriveblobs.models import BlobInfo
from gdriveblobs.util.mime import FOLDER_MIME
from gdriveblobs.util.query import build_title_query
from gdriveblobs.util.time import parse_rfc3339_or_none

from .fields import FILE_FIELDS, LIST_FIELDS

T = TypeVar("T")

logger = logging.getLogger(__name__)

# Non-final resumable chunks must be a multiple of this.
CHUNK_SIZE_MULTIPLE: int = 256 * 1024
DEFAULT_CHUNK_SIZE: int = 32 * CHUNK_SIZE_MULTIPLE


class GoogleDriveController:
    """
    Drive v2 API controller (internal only).

    Notes:
        - Every call goes through `_execute`, which maps transport errors to
          gdriveblobs exceptions and, on an auth failure, refreshes the access
          token once and retries the call once.
        - `supports_all_drives` is applied to all file requests consistently.
    """

    DEFAULT_SCOPES: tuple[str, ...] = ("https://www.googleapis.com/auth/drive",)

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
    ) -> None:
        self._supports_all_drives = supports_all_drives

        use_scopes = list(scopes) if scopes is not None else list(self.DEFAULT_SCOPES)
        client = OAuthClient(auth_info)
        credentials = client.get_credentials(use_scopes, ensure_valid=True)
        self._service = client.build_drive_service(credentials)
        self._token_refresher: Optional[Callable[[], str]] = (
            lambda: client.refresh(credentials)
        )

    @classmethod
    def from_service(
        cls,
        service: Any,
        *,
        token_refresher: Optional[Callable[[], str]] = None,
        supports_all_drives: bool = True,
    ) -> "GoogleDriveController":
        """Create controller from a pre-built Drive service (useful for tests)."""
        obj = cls.__new__(cls)
        obj._supports_all_drives = supports_all_drives
        obj._service = service
        obj._token_refresher = token_refresher
        return obj

    # ----------------------------
    # Public API
    # ----------------------------
    def refresh_credentials(self) -> str:
        """Force an access token refresh. Returns the new token."""
        if self._token_refresher is None:
            raise AuthError("No OAuth credentials to refresh")
        return self._token_refresher()

    def get(self, file_id: str) -> BlobInfo:
        req = self._service.files().get(
            fileId=file_id,
            fields=FILE_FIELDS,
            **self._common_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_blob_info(data)

    def find_by_title(
        self,
        title: str,
        *,
        parent_id: Optional[str] = None,
        include_trashed: bool = False,
    ) -> list[BlobInfo]:
        q = build_title_query(title, parent_id=parent_id, include_trashed=include_trashed)
        return self._find_by_query(q)

    def create_folder(self, name: str, parent_id: Optional[str] = None) -> BlobInfo:
        body = _file_body(name, FOLDER_MIME, parent_id)
        req = self._service.files().insert(
            body=body,
            fields=FILE_FIELDS,
            **self._common_kwargs(),
        )
        data = self._execute(req.execute)
        return _file_dict_to_blob_info(data)

    def upload(
        self,
        stream: BinaryIO,
        title: str,
        *,
        mime_type: str,
        parent_id: Optional[str] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> BlobInfo:
        """
        Upload ``stream`` as a new file through a resumable session.

        The first ``next_chunk`` call posts the metadata with
        ``uploadType=resumable`` and receives the session URI; the following
        calls PUT the media in ``chunk_size`` pieces until Drive answers with
        the created file resource. ``stream`` must be seekable and is sent
        from offset 0; ``chunk_size`` must be a multiple of CHUNK_SIZE_MULTIPLE.
        """
        from googleapiclient.http import MediaIoBaseUpload

        media = MediaIoBaseUpload(
            stream,
            mimetype=mime_type,
            chunksize=chunk_size,
            resumable=True,
        )
        req = self._service.files().insert(
            body=_file_body(title, mime_type, parent_id),
            media_body=media,
            fields=FILE_FIELDS,
            **self._common_kwargs(),
        )

        response: Optional[dict[str, Any]] = None
        while response is None:
            status, response = self._execute(req.next_chunk)
            if status is not None:
                logger.debug("Uploading %r: %d%%", title, int(status.progress() * 100))

        return _file_dict_to_blob_info(response)

    def insert_property(
        self,
        file_id: str,
        key: str,
        value: str,
        *,
        visibility: str = "PRIVATE",
    ) -> dict[str, Any]:
        body = {
            "kind": "drive#property",
            "key": key,
            "value": value,
            "visibility": visibility,
        }
        req = self._service.properties().insert(fileId=file_id, body=body)
        return self._execute(req.execute)

    def delete_permanently(self, file_id: str) -> None:
        req = self._service.files().delete(
            fileId=file_id,
            **self._common_kwargs(),
        )
        self._execute(req.execute)

    def download(
        self,
        file_id: str,
        fd: BinaryIO,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Stream the media of ``file_id`` into the writable binary ``fd``."""
        from googleapiclient.http import MediaIoBaseDownload

        req = self._service.files().get_media(
            fileId=file_id,
            **self._common_kwargs(),
        )
        downloader = MediaIoBaseDownload(fd, req, chunksize=chunk_size)
        done = False
        while not done:
            _, done = self._execute(downloader.next_chunk)

    def iter_download(
        self,
        file_id: str,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> Iterator[bytes]:
        """Yield the media of ``file_id`` one chunk at a time."""
        from googleapiclient.http import MediaIoBaseDownload

        req = self._service.files().get_media(
            fileId=file_id,
            **self._common_kwargs(),
        )
        buffer = io.BytesIO()
        downloader = MediaIoBaseDownload(buffer, req, chunksize=chunk_size)
        done = False
        while not done:
            _, done = self._execute(downloader.next_chunk)
            chunk = buffer.getvalue()
            buffer.seek(0)
            buffer.truncate()
            if chunk:
                yield chunk

    # ----------------------------
    # Internals
    # ----------------------------
    def _common_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True}

    def _common_list_kwargs(self) -> dict[str, Any]:
        if not self._supports_all_drives:
            return {}
        return {"supportsAllDrives": True, "includeItemsFromAllDrives": True}

    def _find_by_query(self, q: str) -> list[BlobInfo]:
        all_files: list[BlobInfo] = []
        page_token: Optional[str] = None

        while True:
            req = self._service.files().list(
                q=q,
                fields=LIST_FIELDS,
                pageToken=page_token,
                **self._common_list_kwargs(),
            )
            data = self._execute(req.execute)
            for item in data.get("items", []):
                all_files.append(_file_dict_to_blob_info(item))

            page_token = data.get("nextPageToken")
            if not page_token:
                break

        logger.debug("Query %r matched %d file(s)", q, len(all_files))
        return all_files

    def _execute(self, func: Callable[[], T]) -> T:
        """Run one request; on AuthError refresh the token and retry once."""
        try:
            return self._call(func)
        except AuthError as exc:
            if self._token_refresher is None:
                raise
            logger.warning(
                "Drive rejected the access token (%s); refreshing and retrying once",
                exc,
            )
        self.refresh_credentials()
        return self._call(func)

    def _call(self, func: Callable[[], T]) -> T:
        try:
            return func()
        except GDriveBlobsError:
            raise
        except Exception as exc:
            raise self._map_exception(exc) from exc

    def _map_exception(self, exc: Exception) -> GDriveBlobsError:
        import httplib2
        from google.auth.exceptions import RefreshError
        from googleapiclient.errors import HttpError

        if isinstance(exc, HttpError):
            info = _http_error_to_info(exc)
            return map_http_error(info, cause=exc)

        if isinstance(exc, RefreshError):
            return AuthError("Failed to refresh OAuth access token", cause=exc)

        if isinstance(exc, (OSError, TimeoutError, httplib2.HttpLib2Error)):
            return NetworkError("Network error", cause=exc)

        return ApiError("Drive API error", cause=exc)


def _file_body(title: str, mime_type: str, parent_id: Optional[str]) -> dict[str, Any]:
    body: dict[str, Any] = {"title": title, "mimeType": mime_type}
    if parent_id:
        body["parents"] = [{"kind": "drive#fileLink", "id": parent_id}]
    return body


def _file_dict_to_blob_info(data: dict[str, Any]) -> BlobInfo:
    file_id = data.get("id")
    title = data.get("title", "")
    mime_type = data.get("mimeType", "")

    parents: list[str] = []
    for parent in data.get("parents") or []:
        if isinstance(parent, dict) and isinstance(parent.get("id"), str):
            parents.append(parent["id"])

    labels = data.get("labels") or {}
    trashed = bool(labels.get("trashed", False)) if isinstance(labels, dict) else False

    size = None
    file_size = data.get("fileSize")
    if isinstance(file_size, str) and file_size.isdigit():
        size = int(file_size)
    elif isinstance(file_size, int):
        size = file_size

    properties: dict[str, str] = {}
    for prop in data.get("properties") or []:
        if isinstance(prop, dict) and isinstance(prop.get("key"), str):
            properties[prop["key"]] = str(prop.get("value", ""))

    md5 = data.get("md5Checksum")
    md5_checksum = md5 if isinstance(md5, str) else None
    download_url = data.get("downloadUrl")

    return BlobInfo(
        file_id=file_id if isinstance(file_id, str) else "",
        title=title if isinstance(title, str) else "",
        mime_type=mime_type if isinstance(mime_type, str) else "",
        parents=parents,
        key=properties.get("key", md5_checksum),
        size=size,
        md5_checksum=md5_checksum,
        download_url=download_url if isinstance(download_url, str) else None,
        trashed=trashed,
        modified_time=parse_rfc3339_or_none(data.get("modifiedDate")),
        created_time=parse_rfc3339_or_none(data.get("createdDate")),
        properties=properties,
    )


def _http_error_to_info(exc: Any) -> HttpErrorInfo:
    resp = getattr(exc, "resp", None)
    status_code = getattr(resp, "status", None)
    reason = getattr(resp, "reason", None)

    if not isinstance(status_code, int):
        status_code = 0

    return HttpErrorInfo.from_response(
        status_code,
        getattr(exc, "content", None),
        reason=reason if isinstance(reason, str) else None,
    )
