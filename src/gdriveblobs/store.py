"""GoogleDriveBlobs: blob storage semantics on top of Google Drive."""

from __future__ import annotations

import contextlib
import io
import logging
import shutil
import tempfile
from typing import Any, BinaryIO, Iterator, Optional, Sequence, Union

from gdriveblobs.auth import AuthInfo
from gdriveblobs.controller import (
    CHUNK_SIZE_MULTIPLE,
    DEFAULT_CHUNK_SIZE,
    GoogleDriveController,
)
from gdriveblobs.errors import ApiError, InvalidArgumentError, NotFoundError
from gdriveblobs.models import BlobInfo
from gdriveblobs.util.mime import guess_mime_type, is_download_disallowed

logger = logging.getLogger(__name__)

BlobData = Union[bytes, bytearray, memoryview, BinaryIO]

KEY_PROPERTY: str = "key"


class GoogleDriveBlobs:
    """
    Blob store addressed by filename.

    Each blob is a Drive file whose title is the blob key. Lookups match the
    title exactly, skip trashed files and, when the store has a default
    ``parent_id``, only look inside that folder.
    """

    def __init__(
        self,
        auth_info: AuthInfo,
        *,
        parent_id: Optional[str] = None,
        scopes: Optional[Sequence[str]] = None,
        supports_all_drives: bool = True,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        _validate_chunk_size(chunk_size)
        self._controller = GoogleDriveController(
            auth_info,
            scopes=scopes,
            supports_all_drives=supports_all_drives,
        )
        self._parent_id = parent_id
        self._chunk_size = chunk_size

    @classmethod
    def from_controller(
        cls,
        controller: GoogleDriveController,
        *,
        parent_id: Optional[str] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> "GoogleDriveBlobs":
        """Create a store with an injected controller (useful for tests)."""
        _validate_chunk_size(chunk_size)
        obj = cls.__new__(cls)
        obj._controller = controller
        obj._parent_id = parent_id
        obj._chunk_size = chunk_size
        return obj

    @property
    def parent_id(self) -> Optional[str]:
        """Default folder for new blobs and lookups (None: whole Drive)."""
        return self._parent_id

    def write(
        self,
        key: str,
        data: BlobData,
        *,
        parent_id: Optional[str] = None,
        mime_type: Optional[str] = None,
    ) -> BlobInfo:
        """
        Upload ``data`` as a new blob titled ``key``.

        Args:
            key: Blob key (filename). Also used to guess the MIME type.
            data: Bytes or a readable binary stream. Streams are uploaded
                from their current position; non-seekable ones are spooled to
                a temporary file first.
            parent_id: Folder to create the blob in (default: the store's).
            mime_type: Overrides the guessed MIME type.

        Returns:
            Metadata of the new file; ``key`` holds its MD5 checksum.

        Raises:
            InvalidArgumentError: on an empty key or unsupported data.
            AuthError: if the access token cannot be refreshed.
        """
        _validate_key(key, "key")
        use_parent = parent_id if parent_id is not None else self._parent_id
        use_mime = mime_type or guess_mime_type(key)

        _validate_data(data)

        # Uploads always start from a freshly refreshed token, before any
        # byte of a caller stream is consumed.
        self._controller.refresh_credentials()

        logger.debug("Writing blob %r (%s) into %s", key, use_mime, use_parent or "root")
        with _seekable_stream(data, self._chunk_size) as stream:
            info = self._controller.upload(
                stream,
                key,
                mime_type=use_mime,
                parent_id=use_parent,
                chunk_size=self._chunk_size,
            )

        if not info.md5_checksum:
            raise ApiError(
                "Drive did not return a checksum for the uploaded blob",
                details={"key": key, "file_id": info.file_id},
            )

        self.add_property(info.file_id, KEY_PROPERTY, info.md5_checksum)
        info.key = info.md5_checksum
        info.properties[KEY_PROPERTY] = info.md5_checksum

        logger.info("Wrote blob %r (file_id=%s, size=%s)", key, info.file_id, info.size)
        return info

    def get(self, key: str) -> Optional[BlobInfo]:
        """Return metadata of the first blob titled ``key``, or None."""
        _validate_key(key, "key")
        matches = self._controller.find_by_title(key, parent_id=self._parent_id)
        if len(matches) > 1:
            logger.debug("Blob key %r matches %d files; using the first", key, len(matches))
        return matches[0] if matches else None

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def read(self, key: str) -> bytes:
        """Return the whole content of blob ``key``."""
        buffer = io.BytesIO()
        self.read_into(key, buffer)
        return buffer.getvalue()

    def read_into(self, key: str, fd: BinaryIO) -> BlobInfo:
        """
        Stream the content of blob ``key`` into the writable binary ``fd``.

        Returns:
            Metadata of the blob that was read.

        Raises:
            NotFoundError: if no blob is titled ``key``.
            InvalidArgumentError: if the key names a folder or a Google-apps file.
        """
        info = self._require_readable(key)
        self._controller.download(info.file_id, fd, chunk_size=self._chunk_size)
        return info

    def iter_read(self, key: str) -> Iterator[bytes]:
        """
        Return an iterator over the content of blob ``key``.

        The lookup happens immediately; chunks are downloaded lazily.
        """
        info = self._require_readable(key)
        return self._controller.iter_download(info.file_id, chunk_size=self._chunk_size)

    def remove(self, key: str) -> None:
        """Permanently delete blob ``key``. Raises NotFoundError if missing."""
        info = self._require(key)
        self._controller.delete_permanently(info.file_id)
        logger.info("Removed blob %r (file_id=%s)", key, info.file_id)

    def mkdir(self, name: str, *, parent_id: Optional[str] = None) -> BlobInfo:
        """Create a folder titled ``name``."""
        _validate_key(name, "name")
        use_parent = parent_id if parent_id is not None else self._parent_id
        info = self._controller.create_folder(name, use_parent)
        logger.info("Created folder %r (file_id=%s)", name, info.file_id)
        return info

    def add_property(
        self,
        file_id: str,
        key: str,
        value: str,
        *,
        visibility: str = "PRIVATE",
    ) -> dict[str, Any]:
        """Attach a custom property to a Drive file."""
        _validate_key(file_id, "file_id")
        _validate_key(key, "property key")
        return self._controller.insert_property(file_id, key, value, visibility=visibility)

    def refresh_token(self) -> str:
        """Force an access token refresh. Returns the new access token."""
        return self._controller.refresh_credentials()

    # ----------------------------
    # Internals
    # ----------------------------
    def _require(self, key: str) -> BlobInfo:
        info = self.get(key)
        if info is None:
            raise NotFoundError("Blob not found", details={"key": key})
        return info

    def _require_readable(self, key: str) -> BlobInfo:
        info = self._require(key)
        if is_download_disallowed(info.mime_type):
            raise InvalidArgumentError(
                "Blob has no downloadable content",
                details={"key": key, "mime_type": info.mime_type},
            )
        return info


def _validate_key(value: Any, what: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidArgumentError(f"{what} must be a non-empty string")


def _validate_chunk_size(chunk_size: int) -> None:
    if (
        not isinstance(chunk_size, int)
        or chunk_size <= 0
        or chunk_size % CHUNK_SIZE_MULTIPLE
    ):
        raise InvalidArgumentError(
            f"chunk_size must be a positive multiple of {CHUNK_SIZE_MULTIPLE} bytes",
            details={"chunk_size": chunk_size},
        )


def _validate_data(data: Any) -> None:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return
    if isinstance(data, str) or not hasattr(data, "read"):
        raise InvalidArgumentError(
            "data must be bytes or a binary stream",
            details={"type": type(data).__name__},
        )


@contextlib.contextmanager
def _seekable_stream(data: BlobData, spool_size: int) -> Iterator[BinaryIO]:
    """
    Yield ``data`` as a stream whose content starts at offset 0.

    Caller-owned seekable streams positioned at 0 are yielded as-is and left
    open; anything else is copied from its current position into a spool.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        yield io.BytesIO(bytes(data))
        return

    seekable = getattr(data, "seekable", None)
    if callable(seekable) and seekable() and data.tell() == 0:
        yield data
        return

    with tempfile.SpooledTemporaryFile(max_size=spool_size) as spool:
        shutil.copyfileobj(data, spool)
        spool.seek(0)
        yield spool
