"""
Original document storage for uploaded resumes.

Two backends share one interface:
- GridFSDocumentStorage: durable storage in a MongoDB GridFS bucket
- LocalDocumentStorage: in-process storage for development and tests,
  lost when the process exits

Documents are addressed by keys of the form
``resumes/<owner>/<ms-timestamp>-<sanitized filename>``.
"""

import re
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from gridfs.errors import NoFile
from pymongo.errors import PyMongoError

from resume_pipeline.data.database import DatabaseManager
from resume_pipeline.errors import (
    DocumentNotFoundError,
    InvalidDocumentUrlError,
    StorageUnavailableError,
)
from resume_pipeline.utils.config import AppSettings, get_settings
from resume_pipeline.utils.constants import AuditAction, DEFAULT_OWNER_KEY
from resume_pipeline.utils.logger import audit_log, get_logger

logger = get_logger(__name__)

LOCAL_URL_SCHEME = "local://"
GRIDFS_URL_SCHEME = "gridfs://"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.-]")


def generate_document_key(
    owner_key: Optional[str],
    filename: str,
    timestamp_ms: Optional[int] = None,
) -> str:
    """
    Build a unique storage key for a document.

    Characters outside ``[a-zA-Z0-9.-]`` in the filename become underscores.
    """
    owner = owner_key or DEFAULT_OWNER_KEY
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    safe_name = _UNSAFE_FILENAME_CHARS.sub("_", filename)
    return f"resumes/{owner}/{timestamp_ms}-{safe_name}"


class DocumentStorage(ABC):
    """Interface for storing and retrieving original resume documents."""

    @abstractmethod
    async def put(
        self,
        content: bytes,
        media_type: str,
        owner_key: Optional[str],
        filename: str,
    ) -> str:
        """
        Store a document.

        Returns:
            URL that ``extract_key_from_url`` maps back to the storage key

        Raises:
            StorageError: The document could not be stored
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """
        Fetch a stored document.

        Raises:
            DocumentNotFoundError: No document is stored under the key
            StorageUnavailableError: The backend could not be reached
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a stored document. Deleting a missing key is not an error."""
        pass

    @abstractmethod
    def url_for(self, key: str) -> str:
        """URL for a storage key."""
        pass

    @abstractmethod
    def extract_key_from_url(self, url: str) -> str:
        """
        Storage key for a URL returned by ``put``.

        Raises:
            InvalidDocumentUrlError: The URL does not belong to this storage
        """
        pass


class LocalDocumentStorage(DocumentStorage):
    """
    Non-durable in-process storage.

    Used when no database credentials are configured. Documents live in a
    dict for the lifetime of the process and are lost on restart. Nothing
    is evicted: only ``delete`` frees memory, and every parse or reparse
    that stores the upload adds another copy under a new key.
    """

    def __init__(self) -> None:
        self._documents: dict[str, tuple[bytes, str]] = {}

    def __len__(self) -> int:
        return len(self._documents)

    async def put(
        self,
        content: bytes,
        media_type: str,
        owner_key: Optional[str],
        filename: str,
    ) -> str:
        key = generate_document_key(owner_key, filename)
        self._documents[key] = (bytes(content), media_type)
        logger.info(f"Stored {len(content)} bytes locally: {key}")
        return self.url_for(key)

    async def get(self, key: str) -> bytes:
        if key not in self._documents:
            raise DocumentNotFoundError(key)
        return self._documents[key][0]

    async def delete(self, key: str) -> None:
        if self._documents.pop(key, None) is not None:
            logger.info(f"Deleted local document: {key}")

    def url_for(self, key: str) -> str:
        return f"{LOCAL_URL_SCHEME}{key}"

    def extract_key_from_url(self, url: str) -> str:
        if not url.startswith(LOCAL_URL_SCHEME):
            raise InvalidDocumentUrlError(url)
        return url[len(LOCAL_URL_SCHEME):]


class GridFSDocumentStorage(DocumentStorage):
    """
    Durable storage in a MongoDB GridFS bucket.

    The storage key is the GridFS filename. Content type, owner key,
    original filename and upload time are kept in the file metadata.
    """

    def __init__(self, db_manager: DatabaseManager, bucket_name: str = "resumes"):
        self.db_manager = db_manager
        self.bucket_name = bucket_name

    def _bucket(self):
        return self.db_manager.bucket(self.bucket_name)

    async def put(
        self,
        content: bytes,
        media_type: str,
        owner_key: Optional[str],
        filename: str,
    ) -> str:
        key = generate_document_key(owner_key, filename)
        metadata = {
            "contentType": media_type,
            "originalName": filename,
            "ownerKey": owner_key or DEFAULT_OWNER_KEY,
            "uploadedAt": datetime.now(timezone.utc).isoformat(),
        }

        try:
            file_id = await self._bucket().upload_from_stream(key, content, metadata=metadata)
        except PyMongoError as e:
            logger.error(f"Failed to upload document {key}: {e}")
            raise StorageUnavailableError(f"File upload failed: {e}") from e

        url = self.url_for(key)
        logger.info(f"Document uploaded successfully: {url}")
        audit_log(
            AuditAction.DOCUMENT_STORED.value,
            {"key": key, "file_id": str(file_id), "size_bytes": len(content)},
            audit_type="STORAGE",
        )
        return url

    async def get(self, key: str) -> bytes:
        try:
            grid_out = await self._bucket().open_download_stream_by_name(key)
            return await grid_out.read()
        except NoFile as e:
            raise DocumentNotFoundError(key) from e
        except PyMongoError as e:
            logger.error(f"Failed to get document {key}: {e}")
            raise StorageUnavailableError(f"File retrieval failed: {e}") from e

    async def delete(self, key: str) -> None:
        bucket = self._bucket()
        try:
            async for grid_out in bucket.find({"filename": key}):
                await bucket.delete(grid_out._id)
        except PyMongoError as e:
            logger.error(f"Failed to delete document {key}: {e}")
            raise StorageUnavailableError(f"File deletion failed: {e}") from e
        logger.info(f"Document deleted: {key}")

    def url_for(self, key: str) -> str:
        return f"{GRIDFS_URL_SCHEME}{self.bucket_name}/{key}"

    def extract_key_from_url(self, url: str) -> str:
        prefix = f"{GRIDFS_URL_SCHEME}{self.bucket_name}/"
        if not url.startswith(prefix):
            raise InvalidDocumentUrlError(url)
        return url[len(prefix):]


def resolve_storage_provider(settings: AppSettings) -> str:
    """
    Concrete provider name, ``gridfs`` or ``local``.

    With provider ``auto``, GridFS is used when database credentials are
    configured and local storage otherwise.
    """
    provider = settings.storage.provider
    if provider != "auto":
        return provider
    if settings.database.has_credentials:
        return "gridfs"
    logger.warning("Database credentials not configured. Using local storage.")
    return "local"


def get_document_storage(settings: Optional[AppSettings] = None) -> DocumentStorage:
    """Create the document storage selected by configuration."""
    settings = settings or get_settings()
    provider = resolve_storage_provider(settings)

    if provider == "gridfs":
        logger.info(f"Using GridFS document storage (bucket: {settings.storage.bucket_name})")
        return GridFSDocumentStorage(
            DatabaseManager(settings.database),
            bucket_name=settings.storage.bucket_name,
        )

    logger.warning("Using local storage for development. Configure database credentials for production.")
    return LocalDocumentStorage()
