"""
Tests for resume_pipeline.services.storage - document keys and storage backends.
"""

import asyncio
import itertools

import pytest
from gridfs.errors import NoFile
from pymongo.errors import ServerSelectionTimeoutError

from resume_pipeline.data.database import DatabaseManager
from resume_pipeline.errors import (
    DocumentNotFoundError,
    InvalidDocumentUrlError,
    StorageUnavailableError,
)
from resume_pipeline.services.storage import (
    GridFSDocumentStorage,
    LocalDocumentStorage,
    generate_document_key,
    get_document_storage,
    resolve_storage_provider,
)
from resume_pipeline.utils.config import AppSettings, DatabaseSettings, StorageSettings


class TestGenerateDocumentKey:
    def test_sanitizes_filename(self):
        key = generate_document_key("cand 1", "my résumé (final).pdf", 1700000000000)
        assert key == "resumes/cand 1/1700000000000-my_r_sum___final_.pdf"

    def test_default_owner(self):
        assert generate_document_key(None, "cv.pdf", 1).startswith("resumes/temp/1-")

    def test_unique_per_millisecond(self):
        assert generate_document_key("a", "cv.pdf", 1) != generate_document_key("a", "cv.pdf", 2)


class TestLocalDocumentStorage:
    def test_round_trip(self, local_storage):
        url = asyncio.run(local_storage.put(b"%PDF-1.4", "application/pdf", "cand-1", "cv.pdf"))
        assert url.startswith("local://resumes/cand-1/")
        assert url.endswith("-cv.pdf")

        key = local_storage.extract_key_from_url(url)
        assert local_storage.url_for(key) == url
        assert asyncio.run(local_storage.get(key)) == b"%PDF-1.4"
        assert len(local_storage) == 1

    def test_delete(self, local_storage):
        url = asyncio.run(local_storage.put(b"hello", "text/plain", None, "cv.txt"))
        key = local_storage.extract_key_from_url(url)

        asyncio.run(local_storage.delete(key))
        assert len(local_storage) == 0
        with pytest.raises(DocumentNotFoundError):
            asyncio.run(local_storage.get(key))

    def test_repeated_uploads_are_kept(self, local_storage, monkeypatch):
        ticks = itertools.count(1700000000000, 5)
        monkeypatch.setattr("resume_pipeline.services.storage.time.time", lambda: next(ticks) / 1000)

        first = asyncio.run(local_storage.put(b"hello", "text/plain", "cand-1", "cv.txt"))
        second = asyncio.run(local_storage.put(b"hello", "text/plain", "cand-1", "cv.txt"))
        assert first != second
        assert len(local_storage) == 2

    def test_delete_missing_is_noop(self, local_storage):
        asyncio.run(local_storage.delete("resumes/nobody/1-cv.pdf"))

    def test_get_missing(self, local_storage):
        with pytest.raises(DocumentNotFoundError, match="resumes/nobody/1-cv.pdf"):
            asyncio.run(local_storage.get("resumes/nobody/1-cv.pdf"))

    def test_foreign_url(self, local_storage):
        with pytest.raises(InvalidDocumentUrlError):
            local_storage.extract_key_from_url("https://cdn.example.com/resumes/a/1-cv.pdf")

    def test_invalid_url_is_value_error(self, local_storage):
        with pytest.raises(ValueError):
            local_storage.extract_key_from_url("gridfs://resumes/a/1-cv.pdf")


class FakeGridOut:
    def __init__(self, content):
        self._content = content

    async def read(self):
        return self._content


class FakeBucket:
    """In-memory stand-in for AsyncIOMotorGridFSBucket."""

    def __init__(self, error=None):
        self.files = {}
        self.error = error

    async def upload_from_stream(self, filename, source, metadata=None):
        if self.error:
            raise self.error
        self.files[filename] = (source, metadata)
        return "file-id"

    async def open_download_stream_by_name(self, filename):
        if self.error:
            raise self.error
        if filename not in self.files:
            raise NoFile(f"no file named {filename}")
        return FakeGridOut(self.files[filename][0])


@pytest.fixture
def gridfs_storage():
    return GridFSDocumentStorage(DatabaseManager(DatabaseSettings()), bucket_name="resumes")


class TestGridFSDocumentStorage:
    def test_url_round_trip(self, gridfs_storage):
        url = gridfs_storage.url_for("resumes/a/1-cv.pdf")
        assert url == "gridfs://resumes/resumes/a/1-cv.pdf"
        assert gridfs_storage.extract_key_from_url(url) == "resumes/a/1-cv.pdf"

    def test_foreign_bucket(self, gridfs_storage):
        with pytest.raises(InvalidDocumentUrlError):
            gridfs_storage.extract_key_from_url("gridfs://other/resumes/a/1-cv.pdf")

    def test_put_and_get(self, gridfs_storage, monkeypatch):
        bucket = FakeBucket()
        monkeypatch.setattr(gridfs_storage, "_bucket", lambda: bucket)

        url = asyncio.run(gridfs_storage.put(b"hello", "text/plain", "cand-1", "cv.txt"))
        key = gridfs_storage.extract_key_from_url(url)

        _, metadata = bucket.files[key]
        assert metadata["contentType"] == "text/plain"
        assert metadata["originalName"] == "cv.txt"
        assert metadata["ownerKey"] == "cand-1"
        assert asyncio.run(gridfs_storage.get(key)) == b"hello"

    def test_missing_document(self, gridfs_storage, monkeypatch):
        monkeypatch.setattr(gridfs_storage, "_bucket", lambda: FakeBucket())
        with pytest.raises(DocumentNotFoundError):
            asyncio.run(gridfs_storage.get("resumes/a/1-cv.pdf"))

    def test_unreachable_backend(self, gridfs_storage, monkeypatch):
        bucket = FakeBucket(error=ServerSelectionTimeoutError("no servers"))
        monkeypatch.setattr(gridfs_storage, "_bucket", lambda: bucket)

        with pytest.raises(StorageUnavailableError, match="File upload failed"):
            asyncio.run(gridfs_storage.put(b"hello", "text/plain", None, "cv.txt"))
        with pytest.raises(StorageUnavailableError):
            asyncio.run(gridfs_storage.get("resumes/a/1-cv.pdf"))


class TestGetDocumentStorage:
    def test_local_provider(self):
        settings = AppSettings(storage=StorageSettings(provider="local"))
        assert isinstance(get_document_storage(settings), LocalDocumentStorage)

    def test_auto_without_credentials(self):
        settings = AppSettings(
            storage=StorageSettings(provider="auto"),
            database=DatabaseSettings(username=None, password=None),
        )
        assert isinstance(get_document_storage(settings), LocalDocumentStorage)

    def test_auto_with_credentials(self):
        settings = AppSettings(
            storage=StorageSettings(provider="auto", bucket_name="cvs"),
            database=DatabaseSettings(username="svc", password="s3cret"),
        )
        storage = get_document_storage(settings)
        assert isinstance(storage, GridFSDocumentStorage)
        assert storage.bucket_name == "cvs"

    def test_resolve_provider(self):
        explicit = AppSettings(
            storage=StorageSettings(provider="local"),
            database=DatabaseSettings(username="svc", password="s3cret"),
        )
        assert resolve_storage_provider(explicit) == "local"

        auto = AppSettings(
            storage=StorageSettings(provider="auto"),
            database=DatabaseSettings(username="svc", password="s3cret"),
        )
        assert resolve_storage_provider(auto) == "gridfs"
