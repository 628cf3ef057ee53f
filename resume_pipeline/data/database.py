"""
MongoDB access for durable document storage.

Original resumes live in GridFS buckets reached through one lazily created
Motor client per process.
"""

from typing import Optional
from urllib.parse import quote_plus

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorDatabase,
    AsyncIOMotorGridFSBucket,
)
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from resume_pipeline.utils.config import DatabaseSettings, get_settings
from resume_pipeline.utils.logger import get_logger

logger = get_logger(__name__)

_FORBIDDEN_HOST_CHARS = frozenset(";&|$`")


def build_mongo_uri(settings: DatabaseSettings) -> str:
    """
    MongoDB URI for the configured server.

    Credentials are URL-encoded; hosts containing shell metacharacters are
    rejected.

    Raises:
        ValueError: The host is empty or malformed
    """
    host = settings.host.strip()
    if not host or _FORBIDDEN_HOST_CHARS.intersection(host):
        raise ValueError(f"Invalid database host: {host}")

    auth = ""
    if settings.has_credentials:
        auth = f"{quote_plus(settings.username)}:{quote_plus(settings.password)}@"

    return f"mongodb://{auth}{host}:{settings.port}"


class DatabaseManager:
    """Owns the Motor client and hands out GridFS buckets."""

    def __init__(self, settings: Optional[DatabaseSettings] = None) -> None:
        self.settings = settings or get_settings().database
        self._uri = build_mongo_uri(self.settings)
        self._client: Optional[AsyncIOMotorClient] = None
        self._buckets: dict[str, AsyncIOMotorGridFSBucket] = {}

    @property
    def client(self) -> AsyncIOMotorClient:
        if self._client is None:
            logger.info(f"Connecting to MongoDB at {self.settings.display_address}")
            self._client = AsyncIOMotorClient(
                self._uri,
                serverSelectionTimeoutMS=self.settings.server_selection_timeout_ms,
                connectTimeoutMS=self.settings.server_selection_timeout_ms,
            )
        return self._client

    @property
    def database(self) -> AsyncIOMotorDatabase:
        return self.client[self.settings.name]

    def bucket(self, name: str) -> AsyncIOMotorGridFSBucket:
        """GridFS bucket ``name``, created on first use and reused afterwards."""
        if name not in self._buckets:
            self._buckets[name] = AsyncIOMotorGridFSBucket(self.database, bucket_name=name)
        return self._buckets[name]

    async def ping(self) -> bool:
        """True when the server answers within the selection timeout."""
        try:
            await self.client.admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"MongoDB ping failed for {self.settings.display_address}: {e}")
            return False

    def close(self) -> None:
        if self._client is not None:
            logger.info("Closing MongoDB client")
            self._client.close()
            self._client = None
            self._buckets.clear()
