"""
MongoDB connection management.

A single client is created lazily and shared for the life of the process.
"""
import asyncio
from typing import Callable, Optional

from pymongo import ASCENDING, DESCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.server_api import ServerApi

from food_lovers.core.config import settings
from food_lovers.core.logging import logger

REVIEWS = "reviews"
FAVORITES = "favorites"


def create_client(uri: str, timeout_ms: int) -> AsyncMongoClient:
    """Build an async client pinned to Stable API v1."""
    return AsyncMongoClient(
        uri,
        server_api=ServerApi("1", strict=True, deprecation_errors=True),
        serverSelectionTimeoutMS=timeout_ms,
        tz_aware=True,
    )


class MongoConnection:
    """
    Lazily established, memoized database handle.

    The first ``get_database()`` call creates the client and pings the server.
    Concurrent first callers wait on the same lock, so only one connection
    attempt is made. A failed attempt caches nothing and the next call
    retries.
    """

    def __init__(
        self,
        uri: str,
        database_name: str,
        timeout_ms: int = 5000,
        client_factory: Optional[Callable[[str, int], AsyncMongoClient]] = None,
    ):
        self.uri = uri
        self.database_name = database_name
        self.timeout_ms = timeout_ms
        self._client_factory = client_factory or create_client
        self._client: Optional[AsyncMongoClient] = None
        self._database: Optional[AsyncDatabase] = None
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._database is not None

    async def get_database(self) -> AsyncDatabase:
        if self._database is not None:
            return self._database

        async with self._lock:
            if self._database is None:
                await self._connect()
        return self._database

    async def _connect(self) -> None:
        client = self._client_factory(self.uri, self.timeout_ms)
        try:
            await client.admin.command("ping")
        except Exception as e:
            logger.error(
                f"MongoDB connection failed: {str(e)}",
                extra={"database": self.database_name},
                exc_info=True,
            )
            await client.close()
            raise

        self._client = client
        self._database = client[self.database_name]
        logger.info("Connected to MongoDB", extra={"database": self.database_name})

    async def close(self) -> None:
        """Close the client. A later ``get_database()`` reconnects."""
        async with self._lock:
            client = self._client
            self._client = None
            self._database = None
        if client is not None:
            await client.close()
            logger.info("MongoDB connection closed", extra={"database": self.database_name})


# Process-wide connection
mongo = MongoConnection(
    settings.MONGODB_URI,
    settings.DATABASE_NAME,
    timeout_ms=settings.MONGODB_SERVER_SELECTION_TIMEOUT_MS,
)


async def ensure_indexes(db: AsyncDatabase) -> None:
    """
    Create the indexes backing the list, featured and favorites queries.
    """
    reviews = db[REVIEWS]
    await reviews.create_index([("createdAt", DESCENDING)], name="createdAt_desc")
    await reviews.create_index([("userEmail", ASCENDING), ("createdAt", DESCENDING)], name="userEmail_createdAt")
    await reviews.create_index([("rating", DESCENDING), ("createdAt", DESCENDING)], name="rating_createdAt")

    await db[FAVORITES].create_index(
        [("userEmail", ASCENDING), ("reviewId", ASCENDING)],
        name="userEmail_reviewId",
        unique=settings.ENFORCE_UNIQUE_FAVORITES,
    )


async def init_db() -> None:
    """
    Connect and ensure indexes.
    This should be called on application startup.
    """
    db = await mongo.get_database()
    await ensure_indexes(db)


async def close_db() -> None:
    """
    Close database connections.
    This should be called on application shutdown.
    """
    await mongo.close()
