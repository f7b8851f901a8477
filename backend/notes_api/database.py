"""
Notes API — MongoDB Store Connector
=====================================

What:  Owns the single long-lived motor client and the handle of the notes
       collection.
How:   `connect()` builds an AsyncIOMotorClient, confirms the server answers
       a `ping`, and binds `client[database][collection]`. Route handlers
       reach the handle through the `get_note_service` dependency, which
       reads the connector from `app.state.store`.
When:  Connected once in the application lifespan; closed on shutdown.

Connection States:
    not connected ──connect() ok──▶ connected
         │
         └──connect() fails──▶ stays not connected (logged, no retry)

    While not connected, every data operation fails fast with
    StoreUnavailableError (HTTP 503) instead of touching a missing handle.
    The handle is never reassigned by request handlers.
"""

import logging
from typing import Any, Callable, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.errors import PyMongoError

from notes_api.config import Settings
from notes_api.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class MongoConnector:
    """
    Store connector for one MongoDB collection.

    Attributes:
        settings:       Connection URL, database and collection names
        client_factory: Callable building the client from a URL; defaults
                        to AsyncIOMotorClient
    """

    def __init__(
        self,
        settings: Settings,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
    ):
        self.settings = settings
        self._client_factory = client_factory
        self._client: Optional[Any] = None
        self._collection: Optional[AsyncIOMotorCollection] = None

    @property
    def is_connected(self) -> bool:
        return self._collection is not None

    @property
    def collection(self) -> AsyncIOMotorCollection:
        """
        The notes collection handle.

        Raises:
            StoreUnavailableError: connect() never succeeded
        """
        if self._collection is None:
            raise StoreUnavailableError(
                context={
                    "database": self.settings.mongo_database,
                    "collection": self.settings.mongo_collection,
                }
            )
        return self._collection

    def bind(self, client: Any) -> None:
        """Adopt an already-built client and bind the configured collection."""
        self._client = client
        database = client[self.settings.mongo_database]
        self._collection = database[self.settings.mongo_collection]

    async def connect(self) -> bool:
        """
        Open the connection and verify it with a ping.

        Failures are logged and swallowed: the process keeps serving, and
        data routes answer 503 until a restart.

        Returns:
            True when the collection handle is available.
        """
        client = None
        try:
            client = self._client_factory(
                self.settings.mongo_url,
                serverSelectionTimeoutMS=self.settings.mongo_timeout_ms,
            )
            await client.admin.command("ping")
        except PyMongoError as e:
            logger.error("Error connecting to MongoDB: %s", str(e))
            if client is not None:
                # Stop the driver's background monitor threads
                client.close()
            return False

        self.bind(client)
        logger.info(
            "MongoDB connected successfully. (database=%s, collection=%s)",
            self.settings.mongo_database,
            self.settings.mongo_collection,
        )
        return True

    async def ping(self) -> bool:
        """Round-trip a ping; used by the health check."""
        if self._client is None:
            return False
        try:
            await self._client.admin.command("ping")
        except PyMongoError as e:
            logger.warning("MongoDB ping failed: %s", str(e))
            return False
        return True

    def close(self) -> None:
        """Close the client and drop the handle."""
        if self._client is not None:
            self._client.close()
        self._client = None
        self._collection = None
