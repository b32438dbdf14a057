from __future__ import annotations

import logging
from typing import Any

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from .config import Settings
from .errors import StartupError, StorageError
from .sms import SmsRecord

logger = logging.getLogger(__name__)


class StorageClient:
    """
    Write-only access to the SMS collection.

    One instance owns one MongoClient for the life of the process. The driver
    pools connections and is safe to share between request threads, so no
    locking happens here.
    """

    def __init__(self, client: MongoClient[Any], database_name: str, collection_name: str) -> None:
        self.client = client
        self.database_name = database_name
        self.collection_name = collection_name
        self.collection = client[database_name][collection_name]

    @classmethod
    def connect(cls, settings: Settings) -> StorageClient:
        """Open the connection and ping the server; StartupError if unreachable."""
        timeout_ms = int(settings.connect_timeout_seconds * 1000)
        client: MongoClient[Any] = MongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
        try:
            # MongoClient connects lazily; force the round trip now.
            client.admin.command("ping")
        except PyMongoError as exc:
            client.close()
            raise StartupError(f"Could not connect to MongoDB: {exc}") from exc

        logger.info(
            "Connected to MongoDB (database=%s, collection=%s)",
            settings.database_name,
            settings.collection_name,
        )
        return cls(client, settings.database_name, settings.collection_name)

    def insert(self, record: SmsRecord) -> Any:
        """Insert one document and return its id. No retry on failure."""
        try:
            result = self.collection.insert_one(record.to_document())
        except PyMongoError as exc:
            raise StorageError(str(exc)) from exc
        return result.inserted_id

    def close(self) -> None:
        self.client.close()
