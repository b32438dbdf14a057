from __future__ import annotations

from collections.abc import Iterator

import mongomock
import pytest
from fastapi.testclient import TestClient

from sms_dump.config import Settings
from sms_dump.db import StorageClient
from sms_dump.main import create_app


@pytest.fixture
def mongo() -> mongomock.MongoClient:
    """In-memory MongoDB, fresh for each test."""
    return mongomock.MongoClient()


@pytest.fixture
def storage(mongo: mongomock.MongoClient) -> StorageClient:
    return StorageClient(mongo, "sms", "sms-dumped")


@pytest.fixture
def client(storage: StorageClient) -> Iterator[TestClient]:
    app = create_app(Settings(), storage=storage)
    with TestClient(app) as test_client:
        yield test_client
