"""Pytest configuration and shared fixtures."""

from pathlib import Path
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from saans.persistence import BlobStorage, InMemoryBlobStorage
from saans.records import RecordStore
from saans.schema import Schema, build_schema, default_schema


@pytest.fixture
def schema() -> Schema:
    """The SAANS reporting schema."""
    return default_schema()


@pytest.fixture
def small_schema() -> Schema:
    """A three-field schema that keeps assertions readable."""
    return build_schema(["Name of the Block", "No. of Doctors trained on SAANS?", "Remarks"])


@pytest.fixture
def memory_storage() -> InMemoryBlobStorage:
    """Blob storage held in a dict."""
    return InMemoryBlobStorage()


@pytest.fixture
def store(small_schema: Schema) -> RecordStore:
    """A record store without persistence."""
    return RecordStore(schema=small_schema)


@pytest_asyncio.fixture
async def blob_storage(tmp_path: Path) -> AsyncGenerator[BlobStorage, None]:
    """SQLite blob storage in a temporary directory."""
    storage = BlobStorage(tmp_path / "test_saans.db")
    await storage.initialize()
    yield storage
    await storage.close()
