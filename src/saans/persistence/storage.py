"""SQLite-backed blob storage for the record collection."""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import aiosqlite

from ..config import settings
from .base import PersistenceAdapter

logger = logging.getLogger(__name__)


class BlobStorage(PersistenceAdapter):
    """Key/value blob store persisted in a single SQLite table."""

    def __init__(self, db_path: Optional[Path] = None):
        self.db_path = Path(db_path or settings.database_path)
        self._connection: Optional[aiosqlite.Connection] = None

    async def initialize(self):
        """Initialize the database and create the blobs table."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._connection = await aiosqlite.connect(str(self.db_path))

        await self._connection.executescript(
            """
            CREATE TABLE IF NOT EXISTS blobs (
                namespace TEXT PRIMARY KEY,
                payload TEXT NOT NULL,
                updated_at TEXT NOT NULL
            );
            """
        )
        await self._connection.commit()
        logger.info(f"BlobStorage initialized at {self.db_path}")

    async def close(self):
        """Close the database connection."""
        if self._connection:
            await self._connection.close()
            self._connection = None

    def _require_connection(self) -> aiosqlite.Connection:
        if self._connection is None:
            raise RuntimeError("BlobStorage is not initialized")
        return self._connection

    async def load(self, namespace: str) -> Optional[str]:
        """Get the blob stored under a namespace."""
        connection = self._require_connection()
        async with connection.execute(
            "SELECT payload FROM blobs WHERE namespace = ?", (namespace,)
        ) as cursor:
            row = await cursor.fetchone()
            if row:
                return row[0]
        return None

    async def save(self, namespace: str, blob: str) -> None:
        """Store or replace the blob under a namespace."""
        connection = self._require_connection()
        await connection.execute(
            """
            INSERT OR REPLACE INTO blobs (namespace, payload, updated_at)
            VALUES (?, ?, ?)
            """,
            (namespace, blob, datetime.now(timezone.utc).isoformat()),
        )
        await connection.commit()
        logger.debug(f"Saved {len(blob)} chars under '{namespace}'")

