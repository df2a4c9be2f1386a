"""Persistence adapter interface."""

from abc import ABC, abstractmethod
from typing import Optional


class PersistenceAdapter(ABC):
    """Durable load/save of opaque blobs keyed by namespace."""

    async def initialize(self):
        """Prepare the underlying storage. No-op by default."""

    async def close(self):
        """Release the underlying storage. No-op by default."""

    @abstractmethod
    async def load(self, namespace: str) -> Optional[str]:
        """Return the blob stored under ``namespace``, or None if absent."""

    @abstractmethod
    async def save(self, namespace: str, blob: str) -> None:
        """Store ``blob`` under ``namespace``, replacing any previous blob."""
