"""In-process blob storage."""

from typing import Optional

from .base import PersistenceAdapter


class InMemoryBlobStorage(PersistenceAdapter):
    """Keeps blobs in a dict; useful for embedding without a database."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.blobs: dict[str, str] = dict(initial or {})
        self.save_count = 0

    async def load(self, namespace: str) -> Optional[str]:
        return self.blobs.get(namespace)

    async def save(self, namespace: str, blob: str) -> None:
        self.blobs[namespace] = blob
        self.save_count += 1
