"""Durable storage for the record collection."""

from .base import PersistenceAdapter
from .memory import InMemoryBlobStorage
from .storage import BlobStorage

__all__ = ["PersistenceAdapter", "InMemoryBlobStorage", "BlobStorage"]
