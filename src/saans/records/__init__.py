"""Record store and snapshot persistence."""

from .models import SaveOutcome
from .serialization import SnapshotDecodeError, decode_snapshot, encode_snapshot
from .store import RecordStore

__all__ = [
    "SaveOutcome",
    "SnapshotDecodeError",
    "decode_snapshot",
    "encode_snapshot",
    "RecordStore",
]
