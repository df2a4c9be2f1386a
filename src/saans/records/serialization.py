"""Snapshot encoding for the persisted record collection."""

import json
from typing import Sequence

from ..errors import SaansError
from ..schema import Record, Schema


class SnapshotDecodeError(SaansError):
    """Raised when a stored snapshot is not a list of flat objects."""


def encode_snapshot(records: Sequence[Record], schema: Schema) -> str:
    """Encode records as a JSON array of objects holding exactly the schema keys."""
    return json.dumps(
        [{key: record.get(key, "") for key in schema.keys} for record in records],
        ensure_ascii=False,
    )


def decode_snapshot(blob: str, schema: Schema) -> list[Record]:
    """Decode a snapshot, normalising every entry to a full schema record."""
    try:
        data = json.loads(blob)
    except json.JSONDecodeError as e:
        raise SnapshotDecodeError(f"Snapshot is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise SnapshotDecodeError(f"Snapshot must be a JSON array, got {type(data).__name__}")

    records = []
    for position, entry in enumerate(data):
        if not isinstance(entry, dict):
            raise SnapshotDecodeError(f"Snapshot entry {position} is not an object")
        records.append(schema.build_record(entry))
    return records
