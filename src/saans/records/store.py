"""In-memory ordered record collection with background persistence."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, Mapping, Optional

from ..config import settings
from ..errors import IndexOutOfRangeError
from ..persistence import PersistenceAdapter
from ..schema import Record, Schema, default_schema
from .models import SaveOutcome
from .serialization import SnapshotDecodeError, decode_snapshot, encode_snapshot

logger = logging.getLogger(__name__)


class RecordStore:
    """
    Ordered collection of schema-conformant records.

    Every mutation is applied synchronously and is visible immediately. When a
    persistence adapter is attached, each mutation snapshots the whole
    collection and hands it to a background save task; the mutation never
    waits for that save. Save results are observable through ``on_save``,
    ``last_save`` or ``flush()``.
    """

    def __init__(
        self,
        schema: Optional[Schema] = None,
        persistence: Optional[PersistenceAdapter] = None,
        namespace: Optional[str] = None,
        on_save: Optional[Callable[[SaveOutcome], None]] = None,
    ):
        """
        Initialize the record store.

        Args:
            schema: Field schema (defaults to the SAANS schema)
            persistence: Optional adapter that receives a snapshot after every mutation
            namespace: Storage key for snapshots (defaults to settings.storage_namespace)
            on_save: Optional callback invoked with each SaveOutcome
        """
        self.schema = schema if schema is not None else default_schema()
        self.persistence = persistence
        self.namespace = namespace or settings.storage_namespace
        self.on_save = on_save
        self.last_save: Optional[asyncio.Task] = None

        self._records: list[Record] = []
        self._sequence = 0
        self._pending: dict[int, asyncio.Task] = {}
        self._save_lock: Optional[asyncio.Lock] = None

    def __len__(self) -> int:
        return len(self._records)

    # Mutations

    def create(self, values: Optional[Mapping[str, Any]] = None) -> int:
        """Append a record built from ``values`` and return its index."""
        self._records.append(self.schema.build_record(values))
        index = len(self._records) - 1
        logger.debug(f"Created record {index}")
        self._persist()
        return index

    def update(self, index: int, values: Mapping[str, Any]) -> None:
        """
        Replace the record at ``index`` with a full record built from ``values``.

        Keys absent from ``values`` become empty; callers editing a record
        resubmit all of its fields.
        """
        self._check_index(index)
        self._records[index] = self.schema.build_record(values)
        logger.debug(f"Updated record {index}")
        self._persist()

    def delete(self, index: int) -> None:
        """Remove the record at ``index``; later records shift down by one."""
        self._check_index(index)
        del self._records[index]
        logger.info(f"Deleted record {index}")
        self._persist()

    def append_all(self, records: Iterable[Mapping[str, Any]]) -> int:
        """Append records in order and return how many were appended."""
        built = [self.schema.build_record(record) for record in records]
        self._records.extend(built)
        logger.info(f"Appended {len(built)} records")
        self._persist()
        return len(built)

    def clear(self) -> None:
        """Remove every record."""
        count = len(self._records)
        self._records = []
        logger.info(f"Cleared {count} records")
        self._persist()

    # Reads

    def get(self, index: int) -> Record:
        """Return a copy of the record at ``index``."""
        self._check_index(index)
        return dict(self._records[index])

    def list(self) -> list[Record]:
        """Return copies of all records in order."""
        return [dict(record) for record in self._records]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._records):
            raise IndexOutOfRangeError(index, len(self._records))

    # Persistence

    async def load(self) -> int:
        """
        Rehydrate the collection from persistence.

        A missing, unreadable or malformed snapshot leaves the collection empty.

        Returns:
            Number of records loaded
        """
        if self.persistence is None:
            return 0

        try:
            blob = await self.persistence.load(self.namespace)
        except Exception as e:
            logger.warning(f"Failed to load records from '{self.namespace}': {e}")
            blob = None

        records: list[Record] = []
        if blob is not None:
            try:
                records = decode_snapshot(blob, self.schema)
            except SnapshotDecodeError as e:
                logger.warning(f"Ignoring stored records in '{self.namespace}': {e}")

        self._records = records
        logger.info(f"Loaded {len(records)} records from '{self.namespace}'")
        return len(records)

    async def flush(self) -> list[SaveOutcome]:
        """Wait for every pending save and return their outcomes in mutation order."""
        tasks = [self._pending[seq] for seq in sorted(self._pending)]
        if not tasks:
            return []
        return list(await asyncio.gather(*tasks))

    def _persist(self) -> Optional[asyncio.Task]:
        if self.persistence is None:
            return None

        self._sequence += 1
        sequence = self._sequence
        blob = encode_snapshot(self._records, self.schema)
        count = len(self._records)

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.error(f"No running event loop, snapshot {sequence} was not saved")
            self._report(
                SaveOutcome(
                    sequence=sequence,
                    namespace=self.namespace,
                    record_count=count,
                    success=False,
                    error="no running event loop",
                )
            )
            return None

        task = loop.create_task(self._save(sequence, blob, count))
        self._pending[sequence] = task
        task.add_done_callback(lambda _t, seq=sequence: self._pending.pop(seq, None))
        self.last_save = task
        return task

    async def _save(self, sequence: int, blob: str, count: int) -> SaveOutcome:
        if self._save_lock is None:
            self._save_lock = asyncio.Lock()

        # Saves run one at a time in the order they were scheduled
        async with self._save_lock:
            try:
                await self.persistence.save(self.namespace, blob)
            except Exception as e:
                logger.error(f"Failed to save snapshot {sequence} ({count} records): {e}")
                outcome = SaveOutcome(
                    sequence=sequence,
                    namespace=self.namespace,
                    record_count=count,
                    success=False,
                    error=str(e),
                )
            else:
                outcome = SaveOutcome(
                    sequence=sequence,
                    namespace=self.namespace,
                    record_count=count,
                    success=True,
                )

        self._report(outcome)
        return outcome

    def _report(self, outcome: SaveOutcome) -> None:
        if self.on_save is not None:
            self.on_save(outcome)
