"""Capture service: the entry point a presentation layer drives."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Mapping, Optional

from .config import settings
from .errors import NoDataFoundError
from .export import ExportSerializer
from .persistence import BlobStorage, PersistenceAdapter
from .reconcile import ImportReconciler, ReconcileReport
from .records import RecordStore, SaveOutcome
from .schema import Record, Schema, default_schema
from .sheets import SpreadsheetCodec, ExcelCodec

logger = logging.getLogger(__name__)


class CaptureService:
    """
    Coordinates the record store, persistence, reconciliation and export.

    Record mutations are synchronous and persist in the background. Spreadsheet
    decoding and encoding run off the event loop thread; the store is only
    touched once a decode has finished, in a single step.
    """

    def __init__(
        self,
        storage: Optional[PersistenceAdapter] = None,
        schema: Optional[Schema] = None,
        codec: Optional[SpreadsheetCodec] = None,
        on_save=None,
    ):
        """
        Initialize the capture service.

        Args:
            storage: Persistence adapter (a BlobStorage at settings.database_path if omitted)
            schema: Field schema (defaults to the SAANS schema)
            codec: Spreadsheet codec (defaults to ExcelCodec)
            on_save: Optional callback receiving each SaveOutcome
        """
        self.schema = schema if schema is not None else default_schema()
        self.storage = storage or BlobStorage()
        self.codec = codec or ExcelCodec()
        self.store = RecordStore(
            schema=self.schema,
            persistence=self.storage,
            namespace=settings.storage_namespace,
            on_save=on_save,
        )
        self.reconciler = ImportReconciler(self.schema)
        self.serializer = ExportSerializer(self.schema)
        self.last_import_report: Optional[ReconcileReport] = None
        self._initialized = False

    async def initialize(self):
        """Open storage and rehydrate saved records."""
        if not self._initialized:
            await self.storage.initialize()
            await self.store.load()
            self._initialized = True
            logger.info("CaptureService initialized")

    async def close(self) -> list[SaveOutcome]:
        """Wait for pending saves and close storage."""
        outcomes = await self.store.flush()
        await self.storage.close()
        self._initialized = False
        return outcomes

    # Record operations

    def create_record(self, values: Optional[Mapping[str, Any]] = None) -> int:
        return self.store.create(values)

    def update_record(self, index: int, values: Mapping[str, Any]) -> None:
        self.store.update(index, values)

    def delete_record(self, index: int) -> None:
        """Delete a record. Callers must confirm with the user first."""
        self.store.delete(index)

    def clear_records(self) -> None:
        """Delete every record. Callers must confirm with the user first."""
        self.store.clear()

    def get_record(self, index: int) -> Record:
        return self.store.get(index)

    def list_records(self) -> list[Record]:
        return self.store.list()

    # Spreadsheet import/export

    async def import_workbook(self, data: bytes) -> int:
        """
        Decode a workbook and append its reconciled rows.

        Returns:
            Number of records imported

        Raises:
            NoDataFoundError: If the workbook has no data rows; nothing is changed
            WorkbookDecodeError: If the bytes are not a readable workbook
        """
        rows = await asyncio.to_thread(self.codec.decode, data)

        result = self.reconciler.reconcile(rows)
        self.last_import_report = result.report
        if result.no_data_found:
            raise NoDataFoundError("No data found in the Excel file.")

        count = self.store.append_all(result.records)
        logger.info(f"Imported {count} rows.")
        return count

    async def export_workbook(self) -> bytes:
        """
        Encode all records as a workbook with schema labels as headers.

        Raises:
            EmptyInputError: If there are no records; nothing is encoded
        """
        rows = self.serializer.serialize(self.store.list())
        return await asyncio.to_thread(self.codec.encode, rows, settings.export_sheet_name)

    async def import_file(self, path: Path) -> int:
        """Import a workbook from disk."""
        data = await asyncio.to_thread(Path(path).read_bytes)
        return await self.import_workbook(data)

    async def export_file(self, path: Optional[Path] = None) -> Path:
        """Export to ``path`` (settings.export_filename by default) and return it."""
        target = Path(path or settings.export_filename)
        data = await self.export_workbook()
        await asyncio.to_thread(target.write_bytes, data)
        logger.info(f"Exported {len(self.store)} records to {target}")
        return target
