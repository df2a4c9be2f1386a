"""Serialize records into spreadsheet rows keyed by schema labels."""

import logging
from typing import Any, Mapping, Optional, Sequence

from ..errors import EmptyInputError
from ..schema import Schema, default_schema, to_text

logger = logging.getLogger(__name__)


class ExportSerializer:
    """Converts records into rows whose headers are exactly the schema labels."""

    def __init__(self, schema: Optional[Schema] = None):
        self.schema = schema if schema is not None else default_schema()

    def serialize(self, records: Sequence[Mapping[str, Any]]) -> list[dict[str, str]]:
        """
        Build one export row per record.

        Column set and order always follow the schema: a key missing from a
        record exports as an empty cell and keys outside the schema are dropped.

        Raises:
            EmptyInputError: If there are no records to export
        """
        if not records:
            raise EmptyInputError("No records to export")

        rows = [
            {field.label: to_text(record.get(field.key, "")) for field in self.schema}
            for record in records
        ]
        logger.info(f"Serialized {len(rows)} records for export")
        return rows
