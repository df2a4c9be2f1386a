"""Schema registry: ordered fields with derived keys."""

from .models import Record, Schema, SchemaField, to_text
from .registry import FIELD_LABELS, build_schema, default_schema, derive_key

__all__ = [
    "Record",
    "Schema",
    "SchemaField",
    "to_text",
    "FIELD_LABELS",
    "build_schema",
    "default_schema",
    "derive_key",
]
