"""Data models for the field schema."""

from typing import Any, Iterable, Iterator, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from ..errors import DuplicateFieldKeyError, DuplicateFieldLabelError, EmptyFieldKeyError

Record = dict[str, str]


def to_text(value: Any) -> str:
    """Coerce a cell or form value to opaque text."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


class SchemaField(BaseModel):
    """A single schema entry: human-readable label plus derived key."""

    model_config = ConfigDict(frozen=True)

    label: str
    key: str


class Schema:
    """
    Immutable, ordered sequence of fields.

    Defines both display order and export column order. Labels and keys are
    validated for uniqueness once, at construction.
    """

    def __init__(self, fields: Iterable[SchemaField]):
        self._fields: tuple[SchemaField, ...] = tuple(fields)
        self._by_key: dict[str, SchemaField] = {}

        seen_labels: set[str] = set()
        for f in self._fields:
            if not f.key:
                raise EmptyFieldKeyError(f"Label '{f.label}' derives to an empty key")
            if f.label in seen_labels:
                raise DuplicateFieldLabelError(f"Duplicate field label '{f.label}'")
            if f.key in self._by_key:
                raise DuplicateFieldKeyError(
                    f"Labels '{self._by_key[f.key].label}' and '{f.label}' "
                    f"both derive to key '{f.key}'"
                )
            seen_labels.add(f.label)
            self._by_key[f.key] = f

    def __iter__(self) -> Iterator[SchemaField]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __getitem__(self, index: int) -> SchemaField:
        return self._fields[index]

    def __repr__(self) -> str:
        return f"Schema({len(self._fields)} fields)"

    @property
    def fields(self) -> tuple[SchemaField, ...]:
        return self._fields

    @property
    def labels(self) -> list[str]:
        return [f.label for f in self._fields]

    @property
    def keys(self) -> list[str]:
        return [f.key for f in self._fields]

    def field_for_key(self, key: str) -> Optional[SchemaField]:
        return self._by_key.get(key)

    def empty_record(self) -> Record:
        """Return a record with every key set to the empty string."""
        return {f.key: "" for f in self._fields}

    def build_record(self, values: Optional[Mapping[str, Any]] = None) -> Record:
        """
        Overlay ``values`` onto an all-empty record.

        Keys outside the schema are ignored and values are coerced to text,
        so the result always holds exactly the schema's keys.
        """
        record = self.empty_record()
        if values:
            for key, value in values.items():
                if key in self._by_key:
                    record[key] = to_text(value)
        return record
