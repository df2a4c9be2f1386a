"""Spreadsheet codec interface."""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Sequence


class SpreadsheetCodec(ABC):
    """Converts between spreadsheet bytes and rows of named cells."""

    @abstractmethod
    def decode(self, data: bytes) -> list[dict[str, Any]]:
        """Decode the first sheet into header-to-value rows."""

    @abstractmethod
    def encode(self, rows: Sequence[Mapping[str, Any]], sheet_name: str) -> bytes:
        """Encode rows into a single-sheet workbook."""
