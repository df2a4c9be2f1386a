"""Excel codec: .xlsx via openpyxl, legacy .xls decoding via xlrd."""

import logging
from io import BytesIO
from typing import Any, Iterable, Iterator, Mapping, Sequence
from zipfile import BadZipFile

import xlrd
from openpyxl import Workbook, load_workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.biffh import (
    XL_CELL_BLANK,
    XL_CELL_BOOLEAN,
    XL_CELL_DATE,
    XL_CELL_EMPTY,
    XL_CELL_ERROR,
    XL_CELL_NUMBER,
    XLRDError,
    error_text_from_code,
)
from xlrd.compdoc import CompDocError
from xlrd.xldate import xldate_as_datetime

from ..errors import WorkbookDecodeError
from .base import SpreadsheetCodec

logger = logging.getLogger(__name__)

# Compound document signature that starts every BIFF (.xls) workbook
XLS_SIGNATURE = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() == "")


def _unique_headers(header_cells: Sequence[Any]) -> list[tuple[int, str]]:
    """
    Return (column position, header) pairs, suffixing repeated headers.

    Generated suffixes skip any name already present in the header row, so
    ``["A", "A", "A_1"]`` becomes ``A``, ``A_2``, ``A_1``.
    """
    present = {str(cell) for cell in header_cells if not _is_blank(cell)}
    taken: set[str] = set()
    headers: list[tuple[int, str]] = []
    for position, cell in enumerate(header_cells):
        if _is_blank(cell):
            continue
        header = str(cell)
        if header in taken:
            suffix = 1
            while f"{header}_{suffix}" in taken or f"{header}_{suffix}" in present:
                suffix += 1
            header = f"{header}_{suffix}"
        taken.add(header)
        headers.append((position, header))
    return headers


def _rows_from_values(values: Iterator[Sequence[Any]]) -> list[dict[str, Any]]:
    """Turn a header row plus data rows into header-to-value dicts."""
    header_cells = next(values, None)
    if header_cells is None:
        return []

    headers = _unique_headers(header_cells)
    rows = []
    for cells in values:
        if all(_is_blank(cell) for cell in cells):
            continue
        row = {}
        for position, header in headers:
            value = cells[position] if position < len(cells) else None
            row[header] = "" if value is None else value
        rows.append(row)
    return rows


def _xls_value(cell: xlrd.sheet.Cell, datemode: int) -> Any:
    if cell.ctype in (XL_CELL_EMPTY, XL_CELL_BLANK):
        return None
    if cell.ctype == XL_CELL_NUMBER and float(cell.value).is_integer():
        return int(cell.value)
    if cell.ctype == XL_CELL_DATE:
        return xldate_as_datetime(cell.value, datemode)
    if cell.ctype == XL_CELL_BOOLEAN:
        return bool(cell.value)
    if cell.ctype == XL_CELL_ERROR:
        return error_text_from_code.get(cell.value, "")
    return cell.value


def _cell_text(value: Any) -> Any:
    """Drop characters the xlsx format cannot store."""
    if isinstance(value, str) and ILLEGAL_CHARACTERS_RE.search(value):
        logger.warning(f"Removed control characters from exported value {value!r}")
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


class ExcelCodec(SpreadsheetCodec):
    """
    Reads .xlsx and legacy .xls workbooks; writes .xlsx.

    Only the first worksheet is read and its first row holds the headers.
    """

    def decode(self, data: bytes) -> list[dict[str, Any]]:
        """
        Decode the first worksheet.

        The format is picked from the file signature. Blank header cells are
        skipped and repeated headers get ``_1``, ``_2`` suffixes. Fully blank
        data rows are skipped and empty cells decode as "".

        Raises:
            WorkbookDecodeError: If the bytes are not a readable workbook
        """
        if data[: len(XLS_SIGNATURE)] == XLS_SIGNATURE:
            return self._decode_xls(data)
        return self._decode_xlsx(data)

    def _decode_xlsx(self, data: bytes) -> list[dict[str, Any]]:
        try:
            workbook = load_workbook(BytesIO(data), data_only=True)
        except (BadZipFile, InvalidFileException, KeyError, OSError, ValueError) as e:
            raise WorkbookDecodeError(f"Could not read workbook: {e}") from e

        try:
            sheet = workbook.worksheets[0]
            rows = _rows_from_values(sheet.iter_rows(values_only=True))
        finally:
            workbook.close()

        logger.info(f"Decoded {len(rows)} rows from sheet '{sheet.title}'")
        return rows

    def _decode_xls(self, data: bytes) -> list[dict[str, Any]]:
        try:
            book = xlrd.open_workbook(file_contents=data)
            sheet = book.sheet_by_index(0)
            values = (
                [_xls_value(cell, book.datemode) for cell in sheet.row(index)]
                for index in range(sheet.nrows)
            )
            rows = _rows_from_values(values)
        except (XLRDError, CompDocError, IndexError, ValueError) as e:
            raise WorkbookDecodeError(f"Could not read legacy workbook: {e}") from e

        logger.info(f"Decoded {len(rows)} rows from legacy sheet '{sheet.name}'")
        return rows

    def encode(self, rows: Sequence[Mapping[str, Any]], sheet_name: str) -> bytes:
        """
        Encode rows under a header row taken from the first row's keys.

        Strings are always stored as text, so a value such as ``"=A1"`` is
        written literally rather than as a formula.
        """
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = sheet_name

        if rows:
            headers = list(rows[0].keys())
            self._append_text_row(sheet, headers)
            for row in rows:
                self._append_text_row(sheet, [row.get(header, "") for header in headers])

        buffer = BytesIO()
        workbook.save(buffer)
        logger.info(f"Encoded {len(rows)} rows into sheet '{sheet_name}'")
        return buffer.getvalue()

    @staticmethod
    def _append_text_row(sheet, values: Iterable[Any]) -> None:
        values = [_cell_text(value) for value in values]
        sheet.append(values)
        for cell, value in zip(sheet[sheet.max_row], values):
            if isinstance(value, str):
                cell.data_type = "s"
