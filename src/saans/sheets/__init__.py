"""Spreadsheet encoding and decoding."""

from .base import SpreadsheetCodec
from .excel import ExcelCodec

__all__ = ["SpreadsheetCodec", "ExcelCodec"]
