"""
Import file parsers.

Each parser turns a file into an ordered list of header -> raw value rows.
"""

from .base_parser import RowSourceParser, Row
from .csv_parser import CsvParser
from .excel_parser import ExcelParser, HAS_OPENPYXL
from .json_parser import load_bulk_records, parse_json_payload
from .parser_factory import RowSourceFactory

__all__ = [
    "RowSourceParser",
    "Row",
    "CsvParser",
    "ExcelParser",
    "HAS_OPENPYXL",
    "load_bulk_records",
    "parse_json_payload",
    "RowSourceFactory",
]
