"""Excel file parser reading the first worksheet."""
import logging
from datetime import date, datetime, time
from typing import List, Optional

try:
    from openpyxl import load_workbook
    HAS_OPENPYXL = True
except ImportError:
    HAS_OPENPYXL = False

from ns_fetch.errors import ParseError
from ns_fetch.parser.base_parser import Row, RowSourceParser

logger = logging.getLogger(__name__)


def cell_value(value):
    """Return a JSON-ready cell value, dates and times as ISO 8601 text."""
    if isinstance(value, datetime):
        if value.time() == time.min:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    return value


class ExcelParser(RowSourceParser):
    """Parse Excel workbooks into rows keyed by the first row."""

    def __init__(self, sheet_name: Optional[str] = None):
        """
        Initialize parser.

        Args:
            sheet_name: Worksheet to read. Defaults to the first sheet.
        """
        self.sheet_name = sheet_name

    def parse(self, file_path: str) -> List[Row]:
        """
        Parse an Excel file into rows.

        Empty cells are left out of their row and rows without any value are
        skipped. Numbers and booleans keep their spreadsheet types, dates and
        times become ISO 8601 strings (midnight datetimes as plain dates).

        Raises:
            ParseError: If parsing fails or openpyxl is not installed
        """
        if not HAS_OPENPYXL:
            raise ParseError(
                "openpyxl is required for Excel import. "
                "Install with: pip install openpyxl"
            )

        try:
            wb = load_workbook(file_path, read_only=True, data_only=True)
        except Exception as e:
            raise ParseError(f"Failed to parse Excel file {file_path}: {e}") from e

        try:
            if self.sheet_name:
                if self.sheet_name not in wb.sheetnames:
                    raise ParseError(f"Sheet '{self.sheet_name}' not found in {file_path}")
                ws = wb[self.sheet_name]
            else:
                ws = wb.worksheets[0]

            rows_iter = ws.iter_rows(values_only=True)
            header_row = next(rows_iter, None)
            if header_row is None:
                return []

            headers = []
            for cell in header_row:
                headers.append(str(cell).strip() if cell is not None else f"Column_{len(headers)}")

            rows = []
            for values in rows_iter:
                row = {
                    header: cell_value(value)
                    for header, value in zip(headers, values)
                    if value is not None and value != ""
                }
                if row:
                    rows.append(row)
        finally:
            wb.close()

        logger.debug(f"Parsed {len(rows)} rows from {file_path}")
        return rows
