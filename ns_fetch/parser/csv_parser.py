"""CSV file parser with auto-delimiter detection."""
import csv
import logging
from io import StringIO
from typing import List, Optional

from ns_fetch.errors import ParseError
from ns_fetch.parser.base_parser import Row, RowSourceParser

logger = logging.getLogger(__name__)


class CsvParser(RowSourceParser):
    """Parse CSV files into rows keyed by the header line."""

    # Common delimiters
    DELIMITERS = [',', ';', '|', '\t']

    def __init__(self, delimiter: Optional[str] = None, encoding: str = "utf-8-sig"):
        """
        Initialize parser.

        Args:
            delimiter: Field delimiter. Detected from content when None.
            encoding: File encoding (default strips a UTF-8 BOM)
        """
        self.delimiter = delimiter
        self.encoding = encoding

    def parse(self, file_path: str) -> List[Row]:
        """Read a CSV file into rows."""
        try:
            with open(file_path, 'r', encoding=self.encoding, newline='') as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise ParseError(f"Could not read CSV file {file_path}: {e}") from e

        return self.parse_text(content, source=file_path)

    def parse_text(self, content: str, source: str = "<text>") -> List[Row]:
        """
        Parse CSV content.

        The first line holds the headers. Blank lines are skipped; a data line
        with a different number of fields than the header is an error.

        Args:
            content: CSV content as string
            source: Name used in error messages

        Returns:
            List[Row]: Rows with string values
        """
        delimiter = self.delimiter or self._detect_delimiter(content)

        try:
            lines = [line for line in csv.reader(StringIO(content), delimiter=delimiter) if line]
        except csv.Error as e:
            raise ParseError(f"Malformed CSV in {source}: {e}") from e

        if not lines:
            return []

        headers = [h.strip() for h in lines[0]]
        rows = []

        # Line numbers are approximate when quoted fields span lines
        for line_no, values in enumerate(lines[1:], start=2):
            if len(values) != len(headers):
                raise ParseError(
                    f"Malformed CSV in {source}: record {line_no} has "
                    f"{len(values)} fields, header has {len(headers)}"
                )
            rows.append(dict(zip(headers, values)))

        logger.debug(f"Parsed {len(rows)} rows from {source} (delimiter {delimiter!r})")
        return rows

    def _detect_delimiter(self, content: str) -> str:
        """
        Auto-detect CSV delimiter from the header line.

        Returns:
            str: Most likely delimiter
        """
        sample = content.split('\n', 1)[0]

        counts = {}
        for delimiter in self.DELIMITERS:
            counts[delimiter] = sample.count(delimiter)

        best_delimiter = max(counts, key=counts.get)

        # Fallback to comma if no clear winner
        if counts[best_delimiter] == 0:
            return ','

        return best_delimiter
