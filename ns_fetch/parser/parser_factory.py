"""Factory for creating the row parser matching an import file."""
from typing import List, Optional

from ns_fetch.errors import ParseError
from ns_fetch.parser.base_parser import Row, RowSourceParser
from ns_fetch.parser.csv_parser import CsvParser
from ns_fetch.parser.excel_parser import ExcelParser


class RowSourceFactory:
    """Factory for import file parsers."""

    # Map extensions to parser types
    PARSERS = {
        'csv': 'csv',
        'txt': 'csv',
        'tsv': 'csv',
        'xlsx': 'excel',
        'xlsm': 'excel',
    }

    @staticmethod
    def create_parser(file_path: str, delimiter: Optional[str] = None) -> RowSourceParser:
        """
        Create parser based on file extension.

        Args:
            file_path: Path to import file
            delimiter: CSV delimiter override

        Returns:
            RowSourceParser: Appropriate parser instance

        Raises:
            ParseError: If file format is not supported
        """
        ext = RowSourceParser.detect_format(file_path)
        parser_type = RowSourceFactory.PARSERS.get(ext)

        if parser_type == 'csv':
            if ext == 'tsv' and delimiter is None:
                delimiter = '\t'
            return CsvParser(delimiter=delimiter)
        elif parser_type == 'excel':
            return ExcelParser()

        raise ParseError(f"Unsupported import format: {ext or file_path}")

    @staticmethod
    def read_rows(file_path: str, delimiter: Optional[str] = None) -> List[Row]:
        """
        Convenience method to parse an import file in one call.

        Args:
            file_path: Path to import file
            delimiter: CSV delimiter override

        Returns:
            List[Row]: Parsed rows
        """
        parser = RowSourceFactory.create_parser(file_path, delimiter)
        return parser.parse(file_path)
