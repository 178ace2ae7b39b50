"""Abstract base class for import row sources."""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List

Row = Dict[str, Any]


class RowSourceParser(ABC):
    """Abstract base class for tabular import parsers."""

    @abstractmethod
    def parse(self, file_path: str) -> List[Row]:
        """
        Parse a file into rows.

        Args:
            file_path: Path to the import file

        Returns:
            List[Row]: One header -> raw value mapping per record, in file order

        Raises:
            ParseError: If parsing fails
        """
        pass

    @staticmethod
    def detect_format(file_path: str) -> str:
        """Detect file format from extension."""
        return Path(file_path).suffix.lower().lstrip('.')
