"""JSON exporter."""
import json
from pathlib import Path
from typing import Any, Optional

import click


class JsonExporter:
    """Write command results as pretty-printed JSON."""

    def __init__(self, output_file: Optional[Path] = None):
        """
        Initialize exporter.

        Args:
            output_file: File to write instead of stdout
        """
        self.output_file = Path(output_file) if output_file else None

    @staticmethod
    def dumps(data: Any) -> str:
        return json.dumps(data, indent=2, default=str, ensure_ascii=False)

    def export(self, data: Any) -> None:
        """Write data to the output file, or stdout when none was set."""
        text = self.dumps(data)

        if self.output_file is None:
            click.echo(text)
            return

        self.output_file.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_file, "w", encoding="utf-8") as f:
            f.write(text + "\n")
