"""JSON payload and bulk file parsing."""
import json
from pathlib import Path
from typing import Any, Dict, List

from ns_fetch.errors import ParseError


def parse_json_payload(text: str, label: str = "--data") -> Dict[str, Any]:
    """Parse a single JSON object given on the command line."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {label}: {e}") from e

    if not isinstance(payload, dict):
        raise ParseError(f"{label} must be a JSON object")
    return payload


def load_bulk_records(file_path: str) -> List[Dict[str, Any]]:
    """
    Load records from a bulk JSON file.

    The file holds either an array of objects or a single object, which is
    treated as a one-record batch.
    """
    try:
        with open(Path(file_path), "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ParseError(f"Could not read bulk file {file_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in bulk file {file_path}: {e}") from e

    records = data if isinstance(data, list) else [data]

    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ParseError(
                f"Bulk file {file_path}: record {index} is "
                f"{type(record).__name__}, expected an object"
            )

    return records
