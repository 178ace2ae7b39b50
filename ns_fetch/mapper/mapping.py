"""Field map and value map loading for imports."""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ns_fetch.errors import ParseError

logger = logging.getLogger(__name__)

FieldMap = Dict[str, str]
ValueMap = Dict[str, Dict[str, Any]]


@dataclass
class ImportMaps:
    """User-supplied overrides for field naming and value substitution."""

    field_map: FieldMap = field(default_factory=dict)
    value_map: ValueMap = field(default_factory=dict)

    @classmethod
    def from_files(
        cls,
        map_file: Optional[str] = None,
        value_map_file: Optional[str] = None,
    ) -> "ImportMaps":
        """
        Load maps from JSON files.

        Args:
            map_file: JSON object of header -> field identifier
            value_map_file: JSON object of header -> {raw value -> new value}

        Returns:
            ImportMaps: Loaded maps (empty where no file was given)

        Raises:
            ParseError: If a file is unreadable or has the wrong shape
        """
        field_map = load_json_object(map_file, "map file") if map_file else {}
        value_map = load_json_object(value_map_file, "value map file") if value_map_file else {}

        for header, values in value_map.items():
            if not isinstance(values, dict):
                raise ParseError(
                    f"Value map entry for '{header}' must be an object of "
                    f"raw value -> replacement, got {type(values).__name__}"
                )

        logger.debug(
            f"Loaded {len(field_map)} field mappings and "
            f"{len(value_map)} value mappings"
        )
        return cls(field_map=field_map, value_map=value_map)


def load_json_object(path: str, label: str) -> Dict[str, Any]:
    """Read a file that must hold a single JSON object."""
    try:
        with open(Path(path), "r", encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise ParseError(f"Could not read {label} {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ParseError(f"Invalid JSON in {label} {path}: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"{label.capitalize()} {path} must contain a JSON object")

    return data
