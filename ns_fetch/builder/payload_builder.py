"""
Payload Builder - Turns tabular import rows into NetSuite record payloads

Integrates:
- FieldResolver: default field identifier for each header
- Field map: explicit header -> field identifier overrides
- Value map: per-header raw value substitution
- FieldBuilder: nested placement of dotted field identifiers
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ns_fetch.builder.field_builder import FieldBuilder, OVERWRITE
from ns_fetch.mapper.field_resolver import FieldResolver
from ns_fetch.mapper.mapping import FieldMap, ImportMaps, ValueMap

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]
Payload = Dict[str, Any]


def value_key(value: Any) -> str:
    """
    String form of a raw value, as used for value map lookups

    Follows JSON object key conventions so map files written by hand match
    what the parsers produce: None -> "null", True -> "true", 3.0 -> "3".
    """
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


@dataclass
class PayloadConfig:
    """Configuration for row transformation"""
    field_map: FieldMap = field(default_factory=dict)
    value_map: ValueMap = field(default_factory=dict)
    conflict_policy: str = OVERWRITE
    preserve_dots: bool = True

    @classmethod
    def from_maps(cls, maps: ImportMaps, **kwargs) -> "PayloadConfig":
        return cls(field_map=maps.field_map, value_map=maps.value_map, **kwargs)


class RowTransformer:
    """
    Builds nested payloads from import rows

    Usage:
    ```python
    transformer = RowTransformer()
    payload = transformer.transform(
        {"Company Name": "Acme", "subsidiary.id": "1", "Status": "A"},
        value_map={"Status": {"A": "CUSTOMER-Closed Won"}},
    )
    # {"companyName": "Acme", "subsidiary": {"id": "1"},
    #  "status": "CUSTOMER-Closed Won"}
    ```
    """

    def __init__(self, config: Optional[PayloadConfig] = None):
        """
        Initialize RowTransformer

        Args:
            config: Default maps and policies, used when transform() is
                called without explicit maps
        """
        self.config = config or PayloadConfig()
        self.resolver = FieldResolver(preserve_dots=self.config.preserve_dots)
        self.field_builder = FieldBuilder(self.config.conflict_policy)

    def transform(
        self,
        row: Row,
        field_map: Optional[FieldMap] = None,
        value_map: Optional[ValueMap] = None,
    ) -> Payload:
        """
        Build a payload from one row

        Headers are processed in row order, so a later header mapping to the
        same final path overwrites an earlier one.

        Args:
            row: Header -> raw value
            field_map: Header -> field identifier (defaults to config)
            value_map: Header -> {raw value string -> replacement} (defaults to config)

        Returns:
            Payload dictionary ready for API POST
        """
        field_map = self.config.field_map if field_map is None else field_map
        value_map = self.config.value_map if value_map is None else value_map

        payload: Payload = {}

        for header, raw_value in row.items():
            value = self.substitute(header, raw_value, value_map)
            field_id = self.field_id(header, field_map)

            if not field_id:
                logger.warning(f"Skipping header '{header}': no usable field identifier")
                continue

            self.field_builder.assign(payload, field_id, value, header=header)

        return payload

    def transform_rows(
        self,
        rows: List[Row],
        field_map: Optional[FieldMap] = None,
        value_map: Optional[ValueMap] = None,
    ) -> List[Payload]:
        """Build payloads for multiple rows, preserving order"""
        payloads = [self.transform(row, field_map, value_map) for row in rows]
        logger.info(f"Built {len(payloads)} payloads from {len(rows)} rows")
        return payloads

    def field_id(self, header: str, field_map: Optional[FieldMap]) -> str:
        """Explicit mapping when present and non-empty, else the derived identifier"""
        if field_map and field_map.get(header):
            return field_map[header]
        return self.resolver.resolve(header)

    @staticmethod
    def substitute(header: str, raw_value: Any, value_map: Optional[ValueMap]) -> Any:
        """Apply the value map for header, if it has an entry for raw_value"""
        if not value_map or header not in value_map:
            return raw_value

        substitutions = value_map[header] or {}
        key = value_key(raw_value)
        if key in substitutions:
            return substitutions[key]
        return raw_value
