"""
Field Builder - Places values into nested payloads by dotted path

Supports:
- Top-level keys ("companyName")
- Dotted paths creating intermediate objects lazily ("subsidiary.id")
- An explicit collision policy when a path crosses an existing value
"""

import logging
from typing import Any, Dict, List

from ns_fetch.errors import PathConflictError

logger = logging.getLogger(__name__)

OVERWRITE = "overwrite"
RAISE = "raise"
CONFLICT_POLICIES = (OVERWRITE, RAISE)


class FieldBuilder:
    """Assigns leaf values into a payload tree"""

    def __init__(self, conflict_policy: str = OVERWRITE):
        """
        Initialize FieldBuilder

        Args:
            conflict_policy: What to do when a path collides with an existing
                value. "overwrite" replaces it (last write wins), "raise"
                raises PathConflictError.
        """
        if conflict_policy not in CONFLICT_POLICIES:
            raise ValueError(
                f"Unknown conflict policy {conflict_policy!r}, "
                f"expected one of {CONFLICT_POLICIES}"
            )
        self.conflict_policy = conflict_policy

    def assign(
        self,
        payload: Dict[str, Any],
        field_id: str,
        value: Any,
        header: str = "",
    ) -> None:
        """
        Set value at field_id inside payload

        Collisions:
            - an intermediate segment holding a non-object value
            - a leaf assignment replacing an existing object

        Under "overwrite" the existing value is replaced; an existing leaf at
        the same final path is always replaced, that is not a collision.

        Args:
            payload: Payload being built, modified in place
            field_id: Field identifier, possibly dotted ("customer.id")
            value: Leaf value
            header: Source header, used in conflict messages
        """
        parts = field_id.split(".")
        node = payload

        for depth, part in enumerate(parts[:-1]):
            child = node.get(part)
            if not isinstance(child, dict):
                if part in node:
                    self._conflict(header, parts[: depth + 1], child)
                child = {}
                node[part] = child
            node = child

        leaf = parts[-1]
        if isinstance(node.get(leaf), dict):
            self._conflict(header, parts, node[leaf])
        node[leaf] = value

    def _conflict(self, header: str, path: List[str], existing: Any) -> None:
        dotted = ".".join(path)
        if self.conflict_policy == RAISE:
            raise PathConflictError(
                header,
                dotted,
                f"Header '{header}' conflicts with existing value at "
                f"'{dotted}' ({type(existing).__name__})",
            )
        logger.debug(f"Header '{header}' overwrites existing value at '{dotted}'")
