"""
Payload Builder Module

Builds nested NetSuite record payloads from tabular import rows with:
- Header -> field identifier inference
- Explicit field maps and value substitution maps
- Dotted-path nesting with an explicit collision policy
"""

from .payload_builder import RowTransformer, PayloadConfig, value_key
from .field_builder import FieldBuilder

__all__ = [
    "RowTransformer",
    "PayloadConfig",
    "FieldBuilder",
    "value_key",
]
