"""
Header-to-field mapping for tabular imports.
"""

from .field_resolver import FieldResolver, header_to_field_id
from .mapping import ImportMaps, FieldMap, ValueMap

__all__ = [
    "FieldResolver",
    "header_to_field_id",
    "ImportMaps",
    "FieldMap",
    "ValueMap",
]
