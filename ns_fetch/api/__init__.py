"""
SuiteTalk REST API access: record URLs, signed transport and dispatch.
"""

from .endpoint_mapper import RecordTypeMapper
from .netsuite_client import NetSuiteClient
from .dispatcher import Dispatcher, SUPPORTED_METHODS

__all__ = [
    "RecordTypeMapper",
    "NetSuiteClient",
    "Dispatcher",
    "SUPPORTED_METHODS",
]
