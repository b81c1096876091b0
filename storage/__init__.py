"""
MiniDB Storage Layer
====================
Public API for the pieces of storage the catalog depends on.

Usage:
    from storage import INT_TYPE, STRING_TYPE, SchemaDescriptor, HeapFile
"""

from storage.types import (
    DataType, FieldType, INT_TYPE, STRING_TYPE, INT_LEN, STRING_LEN,
    string_type, type_from_string,
)
from storage.schema import (
    FieldDescriptor, SchemaDescriptor, SchemaError, FieldNotFoundError,
)
from storage.heap_file import HeapFile, StorageHandle, PAGE_SIZE
from storage.tuple import Tuple

__all__ = [
    "DataType", "FieldType", "INT_TYPE", "STRING_TYPE", "INT_LEN", "STRING_LEN",
    "string_type", "type_from_string",
    "FieldDescriptor", "SchemaDescriptor", "SchemaError", "FieldNotFoundError",
    "HeapFile", "StorageHandle", "PAGE_SIZE",
    "Tuple",
]
