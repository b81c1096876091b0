"""
MiniDB Heap File Handle
=======================
The storage handle the catalog hands out for each table: a reference to
the table's data file plus the schema its rows follow.

Page I/O lives in the storage engine proper; this handle only carries
identity. The id is a CRC32 of the absolute file path, so it is stable
across restarts and two handles over the same file share an id.
"""

import os
import zlib
from typing import Protocol, runtime_checkable

from storage.schema import SchemaDescriptor


PAGE_SIZE = 4096           # 4KB fixed page size
DATA_FILE_SUFFIX = ".dat"


@runtime_checkable
class StorageHandle(Protocol):
    """What the catalog needs from a table's storage: an id and a schema."""

    @property
    def id(self) -> int: ...

    @property
    def schema(self) -> SchemaDescriptor: ...


class HeapFile:
    """Handle over a single table's heap file."""

    def __init__(self, file_path: str, schema: SchemaDescriptor):
        self._file_path = os.path.abspath(file_path)
        self._schema = schema
        # Masked to 31 bits so ids stay non-negative
        self._id = zlib.crc32(self._file_path.encode("utf-8")) & 0x7FFFFFFF

    @property
    def id(self) -> int:
        return self._id

    @property
    def schema(self) -> SchemaDescriptor:
        return self._schema

    @property
    def file_path(self) -> str:
        return self._file_path

    def num_pages(self) -> int:
        """Number of whole pages currently on disk (0 if the file is missing)."""
        try:
            return os.path.getsize(self._file_path) // PAGE_SIZE
        except FileNotFoundError:
            return 0

    def __repr__(self) -> str:
        return f"HeapFile(id={self._id}, file='{self._file_path}')"
