"""
MiniDB Field Type System
========================
Defines the fixed-length field types a table schema is built from:
INT and STRING. Each type knows its encoded byte length, which is
what SchemaDescriptor.size() sums over.

Teaching note:
  Every field in a row has a fixed width, so a row's size is known
  from its schema alone. STRING values are padded to a maximum length
  and carry a 4-byte length prefix.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class DataType(Enum):
    """Supported data types in MiniDB."""
    INT = "INT"
    STRING = "STRING"


# ─── Size constants ─────────────────────────────────────────────────────────

INT_LEN = 4          # int32 big-endian
STRING_LEN = 128     # max payload bytes of the default STRING type
STRING_PREFIX_LEN = 4


@dataclass(frozen=True)
class FieldType:
    """
    A concrete field type: a DataType plus its fixed encoded length in bytes.
    Compares and hashes by value.
    """
    data_type: DataType
    length: int

    def __post_init__(self):
        if self.length <= 0:
            raise ValueError(f"Field length must be positive, got {self.length}")

    def validate(self, value: Any) -> bool:
        """Return True if a Python value fits this field type."""
        if value is None:
            return True
        if self.data_type == DataType.INT:
            return isinstance(value, int) and not isinstance(value, bool)
        if self.data_type == DataType.STRING:
            if not isinstance(value, str):
                return False
            return len(value.encode("utf-8")) <= self.length - STRING_PREFIX_LEN
        return False

    def __str__(self) -> str:
        return self.data_type.value


INT_TYPE = FieldType(DataType.INT, INT_LEN)
STRING_TYPE = FieldType(DataType.STRING, STRING_LEN + STRING_PREFIX_LEN)


def string_type(length: int) -> FieldType:
    """A STRING type whose fixed encoded length is `length` bytes."""
    return FieldType(DataType.STRING, length)


def type_from_string(type_str: str) -> FieldType:
    """Convert a name like 'int' or 'STRING' to its default FieldType."""
    normalized = type_str.strip().upper()
    try:
        data_type = DataType(normalized)
    except ValueError:
        raise ValueError(f"Unknown data type: {type_str!r}. "
                         f"Valid types: {[t.value for t in DataType]}")
    return INT_TYPE if data_type == DataType.INT else STRING_TYPE
