"""
MiniDB Schema Descriptor
========================
Describes the layout of a table's rows: an ordered, immutable list of
typed fields, each with an optional name.

Equality and hashing look only at the sequence of field types. Two
schemas with the same types in the same order describe the same row
layout, whatever their fields are called.
"""

from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from storage.types import FieldType


class SchemaError(ValueError):
    """Raised when a schema is constructed from invalid field arrays."""


class FieldNotFoundError(KeyError):
    """Raised when a field index or name does not exist in a schema."""


@dataclass(frozen=True)
class FieldDescriptor:
    """A single field: its type and (possibly None) name."""
    field_type: FieldType
    name: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.field_type}({self.name})"


class SchemaDescriptor:
    """
    Table schema — a non-empty ordered sequence of field descriptors.
    Instances are immutable; replace them wholesale instead of mutating.
    """

    __slots__ = ("_fields",)

    def __init__(self, types: Sequence[FieldType],
                 names: Optional[Sequence[Optional[str]]] = None):
        if types is None or len(types) == 0:
            raise SchemaError("A schema must contain at least one field")
        if names is None:
            names = [None] * len(types)
        elif len(names) != len(types):
            raise SchemaError(
                f"Got {len(types)} field types but {len(names)} field names")
        self._fields = tuple(
            FieldDescriptor(t, n) for t, n in zip(types, names))

    @classmethod
    def from_fields(cls, fields: Sequence[FieldDescriptor]) -> "SchemaDescriptor":
        return cls([f.field_type for f in fields], [f.name for f in fields])

    # ─── Field access ───────────────────────────────────────────────

    def num_fields(self) -> int:
        return len(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields)

    def _field(self, i: int) -> FieldDescriptor:
        if not isinstance(i, int) or i < 0 or i >= len(self._fields):
            raise FieldNotFoundError(
                f"Field index {i} out of range for schema with "
                f"{len(self._fields)} fields")
        return self._fields[i]

    def field_name(self, i: int) -> Optional[str]:
        """Name of the i-th field (may be None). Raises FieldNotFoundError."""
        return self._field(i).name

    def field_type(self, i: int) -> FieldType:
        """Type of the i-th field. Raises FieldNotFoundError."""
        return self._field(i).field_type

    def field_name_to_index(self, name: Optional[str]) -> int:
        """
        Index of the first field called `name`.
        Raises FieldNotFoundError if name is None or no field matches.
        """
        if name is None:
            raise FieldNotFoundError("Cannot look up a field without a name")
        for i, f in enumerate(self._fields):
            if f.name == name:
                return i
        raise FieldNotFoundError(f"Field '{name}' not found in schema. "
                                 f"Available: {self.field_names()}")

    def field_names(self) -> list[Optional[str]]:
        return [f.name for f in self._fields]

    def field_types(self) -> list[FieldType]:
        return [f.field_type for f in self._fields]

    def size(self) -> int:
        """Size in bytes of a row with this schema."""
        return sum(f.field_type.length for f in self._fields)

    # ─── Combination ────────────────────────────────────────────────

    @staticmethod
    def merge(first: Optional["SchemaDescriptor"],
              second: Optional["SchemaDescriptor"]) -> "SchemaDescriptor":
        """
        New schema with first's fields followed by second's.
        A None operand contributes no fields.
        """
        fields: list[FieldDescriptor] = []
        for schema in (first, second):
            if schema is not None:
                fields.extend(schema)
        return SchemaDescriptor.from_fields(fields)

    # ─── Comparison ─────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, SchemaDescriptor):
            return NotImplemented
        return self.field_types() == other.field_types()

    def __hash__(self) -> int:
        return hash(tuple(self.field_types()))

    def __str__(self) -> str:
        return ", ".join(str(f) for f in self._fields)

    def __repr__(self) -> str:
        return f"SchemaDescriptor({self})"
