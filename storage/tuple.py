"""
MiniDB Tuple
============
A row held in memory: one value slot per schema field plus an optional
record id locating it on disk.
"""

from typing import Any, Iterator

from storage.schema import SchemaDescriptor


class Tuple:
    """Row values bound to a schema. Unset fields are None."""

    def __init__(self, schema: SchemaDescriptor):
        if schema is None or schema.num_fields() < 1:
            raise ValueError("A tuple needs a schema with at least one field")
        self._schema = schema
        self._values: list[Any] = [None] * schema.num_fields()
        self.record_id: Any = None

    @property
    def schema(self) -> SchemaDescriptor:
        return self._schema

    def _check_index(self, i: int) -> None:
        if i < 0 or i >= len(self._values):
            raise IndexError(f"Field index {i} out of range "
                             f"(tuple has {len(self._values)} fields)")

    def set_field(self, i: int, value: Any) -> None:
        """Set the i-th value. The value must fit the field's type."""
        self._check_index(i)
        field_type = self._schema.field_type(i)
        if not field_type.validate(value):
            raise TypeError(f"Value {value!r} does not fit field {i} "
                            f"of type {field_type}")
        self._values[i] = value

    def get_field(self, i: int) -> Any:
        self._check_index(i)
        return self._values[i]

    def fields(self) -> Iterator[Any]:
        return iter(self._values)

    def reset_schema(self, schema: SchemaDescriptor) -> None:
        """Rebind to another schema. Values are left as they are."""
        self._schema = schema

    def __str__(self) -> str:
        return " ".join(str(v) for v in self._values)

    def __repr__(self) -> str:
        return f"Tuple({self._values!r}, rid={self.record_id!r})"
