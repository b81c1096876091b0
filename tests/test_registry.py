"""
MiniDB Table Registry Tests
===========================
  ✔ add / lookup by name and by id
  ✔ re-adding a name replaces its handle and releases the old id
  ✔ a new name colliding on id evicts the previous owner
  ✔ a re-added name colliding on id leaves the other table name-reachable
  ✔ optional lookups return None, required lookups raise
  ✔ clear() and id snapshots
"""

import os
import sys
from dataclasses import dataclass

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catalog.registry import (
    TableRegistry, TableEntry, CatalogError, TableNotFoundError,
    InvalidTableNameError,
)
from storage.heap_file import HeapFile, StorageHandle
from storage.schema import SchemaDescriptor
from storage.types import INT_TYPE, STRING_TYPE


@dataclass
class FakeHandle:
    """Storage handle with a caller-chosen id."""
    id: int
    schema: SchemaDescriptor


@pytest.fixture
def registry():
    return TableRegistry()


@pytest.fixture
def schema_a():
    return SchemaDescriptor([INT_TYPE], ["a"])


@pytest.fixture
def schema_b():
    return SchemaDescriptor([STRING_TYPE, INT_TYPE], ["b", "c"])


# ═══════════════════════════════════════════════════════════════════════════
# 1. Basic registration
# ═══════════════════════════════════════════════════════════════════════════

class TestAddAndLookup:

    def test_add_then_get_id(self, registry, schema_a):
        h = FakeHandle(7, schema_a)
        registry.add_table(h, "users")
        assert registry.get_table_id("users") == 7

    def test_lookups_by_id(self, registry, schema_a):
        h = FakeHandle(7, schema_a)
        registry.add_table(h, "users", "a")
        assert registry.get_schema(7) == schema_a
        assert registry.get_storage_handle(7) is h
        assert registry.get_table_name(7) == "users"
        assert registry.get_primary_key(7) == "a"

    def test_primary_key_defaults_to_empty(self, registry, schema_a):
        registry.add_table(FakeHandle(1, schema_a), "t")
        assert registry.get_primary_key(1) == ""

    def test_empty_string_is_a_valid_name(self, registry, schema_a):
        registry.add_table(FakeHandle(3, schema_a), "")
        assert registry.get_table_id("") == 3
        assert registry.get_table_name(3) == ""

    def test_none_name_rejected(self, registry, schema_a):
        with pytest.raises(InvalidTableNameError):
            registry.add_table(FakeHandle(1, schema_a), None)
        with pytest.raises(ValueError):
            registry.add_table(FakeHandle(1, schema_a), None)
        assert len(registry) == 0

    def test_unnamed_table_gets_unique_name(self, registry, schema_a):
        n1 = registry.add_unnamed_table(FakeHandle(1, schema_a))
        n2 = registry.add_unnamed_table(FakeHandle(2, schema_a))
        assert n1 != n2
        assert registry.get_table_id(n1) == 1
        assert registry.get_table_id(n2) == 2

    def test_get_entry(self, registry, schema_a):
        h = FakeHandle(5, schema_a)
        registry.add_table(h, "t", "a")
        assert registry.get_entry("t") == TableEntry("t", h, "a")
        assert "t" in registry
        assert registry.has_table("t")
        assert "missing" not in registry

    def test_heap_file_handle(self, registry, schema_a, tmp_path):
        h = HeapFile(str(tmp_path / "users.dat"), schema_a)
        assert isinstance(h, StorageHandle)
        registry.add_table(h, "users")
        assert registry.get_storage_handle(h.id) is h
        assert h.num_pages() == 0


# ═══════════════════════════════════════════════════════════════════════════
# 2. Missing tables
# ═══════════════════════════════════════════════════════════════════════════

class TestMissing:

    def test_unknown_name(self, registry):
        with pytest.raises(TableNotFoundError):
            registry.get_table_id("nope")

    def test_not_found_is_key_error_and_catalog_error(self, registry):
        with pytest.raises(KeyError):
            registry.get_table_id("nope")
        with pytest.raises(CatalogError):
            registry.get_table_id("nope")

    def test_not_found_message(self, registry):
        with pytest.raises(TableNotFoundError) as exc:
            registry.get_schema(42)
        assert str(exc.value) == "Table id '42' not found."

    def test_unknown_id_required_lookups_raise(self, registry):
        with pytest.raises(TableNotFoundError):
            registry.get_schema(42)
        with pytest.raises(TableNotFoundError):
            registry.get_storage_handle(42)

    def test_unknown_id_optional_lookups_return_none(self, registry):
        assert registry.get_table_name(42) is None
        assert registry.get_primary_key(42) is None


# ═══════════════════════════════════════════════════════════════════════════
# 3. Overwrite and collision rules
# ═══════════════════════════════════════════════════════════════════════════

class TestCollisions:

    def test_readd_same_name_new_id(self, registry, schema_a, schema_b):
        registry.add_table(FakeHandle(1, schema_a), "t", "a")
        new = FakeHandle(2, schema_b)
        registry.add_table(new, "t", "c")

        assert registry.get_table_id("t") == 2
        assert registry.get_schema(2) == schema_b
        assert registry.get_primary_key(2) == "c"
        with pytest.raises(TableNotFoundError):
            registry.get_schema(1)
        assert registry.get_table_name(1) is None
        assert list(registry.table_ids()) == [2]

    def test_readd_same_name_same_id(self, registry, schema_a, schema_b):
        registry.add_table(FakeHandle(1, schema_a), "t")
        registry.add_table(FakeHandle(1, schema_b), "t", "b")
        assert registry.get_schema(1) == schema_b
        assert registry.get_primary_key(1) == "b"
        assert len(registry) == 1

    def test_new_name_with_taken_id_evicts_owner(self, registry, schema_a, schema_b):
        registry.add_table(FakeHandle(9, schema_a), "A", "a")
        registry.add_table(FakeHandle(9, schema_b), "B")

        assert registry.get_table_name(9) == "B"
        assert registry.get_schema(9) == schema_b
        assert registry.get_primary_key(9) == ""
        with pytest.raises(TableNotFoundError):
            registry.get_table_id("A")
        assert registry.table_names() == ["B"]

    def test_readded_name_taking_id_leaves_other_reachable_by_name(
            self, registry, schema_a, schema_b):
        registry.add_table(FakeHandle(9, schema_a), "A", "a")
        registry.add_table(FakeHandle(4, schema_b), "B")
        # B already exists, so taking id 9 evicts nothing
        registry.add_table(FakeHandle(9, schema_b), "B", "b")

        assert registry.get_table_name(9) == "B"
        assert registry.get_primary_key(9) == "b"
        assert registry.get_table_id("A") == 9
        assert registry.get_entry("A").primary_key == "a"
        assert registry.get_table_name(4) is None
        assert sorted(registry.table_ids()) == [9, 9]

    def test_id_falls_back_when_owner_moves_away(self, registry, schema_a, schema_b):
        registry.add_table(FakeHandle(9, schema_a), "A")
        registry.add_table(FakeHandle(4, schema_b), "B")
        registry.add_table(FakeHandle(9, schema_b), "B")
        # B leaves id 9; A still carries it
        registry.add_table(FakeHandle(5, schema_b), "B")

        assert registry.get_table_name(9) == "A"
        assert registry.get_schema(9) == schema_a
        assert registry.get_table_name(5) == "B"

    def test_collision_after_readd_evicts_only_owner(self, registry, schema_a, schema_b):
        registry.add_table(FakeHandle(9, schema_a), "A")
        registry.add_table(FakeHandle(4, schema_b), "B")
        registry.add_table(FakeHandle(9, schema_b), "B")
        registry.add_table(FakeHandle(9, schema_a), "C")

        assert registry.table_names() == ["A", "C"]
        assert registry.get_table_name(9) == "C"
        assert registry.get_table_id("A") == 9

    def test_distinct_ids_do_not_interfere(self, registry, schema_a, schema_b):
        registry.add_table(FakeHandle(1, schema_a), "A")
        registry.add_table(FakeHandle(2, schema_b), "B")
        assert registry.get_table_name(1) == "A"
        assert registry.get_table_name(2) == "B"
        assert len(registry) == 2


# ═══════════════════════════════════════════════════════════════════════════
# 4. Enumeration and clear
# ═══════════════════════════════════════════════════════════════════════════

class TestEnumeration:

    def test_table_ids(self, registry, schema_a):
        for i, name in enumerate(["x", "y", "z"]):
            registry.add_table(FakeHandle(i + 10, schema_a), name)
        assert sorted(registry.table_ids()) == [10, 11, 12]

    def test_table_ids_is_snapshot(self, registry, schema_a):
        registry.add_table(FakeHandle(1, schema_a), "x")
        ids = registry.table_ids()
        registry.add_table(FakeHandle(2, schema_a), "y")
        registry.clear()
        assert list(ids) == [1]

    def test_table_ids_single_pass(self, registry, schema_a):
        registry.add_table(FakeHandle(1, schema_a), "x")
        ids = registry.table_ids()
        assert list(ids) == [1]
        assert list(ids) == []

    def test_table_names_sorted(self, registry, schema_a):
        registry.add_table(FakeHandle(1, schema_a), "zeta")
        registry.add_table(FakeHandle(2, schema_a), "alpha")
        assert registry.table_names() == ["alpha", "zeta"]

    def test_clear(self, registry, schema_a):
        names = ["x", "y", "z"]
        for i, name in enumerate(names):
            registry.add_table(FakeHandle(i, schema_a), name)
        registry.clear()

        assert len(registry) == 0
        assert list(registry.table_ids()) == []
        for i, name in enumerate(names):
            with pytest.raises(TableNotFoundError):
                registry.get_table_id(name)
            assert registry.get_table_name(i) is None

    def test_clear_resets_collision_tracking(self, registry, schema_a, schema_b):
        registry.add_table(FakeHandle(1, schema_a), "old")
        registry.clear()
        registry.add_table(FakeHandle(1, schema_b), "new")
        assert registry.get_table_name(1) == "new"
        assert registry.table_names() == ["new"]

    def test_repr(self, registry, schema_a):
        registry.add_table(FakeHandle(1, schema_a), "x")
        assert repr(registry) == "TableRegistry(tables=1, ids=1)"
