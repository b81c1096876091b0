"""
MiniDB Table Registry
=====================
In-memory catalog of every table the engine knows about. Binds each
table name to its storage handle, schema, and primary key, and keeps a
derived id → name index so the storage and query layers can resolve
tables by handle id.

Indexing rules:
  - Names are unique. Adding an existing name replaces its entry.
  - The id index holds at most one name per id. Adding a NEW name whose
    handle id already belongs to another table evicts that other table.
  - Re-adding an existing name never evicts anything. Another entry may
    therefore keep sharing the id, reachable by name only, until the
    re-added name moves to a different id; then the id index falls back
    to that remaining entry.

Thread safety: both indexes are guarded by a single re-entrant lock.
Every read and every mutation holds it, and table_ids() copies a
snapshot before returning.
"""

import threading
import uuid
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from storage.heap_file import StorageHandle
from storage.schema import SchemaDescriptor


class CatalogError(Exception):
    pass


class TableNotFoundError(CatalogError, KeyError):
    def __init__(self, key, context: str = "Table"):
        super().__init__(f"{context} '{key}' not found.")
        self.key = key

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class InvalidTableNameError(CatalogError, ValueError):
    pass


@dataclass(frozen=True)
class TableEntry:
    """A registered table. primary_key is "" when the table has none."""
    name: str
    handle: StorageHandle
    primary_key: str = ""

    @property
    def table_id(self) -> int:
        return self.handle.id

    @property
    def schema(self) -> SchemaDescriptor:
        return self.handle.schema


class TableRegistry:
    """
    Registry of tables, indexed by name and by storage-handle id.
    Created empty; populated by add_table() or the bootstrap loader.
    """

    def __init__(self):
        self._tables: Dict[str, TableEntry] = {}
        self._names_by_id: Dict[int, str] = {}
        self._lock = threading.RLock()

    # ─── Registration ───────────────────────────────────────────────

    def add_table(self, handle: StorageHandle, name: str,
                  primary_key: str = "") -> None:
        """
        Register `handle` under `name`, replacing any table of that name.
        The empty string is a valid name; None is not.
        """
        if name is None:
            raise InvalidTableNameError("Table name must not be None")
        if primary_key is None:
            primary_key = ""

        table_id = handle.id
        with self._lock:
            existing = self._tables.get(name)
            if existing is None:
                owner = self._names_by_id.get(table_id)
                if owner is not None and owner != name:
                    del self._tables[owner]
            elif existing.table_id != table_id:
                self._release_id(existing.table_id, name)

            self._tables[name] = TableEntry(name, handle, primary_key)
            self._names_by_id[table_id] = name

    def add_unnamed_table(self, handle: StorageHandle) -> str:
        """Register `handle` under a freshly generated name and return it."""
        name = str(uuid.uuid4())
        self.add_table(handle, name)
        return name

    def _release_id(self, table_id: int, name: str) -> None:
        # Caller holds the lock. `name` is about to stop carrying table_id.
        if self._names_by_id.get(table_id) != name:
            return
        for other in self._tables.values():
            if other.name != name and other.table_id == table_id:
                self._names_by_id[table_id] = other.name
                return
        del self._names_by_id[table_id]

    def clear(self) -> None:
        """Remove every table."""
        with self._lock:
            self._tables.clear()
            self._names_by_id.clear()

    # ─── Lookup by name ─────────────────────────────────────────────

    def get_table_id(self, name: str) -> int:
        """Handle id of the named table. Raises TableNotFoundError."""
        return self.get_entry(name).table_id

    def get_entry(self, name: str) -> TableEntry:
        with self._lock:
            entry = self._tables.get(name)
        if entry is None:
            raise TableNotFoundError(name)
        return entry

    def has_table(self, name: str) -> bool:
        with self._lock:
            return name in self._tables

    def __contains__(self, name) -> bool:
        return self.has_table(name)

    # ─── Lookup by id ───────────────────────────────────────────────

    def _entry_by_id(self, table_id: int) -> Optional[TableEntry]:
        with self._lock:
            name = self._names_by_id.get(table_id)
            if name is None:
                return None
            return self._tables.get(name)

    def _require_by_id(self, table_id: int) -> TableEntry:
        entry = self._entry_by_id(table_id)
        if entry is None:
            raise TableNotFoundError(table_id, "Table id")
        return entry

    def get_schema(self, table_id: int) -> SchemaDescriptor:
        """Schema of the table with this id. Raises TableNotFoundError."""
        return self._require_by_id(table_id).schema

    def get_storage_handle(self, table_id: int) -> StorageHandle:
        """Storage handle of the table with this id. Raises TableNotFoundError."""
        return self._require_by_id(table_id).handle

    def get_table_name(self, table_id: int) -> Optional[str]:
        """Name of the table with this id, or None."""
        entry = self._entry_by_id(table_id)
        return entry.name if entry is not None else None

    def get_primary_key(self, table_id: int) -> Optional[str]:
        """
        Primary key field of the table with this id.
        Returns "" for a table without a key and None if no table has the id.
        """
        entry = self._entry_by_id(table_id)
        return entry.primary_key if entry is not None else None

    # ─── Enumeration ────────────────────────────────────────────────

    def table_ids(self) -> Iterator[int]:
        """
        Iterator over the ids of all registered tables, copied at call time.
        Order is implementation-defined.
        """
        with self._lock:
            snapshot = [entry.table_id for entry in self._tables.values()]
        return iter(snapshot)

    def table_names(self) -> List[str]:
        """All table names (sorted, deterministic)."""
        with self._lock:
            return sorted(self._tables.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._tables)

    # ─── Bootstrap ──────────────────────────────────────────────────

    def load_schema(self, catalog_file: str, verbose: bool = True) -> List[str]:
        """Populate the registry from a bootstrap schema file. Exits on error."""
        from catalog.bootstrap import load_schema
        return load_schema(self, catalog_file, verbose=verbose)

    def __repr__(self) -> str:
        with self._lock:
            return (f"TableRegistry(tables={len(self._tables)}, "
                    f"ids={len(self._names_by_id)})")
