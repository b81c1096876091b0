"""
Catalog Bootstrap
=================
Populates a TableRegistry from a plain-text schema file at startup.

File format, one table per line:

    tablename (field1 type1 [pk], field2 type2, ...)

Types are `int` or `string` (case-insensitive). The optional third token
of a field must be exactly `pk` and marks the table's primary key; if
several fields carry it, the last one wins. Blank lines are skipped.

Each table's data lives in `<dir of schema file>/<tablename>.dat`.

A broken schema file leaves the engine unusable, so loading fails fast:
the first bad line or I/O error prints a diagnostic and exits the
process. parse_table_line() raises BootstrapParseError instead, for
callers that want to validate a line themselves.
"""

import os
import sys
from dataclasses import dataclass
from typing import Callable, List

from catalog.registry import CatalogError, TableRegistry
from storage.heap_file import DATA_FILE_SUFFIX, HeapFile, StorageHandle
from storage.schema import SchemaDescriptor
from storage.types import type_from_string

PRIMARY_KEY_ANNOTATION = "pk"


class BootstrapParseError(CatalogError):
    def __init__(self, message: str, line: str = ""):
        super().__init__(message)
        self.line = line


@dataclass(frozen=True)
class TableDefinition:
    """One parsed line of the schema file."""
    name: str
    schema: SchemaDescriptor
    primary_key: str = ""


HandleFactory = Callable[[str, SchemaDescriptor], StorageHandle]


def parse_table_line(line: str) -> TableDefinition:
    """Parse `name (field type [pk], ...)`. Raises BootstrapParseError."""
    open_paren = line.find("(")
    close_paren = line.find(")")
    if open_paren < 0 or close_paren < open_paren:
        raise BootstrapParseError(f"Invalid catalog entry : {line}", line)

    name = line[:open_paren].strip()
    if not name:
        raise BootstrapParseError(f"Invalid catalog entry : {line}", line)

    names: List[str] = []
    types = []
    primary_key = ""
    for entry in line[open_paren + 1:close_paren].split(","):
        tokens = entry.split()
        if len(tokens) not in (2, 3):
            raise BootstrapParseError(f"Invalid catalog entry : {line}", line)

        field_name, type_name = tokens[0], tokens[1]
        try:
            field_type = type_from_string(type_name)
        except ValueError:
            raise BootstrapParseError(f"Unknown type {type_name}", line)

        if len(tokens) == 3:
            if tokens[2] != PRIMARY_KEY_ANNOTATION:
                raise BootstrapParseError(f"Unknown annotation {tokens[2]}", line)
            primary_key = field_name

        names.append(field_name)
        types.append(field_type)

    return TableDefinition(name, SchemaDescriptor(types, names), primary_key)


def load_schema(registry: TableRegistry, catalog_file: str,
                handle_factory: HandleFactory = HeapFile,
                verbose: bool = True) -> List[str]:
    """
    Read `catalog_file` and register every table it defines.
    Returns the table names in file order. Exits the process on any error.
    """
    base_dir = os.path.dirname(os.path.abspath(catalog_file))
    loaded: List[str] = []
    try:
        with open(catalog_file, "r", encoding="utf-8") as f:
            for raw in f:
                line = raw.strip()
                if not line:
                    continue
                table = parse_table_line(line)
                data_path = os.path.join(base_dir, table.name + DATA_FILE_SUFFIX)
                handle = handle_factory(data_path, table.schema)
                registry.add_table(handle, table.name, table.primary_key)
                loaded.append(table.name)
                if verbose:
                    print(f"[Bootstrap] Added table : {table.name} "
                          f"with schema {table.schema}")
    except BootstrapParseError as e:
        print(f"[Bootstrap] {e}", file=sys.stderr)
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as e:
        print(f"[Bootstrap] Cannot read catalog file '{catalog_file}': {e}",
              file=sys.stderr)
        sys.exit(1)
    return loaded
