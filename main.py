"""
MiniDB Catalog — Table Metadata Loader
======================================
Entry point for inspecting a bootstrap schema file.

Usage:
    python main.py [options] schema_file

Options:
    --help              Show help
    --quiet             Do not print bootstrap progress lines

Loads the schema file into a fresh table registry and lists every
registered table with its id, schema and primary key.
"""

import sys

from catalog.registry import TableRegistry


def print_help():
    print("""
MiniDB Catalog — Table Metadata Loader

Usage:
    python main.py schema_file                Load and list tables
    python main.py --quiet schema_file        Same, without progress lines

Options:
    --help          Show this help
    --quiet         Suppress [Bootstrap] progress output
    schema_file     Text file, one table per line:
                        name (field type [pk], field type, ...)
""")


def list_tables(registry: TableRegistry) -> None:
    """Print one tab-separated line per registered table."""
    for name in registry.table_names():
        entry = registry.get_entry(name)
        print(f"{entry.table_id}\t{name}\t{entry.schema}\tpk={entry.primary_key}")


def main(argv=None) -> None:
    """Parse CLI arguments and dispatch."""
    args = sys.argv[1:] if argv is None else argv

    if "--help" in args or "-h" in args:
        print_help()
        return

    verbose = True
    schema_file = None

    for arg in args:
        if arg == "--quiet":
            verbose = False
        elif arg.startswith("-"):
            print(f"Unknown option: {arg}", file=sys.stderr)
            print_help()
            sys.exit(1)
        else:
            schema_file = arg

    if schema_file is None:
        print("Error: no schema file given", file=sys.stderr)
        print_help()
        sys.exit(1)

    registry = TableRegistry()
    registry.load_schema(schema_file, verbose=verbose)
    list_tables(registry)


if __name__ == "__main__":
    main()
