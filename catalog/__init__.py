
# MiniDB Catalog Package
# ======================
# Table metadata: the registry of tables and its bootstrap loader.

from catalog.registry import (
    TableRegistry, TableEntry,
    CatalogError, TableNotFoundError, InvalidTableNameError,
)
from catalog.bootstrap import (
    load_schema, parse_table_line, TableDefinition, BootstrapParseError,
)
