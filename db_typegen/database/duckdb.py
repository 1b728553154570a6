"""DuckDB dialect."""

from typing import Any, List

from .base import Dialect, DialectKind, strip_driver
from .models import CatalogRow
from .type_mappers import DuckDBTypeMapper

CATALOG_QUERY = """
    SELECT
        t.table_schema,
        t.table_name,
        c.column_name,
        c.data_type,
        c.is_nullable,
        c.column_default
    FROM information_schema.tables t
    LEFT JOIN information_schema.columns c
      ON c.table_catalog = t.table_catalog
     AND c.table_schema = t.table_schema
     AND c.table_name = t.table_name
    WHERE t.table_catalog = current_database()
      AND t.table_schema NOT IN ('information_schema', 'pg_catalog')
      AND t.table_type IN ('BASE TABLE', 'VIEW')
    ORDER BY t.table_schema, t.table_name, c.ordinal_position
"""


class DuckDBDialect(Dialect):
    """Dialect for DuckDB, which has a native BOOLEAN type."""

    kind = DialectKind.DUCKDB
    default_schema = "main"

    def __init__(self, read_only: bool = False):
        super().__init__(DuckDBTypeMapper())
        self.read_only = read_only

    def connect(self, connection_string: str):
        """Connect directly to a DuckDB database file (or :memory:)."""
        try:
            import duckdb
        except ImportError:
            raise ImportError(
                "duckdb is required. "
                "Install it with: pip install duckdb"
            )

        # Remove duckdb:/// prefix if present
        path = strip_driver(connection_string)
        if path.startswith("duckdb:///"):
            path = path[10:]
        elif path.startswith("duckdb://"):
            path = path[9:]
        # Remove query parameters if any
        if "?" in path:
            path = path.split("?")[0]
        path = path or ":memory:"

        try:
            if path == ":memory:":
                return duckdb.connect(path)
            return duckdb.connect(path, read_only=self.read_only)
        except duckdb.Error as e:
            raise self._connect_error(connection_string, e) from e

    def introspection_query(self, connection) -> List[CatalogRow]:
        return self._read_catalog(connection, CATALOG_QUERY, self._parse_row)

    @staticmethod
    def _parse_row(schema, table, column, data_type, is_nullable, column_default) -> CatalogRow:
        if column is None:
            return CatalogRow(schema=schema, table=table)
        return CatalogRow(
            schema=schema,
            table=table,
            column=column,
            native_type=data_type,
            nullable=(is_nullable == "YES"),
            has_default=column_default is not None,
        )

    def encode_boolean(self, value: bool) -> Any:
        return bool(value)
