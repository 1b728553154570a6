"""SQLite dialect."""

import sqlite3
from typing import Any, List

from .base import Dialect, DialectKind, strip_driver
from .models import CatalogRow
from .type_mappers import SQLiteTypeMapper

CATALOG_QUERY = """
    SELECT
        m.name,
        p.name,
        p.type,
        p."notnull",
        p.dflt_value,
        p.pk,
        (SELECT COUNT(*) FROM pragma_table_info(m.name) WHERE pk > 0)
    FROM sqlite_master AS m
    JOIN pragma_table_info(m.name) AS p
    WHERE m.type IN ('table', 'view')
      AND m.name NOT LIKE 'sqlite\\_%' ESCAPE '\\'
    ORDER BY m.name, p.cid
"""


def _database_path(connection_string: str) -> str:
    """Turn sqlite:///path, sqlite://:memory: or a bare path into a sqlite3 path."""
    if connection_string.startswith("sqlite:///"):
        return connection_string[len("sqlite:///"):]
    if connection_string.startswith("sqlite://"):
        return connection_string[len("sqlite://"):] or ":memory:"
    return connection_string


class SQLiteDialect(Dialect):
    """Dialect for SQLite, which stores booleans as the integers 1 and 0."""

    kind = DialectKind.SQLITE

    def __init__(self):
        super().__init__(SQLiteTypeMapper())

    def connect(self, connection_string: str):
        try:
            return sqlite3.connect(_database_path(strip_driver(connection_string)))
        except sqlite3.Error as e:
            raise self._connect_error(connection_string, e) from e

    def introspection_query(self, connection) -> List[CatalogRow]:
        return self._read_catalog(connection, CATALOG_QUERY, self._parse_row)

    @staticmethod
    def _parse_row(table, column, declared_type, not_null, default, pk, pk_count) -> CatalogRow:
        # INTEGER PRIMARY KEY aliases the rowid: never null, assigned on insert
        rowid_alias = pk == 1 and pk_count == 1 and (declared_type or "").upper() == "INTEGER"
        return CatalogRow(
            schema=None,
            table=table,
            column=column,
            native_type=declared_type or "",
            nullable=not (not_null or rowid_alias),
            has_default=(default is not None or rowid_alias),
            metadata={"pk": pk},
        )

    def encode_boolean(self, value: bool) -> Any:
        return 1 if value else 0
