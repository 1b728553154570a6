"""PostgreSQL dialect."""

from typing import Any, List

from .base import Dialect, DialectKind, strip_driver
from .models import CatalogRow
from .type_mappers import PostgresTypeMapper

CATALOG_QUERY = """
    SELECT
        t.table_schema,
        t.table_name,
        c.column_name,
        c.data_type,
        c.udt_name,
        c.is_nullable,
        c.column_default,
        c.is_identity
    FROM information_schema.tables t
    LEFT JOIN information_schema.columns c
      ON c.table_schema = t.table_schema
     AND c.table_name = t.table_name
    WHERE t.table_schema NOT IN ('pg_catalog', 'information_schema')
      AND t.table_type IN ('BASE TABLE', 'VIEW')
    ORDER BY t.table_schema, t.table_name, c.ordinal_position
"""


class PostgresDialect(Dialect):
    """Dialect for PostgreSQL, which has a native boolean type."""

    kind = DialectKind.POSTGRES
    default_schema = "public"

    def __init__(self):
        super().__init__(PostgresTypeMapper())

    def connect(self, connection_string: str):
        """Connect with psycopg2; accepts postgres:// and postgresql:// URLs."""
        try:
            import psycopg2
        except ImportError:
            raise ImportError(
                "psycopg2 is required for PostgreSQL connections. "
                "Install it with: pip install psycopg2-binary"
            )

        dsn = strip_driver(connection_string)
        if dsn.startswith("postgres://"):
            dsn = "postgresql://" + dsn[len("postgres://"):]
        try:
            return psycopg2.connect(dsn)
        except psycopg2.Error as e:
            raise self._connect_error(connection_string, e) from e

    def introspection_query(self, connection) -> List[CatalogRow]:
        return self._read_catalog(connection, CATALOG_QUERY, self._parse_row)

    @staticmethod
    def _parse_row(schema, table, column, data_type, udt_name, is_nullable, column_default, is_identity) -> CatalogRow:
        if column is None:
            return CatalogRow(schema=schema, table=table)
        return CatalogRow(
            schema=schema,
            table=table,
            column=column,
            native_type=data_type,
            nullable=(is_nullable == "YES"),
            has_default=(column_default is not None or is_identity == "YES"),
            metadata={"udt_name": udt_name},
        )

    def encode_boolean(self, value: bool) -> Any:
        return bool(value)
