"""Build a SchemaModel from a live connection."""

import logging
import warnings
from fnmatch import fnmatchcase
from typing import Dict, List, Optional

from ..errors import UnmappableTypeWarning
from .base import Dialect
from .models import CatalogRow, ColumnDescriptor, SchemaModel, TableDescriptor, TypeTag


class SchemaIntrospector:
    """Turns a dialect's catalog rows into a normalized SchemaModel.

    Holds no state between calls: every ``introspect`` re-reads the catalog.
    """

    def __init__(self, dialect: Dialect, logger: Optional[logging.Logger] = None):
        self.dialect = dialect
        self.logger = logger or logging.getLogger(__name__)

    def introspect(
        self,
        connection,
        include_pattern: Optional[str] = None,
        exclude_pattern: Optional[str] = None,
    ) -> SchemaModel:
        """Introspect every table visible through the connection.

        Args:
            connection: An open DB-API connection for this dialect
            include_pattern: Optional glob; only matching tables are kept
            exclude_pattern: Optional glob; matching tables are dropped

        Returns:
            SchemaModel with tables and columns in catalog order
        """
        self.logger.debug("Introspecting %s database...", self.dialect.name)
        rows = self.dialect.introspection_query(connection)

        columns_by_table: Dict[str, List[ColumnDescriptor]] = {}
        schemas: Dict[str, Optional[str]] = {}
        names: Dict[str, str] = {}

        for row in rows:
            schema = self._visible_schema(row)
            key = f"{schema}.{row.table}" if schema else row.table
            if not _matches(key, include_pattern, exclude_pattern):
                continue

            columns = columns_by_table.setdefault(key, [])
            schemas[key] = schema
            names[key] = row.table

            if row.column is not None:
                columns.append(self._describe_column(key, row))

        tables = {
            key: TableDescriptor(name=names[key], columns=tuple(columns), schema=schemas[key])
            for key, columns in columns_by_table.items()
        }
        model = SchemaModel(tables=tables)
        self.logger.info(
            "Introspected %d tables with %d columns from %s",
            len(model), model.column_count, self.dialect.name,
        )
        return model

    def _visible_schema(self, row: CatalogRow) -> Optional[str]:
        if row.schema is None or row.schema == self.dialect.default_schema:
            return None
        return row.schema

    def _describe_column(self, table_key: str, row: CatalogRow) -> ColumnDescriptor:
        type_tag = self.dialect.normalize_type(row.native_type, row.metadata)
        if type_tag is TypeTag.UNKNOWN:
            message = (
                f"Unknown {self.dialect.name} type '{row.native_type}' "
                f"for column {table_key}.{row.column}; using Any"
            )
            self.logger.warning(message)
            warnings.warn(message, UnmappableTypeWarning, stacklevel=3)

        return ColumnDescriptor(
            name=row.column,
            type_tag=type_tag,
            nullable=row.nullable,
            has_default=row.has_default,
            native_type=row.native_type,
        )


def _matches(name: str, include_pattern: Optional[str], exclude_pattern: Optional[str]) -> bool:
    if include_pattern and not fnmatchcase(name, include_pattern):
        return False
    if exclude_pattern and fnmatchcase(name, exclude_pattern):
        return False
    return True


def introspect(
    connection,
    dialect: Dialect,
    logger: Optional[logging.Logger] = None,
    include_pattern: Optional[str] = None,
    exclude_pattern: Optional[str] = None,
) -> SchemaModel:
    """Convenience wrapper around SchemaIntrospector.introspect."""
    return SchemaIntrospector(dialect, logger).introspect(
        connection,
        include_pattern=include_pattern,
        exclude_pattern=exclude_pattern,
    )
