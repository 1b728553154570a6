"""Database introspection module for db-typegen.

This module provides engine-agnostic schema introspection with
dialects for PostgreSQL, MySQL, SQLite, DuckDB and Snowflake.
"""

from .models import CatalogRow, ColumnDescriptor, SchemaModel, TableDescriptor, TypeTag
from .base import Dialect, DialectKind
from .type_mappers import (
    TypeMapper,
    PostgresTypeMapper,
    MySQLTypeMapper,
    SQLiteTypeMapper,
    DuckDBTypeMapper,
    SnowflakeTypeMapper,
)
from .postgres import PostgresDialect
from .mysql import MySQLDialect
from .sqlite import SQLiteDialect
from .duckdb import DuckDBDialect
from .snowflake import SnowflakeDialect
from .dialects import get_dialect, infer_dialect_kind, dialect_for_url
from .introspector import SchemaIntrospector, introspect

__all__ = [
    # Data models
    "CatalogRow",
    "ColumnDescriptor",
    "SchemaModel",
    "TableDescriptor",
    "TypeTag",
    # Base classes
    "Dialect",
    "DialectKind",
    "SchemaIntrospector",
    "introspect",
    # Type mappers
    "TypeMapper",
    "PostgresTypeMapper",
    "MySQLTypeMapper",
    "SQLiteTypeMapper",
    "DuckDBTypeMapper",
    "SnowflakeTypeMapper",
    # Dialects
    "PostgresDialect",
    "MySQLDialect",
    "SQLiteDialect",
    "DuckDBDialect",
    "SnowflakeDialect",
    "get_dialect",
    "infer_dialect_kind",
    "dialect_for_url",
]
