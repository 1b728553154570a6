"""Database-specific type mapping strategies."""

import re
from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional

from .models import TypeTag

_EMPTY: Mapping[str, Any] = {}


class TypeMapper(ABC):
    """Abstract base class for database type mapping."""

    @abstractmethod
    def to_type_tag(self, db_type: str, metadata: Optional[Mapping[str, Any]] = None) -> TypeTag:
        """Convert a native database type to a normalized TypeTag."""
        pass


class PostgresTypeMapper(TypeMapper):
    """Type mapper for PostgreSQL, keyed on ``udt_name``."""

    TYPES = {
        "int2": TypeTag.INTEGER,
        "int4": TypeTag.INTEGER,
        "int8": TypeTag.INTEGER,
        "oid": TypeTag.INTEGER,
        "float4": TypeTag.FLOAT,
        "float8": TypeTag.FLOAT,
        "numeric": TypeTag.DECIMAL,
        "money": TypeTag.DECIMAL,
        "bool": TypeTag.BOOLEAN,
        "text": TypeTag.TEXT,
        "varchar": TypeTag.TEXT,
        "bpchar": TypeTag.TEXT,
        "char": TypeTag.TEXT,
        "name": TypeTag.TEXT,
        "citext": TypeTag.TEXT,
        "uuid": TypeTag.TEXT,
        "inet": TypeTag.TEXT,
        "cidr": TypeTag.TEXT,
        "macaddr": TypeTag.TEXT,
        "xml": TypeTag.TEXT,
        "json": TypeTag.JSON,
        "jsonb": TypeTag.JSON,
        "date": TypeTag.DATE,
        "timestamp": TypeTag.TIMESTAMP,
        "timestamptz": TypeTag.TIMESTAMP,
        "time": TypeTag.TIME,
        "timetz": TypeTag.TIME,
        "bytea": TypeTag.BINARY,
    }

    def to_type_tag(self, db_type: str, metadata: Optional[Mapping[str, Any]] = None) -> TypeTag:
        """Convert a PostgreSQL udt_name (falling back to data_type) to a TypeTag."""
        metadata = metadata or _EMPTY
        udt_name = (metadata.get("udt_name") or db_type or "").lower()
        return self.TYPES.get(udt_name, TypeTag.UNKNOWN)


class MySQLTypeMapper(TypeMapper):
    """Type mapper for MySQL / MariaDB, using ``data_type`` and ``column_type``."""

    TYPES = {
        "bool": TypeTag.BOOLEAN,
        "boolean": TypeTag.BOOLEAN,
        "tinyint": TypeTag.INTEGER,
        "smallint": TypeTag.INTEGER,
        "mediumint": TypeTag.INTEGER,
        "int": TypeTag.INTEGER,
        "integer": TypeTag.INTEGER,
        "bigint": TypeTag.INTEGER,
        "year": TypeTag.INTEGER,
        "bit": TypeTag.INTEGER,
        "float": TypeTag.FLOAT,
        "double": TypeTag.FLOAT,
        "real": TypeTag.FLOAT,
        "decimal": TypeTag.DECIMAL,
        "numeric": TypeTag.DECIMAL,
        "char": TypeTag.TEXT,
        "varchar": TypeTag.TEXT,
        "tinytext": TypeTag.TEXT,
        "text": TypeTag.TEXT,
        "mediumtext": TypeTag.TEXT,
        "longtext": TypeTag.TEXT,
        "enum": TypeTag.TEXT,
        "set": TypeTag.TEXT,
        "json": TypeTag.JSON,
        "date": TypeTag.DATE,
        "datetime": TypeTag.TIMESTAMP,
        "timestamp": TypeTag.TIMESTAMP,
        "time": TypeTag.TIME,
        "binary": TypeTag.BINARY,
        "varbinary": TypeTag.BINARY,
        "tinyblob": TypeTag.BINARY,
        "blob": TypeTag.BINARY,
        "mediumblob": TypeTag.BINARY,
        "longblob": TypeTag.BINARY,
    }

    def to_type_tag(self, db_type: str, metadata: Optional[Mapping[str, Any]] = None) -> TypeTag:
        """Convert a MySQL data_type to a TypeTag.

        ``tinyint(1)`` is how MySQL stores BOOL columns, so it maps to BOOLEAN.
        """
        metadata = metadata or _EMPTY
        base = (db_type or "").lower()
        column_type = (metadata.get("column_type") or "").lower()

        if base == "tinyint" and column_type.startswith("tinyint(1)"):
            return TypeTag.BOOLEAN
        return self.TYPES.get(base, TypeTag.UNKNOWN)


class SQLiteTypeMapper(TypeMapper):
    """Type mapper for SQLite declared column types.

    SQLite only has storage classes, so the declared type is resolved with
    the same substring rules SQLite uses for type affinity. Dates and JSON
    are stored as text and are reported as TEXT.
    """

    def to_type_tag(self, db_type: str, metadata: Optional[Mapping[str, Any]] = None) -> TypeTag:
        type_upper = (db_type or "").upper()

        if not type_upper:
            return TypeTag.UNKNOWN
        if "BOOL" in type_upper:
            return TypeTag.BOOLEAN
        if "INT" in type_upper:
            return TypeTag.INTEGER
        if any(t in type_upper for t in ["CHAR", "CLOB", "TEXT", "DATE", "TIME", "JSON", "UUID"]):
            return TypeTag.TEXT
        if "BLOB" in type_upper:
            return TypeTag.BINARY
        if any(t in type_upper for t in ["REAL", "FLOA", "DOUB"]):
            return TypeTag.FLOAT
        if any(t in type_upper for t in ["NUMERIC", "DECIMAL"]):
            return TypeTag.DECIMAL
        return TypeTag.UNKNOWN


class DuckDBTypeMapper(TypeMapper):
    """Type mapper for DuckDB database types."""

    def to_type_tag(self, db_type: str, metadata: Optional[Mapping[str, Any]] = None) -> TypeTag:
        type_upper = (db_type or "").upper()
        # Strip precision/length, e.g. DECIMAL(18,3) or VARCHAR(20)
        base = re.sub(r"\(.*\)", "", type_upper).strip()

        # Lists, structs and maps have no scalar equivalent
        if base.endswith("[]") or base.startswith(("STRUCT", "MAP", "UNION")):
            return TypeTag.UNKNOWN

        if base in ("BOOLEAN", "BOOL"):
            return TypeTag.BOOLEAN
        elif base in ("TINYINT", "SMALLINT", "INTEGER", "INT", "BIGINT", "HUGEINT",
                      "UTINYINT", "USMALLINT", "UINTEGER", "UBIGINT", "UHUGEINT"):
            return TypeTag.INTEGER
        elif base in ("FLOAT", "REAL", "DOUBLE"):
            return TypeTag.FLOAT
        elif base in ("DECIMAL", "NUMERIC"):
            return TypeTag.DECIMAL
        elif base in ("VARCHAR", "TEXT", "STRING", "CHAR", "UUID", "ENUM"):
            return TypeTag.TEXT
        elif base == "JSON":
            return TypeTag.JSON
        elif base == "DATE":
            return TypeTag.DATE
        elif base.startswith("TIMESTAMP") or base == "DATETIME":
            return TypeTag.TIMESTAMP
        elif base.startswith("TIME"):
            return TypeTag.TIME
        elif base in ("BLOB", "BYTEA", "VARBINARY"):
            return TypeTag.BINARY
        return TypeTag.UNKNOWN


class SnowflakeTypeMapper(TypeMapper):
    """Type mapper for Snowflake database types."""

    def to_type_tag(self, db_type: str, metadata: Optional[Mapping[str, Any]] = None) -> TypeTag:
        metadata = metadata or _EMPTY
        type_upper = (db_type or "").upper()

        if type_upper in ("NUMBER", "DECIMAL", "NUMERIC"):
            # NUMBER(38,0) is Snowflake's INTEGER
            if not metadata.get("numeric_scale"):
                return TypeTag.INTEGER
            return TypeTag.DECIMAL
        elif any(t in type_upper for t in ["INT"]):
            return TypeTag.INTEGER
        elif any(t in type_upper for t in ["FLOAT", "DOUBLE", "REAL"]):
            return TypeTag.FLOAT
        elif any(t in type_upper for t in ["VARCHAR", "TEXT", "STRING", "CHAR"]):
            return TypeTag.TEXT
        elif type_upper == "BOOLEAN":
            return TypeTag.BOOLEAN
        elif type_upper in ("VARIANT", "OBJECT", "ARRAY"):
            return TypeTag.JSON
        elif type_upper == "DATE":
            return TypeTag.DATE
        elif "TIMESTAMP" in type_upper or type_upper == "DATETIME":
            return TypeTag.TIMESTAMP
        elif type_upper == "TIME":
            return TypeTag.TIME
        elif type_upper in ("BINARY", "VARBINARY"):
            return TypeTag.BINARY
        return TypeTag.UNKNOWN
