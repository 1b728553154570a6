"""Dialect registry and connection-string inference."""

from typing import Callable, Dict, Union

from ..errors import ConfigurationError
from .base import Dialect, DialectKind
from .duckdb import DuckDBDialect
from .mysql import MySQLDialect
from .postgres import PostgresDialect
from .snowflake import SnowflakeDialect
from .sqlite import SQLiteDialect

DIALECTS: Dict[DialectKind, Callable[[], Dialect]] = {
    DialectKind.POSTGRES: PostgresDialect,
    DialectKind.MYSQL: MySQLDialect,
    DialectKind.SQLITE: SQLiteDialect,
    DialectKind.DUCKDB: DuckDBDialect,
    DialectKind.SNOWFLAKE: SnowflakeDialect,
}

URL_SCHEMES = {
    "postgres": DialectKind.POSTGRES,
    "postgresql": DialectKind.POSTGRES,
    "mysql": DialectKind.MYSQL,
    "sqlite": DialectKind.SQLITE,
    "duckdb": DialectKind.DUCKDB,
    "snowflake": DialectKind.SNOWFLAKE,
}

FILE_SUFFIXES = {
    ".db": DialectKind.SQLITE,
    ".sqlite": DialectKind.SQLITE,
    ".sqlite3": DialectKind.SQLITE,
    ".duckdb": DialectKind.DUCKDB,
}


def get_dialect(kind: Union[DialectKind, str]) -> Dialect:
    """Create the dialect for an engine name or DialectKind."""
    try:
        kind = DialectKind(kind)
    except ValueError:
        supported = ", ".join(k.value for k in DialectKind)
        raise ConfigurationError(
            f"Unsupported dialect '{kind}'. Supported dialects: {supported}",
            details={"dialect": str(kind)},
        )
    return DIALECTS[kind]()


def infer_dialect_kind(connection_string: str) -> DialectKind:
    """Work out the engine from a connection string.

    URL schemes win; otherwise ``:memory:`` means SQLite and file paths are
    matched on their suffix.
    """
    scheme, sep, _ = connection_string.partition("://")
    if sep:
        kind = URL_SCHEMES.get(scheme.lower().split("+", 1)[0])
        if kind is None:
            raise ConfigurationError(
                f"Cannot infer dialect from connection string scheme '{scheme}'",
                details={"scheme": scheme},
            )
        return kind

    if connection_string == ":memory:":
        return DialectKind.SQLITE

    lowered = connection_string.lower()
    for suffix, kind in FILE_SUFFIXES.items():
        if lowered.endswith(suffix):
            return kind

    raise ConfigurationError(
        "Cannot infer dialect from connection string; pass --dialect explicitly",
        details={"connection_string": connection_string},
    )


def dialect_for_url(connection_string: str) -> Dialect:
    return get_dialect(infer_dialect_kind(connection_string))
