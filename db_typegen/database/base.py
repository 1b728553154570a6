"""Abstract base class for database dialects."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional, Sequence

from ..errors import DatabaseConnectionError, IntrospectionError
from .models import CatalogRow, TypeTag
from .type_mappers import TypeMapper


class DialectKind(str, Enum):
    """Supported database engines."""

    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE = "sqlite"
    DUCKDB = "duckdb"
    SNOWFLAKE = "snowflake"


class Dialect(ABC):
    """Abstract base class for a database dialect.

    A dialect owns everything engine-specific: how to open a connection,
    how to read the metadata catalog, how native types map to TypeTags and
    how booleans are physically stored. Callers never branch on the engine.
    """

    kind: DialectKind
    # Tables in this schema are rendered without a schema prefix
    default_schema: Optional[str] = None

    def __init__(self, type_mapper: TypeMapper):
        self._type_mapper = type_mapper

    @property
    def name(self) -> str:
        return self.kind.value

    @abstractmethod
    def connect(self, connection_string: str):
        """Open a DB-API connection for the given connection string.

        Args:
            connection_string: Engine URL or, for embedded engines, a file path

        Returns:
            A DB-API 2.0 connection owned by the caller
        """
        pass

    @abstractmethod
    def introspection_query(self, connection) -> List[CatalogRow]:
        """Read every table and column from the metadata catalog.

        Rows are ordered by table, then by column ordinal position.

        Args:
            connection: An open DB-API connection

        Returns:
            List of CatalogRow objects
        """
        pass

    @abstractmethod
    def encode_boolean(self, value: bool) -> Any:
        """Convert a Python bool to the engine's physical representation."""
        pass

    def decode_boolean(self, raw: Any) -> bool:
        """Convert a stored boolean value back to a Python bool."""
        if isinstance(raw, str):
            return raw.strip().lower() in ("1", "t", "true", "y", "yes")
        return bool(raw)

    def normalize_type(self, native_type: str, metadata: Optional[Mapping[str, Any]] = None) -> TypeTag:
        """Map a native column type to a TypeTag; unknown types give UNKNOWN."""
        return self._type_mapper.to_type_tag(native_type, metadata)

    def _connect_error(self, connection_string: str, error: Exception) -> DatabaseConnectionError:
        return DatabaseConnectionError(
            f"Cannot connect to {self.name} database: {error}",
            details={"dialect": self.name, "target": _redact(connection_string)},
        )

    def _execute_query(self, connection, sql: str) -> Sequence[Sequence[Any]]:
        """Execute a metadata query and return all rows.

        Driver errors are re-raised as IntrospectionError with the original
        error chained.
        """
        cursor = connection.cursor()
        try:
            cursor.execute(sql)
            return cursor.fetchall()
        except Exception as e:
            raise IntrospectionError(
                f"Failed to read {self.name} metadata catalog: {e}",
                dialect=self.name,
            ) from e
        finally:
            cursor.close()

    def _read_catalog(self, connection, sql: str, parse_row: Callable[..., CatalogRow]) -> List[CatalogRow]:
        """Run the catalog query and build one CatalogRow per result row.

        A row that does not have the shape parse_row expects raises
        IntrospectionError naming the dialect and the offending row.
        """
        rows = []
        for row in self._execute_query(connection, sql):
            try:
                rows.append(parse_row(*row))
            except (TypeError, ValueError, AttributeError) as e:
                raise IntrospectionError(
                    f"Unparseable {self.name} catalog row {row!r}: {e}",
                    dialect=self.name,
                ) from e
        return rows

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def _redact(connection_string: str) -> str:
    """Hide the password of a URL-style connection string."""
    scheme, sep, rest = connection_string.partition("://")
    if not sep or "@" not in rest:
        return connection_string
    credentials, _, host = rest.rpartition("@")
    user = credentials.split(":", 1)[0]
    return f"{scheme}://{user}:***@{host}"


def strip_driver(connection_string: str) -> str:
    """Drop a driver qualifier from a URL scheme: postgresql+psycopg2:// becomes postgresql://."""
    scheme, sep, rest = connection_string.partition("://")
    if not sep or "+" not in scheme:
        return connection_string
    return f"{scheme.split('+', 1)[0]}{sep}{rest}"
