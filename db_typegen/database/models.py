"""Normalized schema model shared by every dialect."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple


class TypeTag(str, Enum):
    """Engine-independent column type vocabulary."""

    INTEGER = "integer"
    FLOAT = "float"
    DECIMAL = "decimal"
    TEXT = "text"
    BOOLEAN = "boolean"
    JSON = "json"
    DATE = "date"
    TIMESTAMP = "timestamp"
    TIME = "time"
    BINARY = "binary"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class CatalogRow:
    """One raw row from a dialect's metadata catalog query.

    ``column`` is None for a table that exists but has no columns.
    """
    schema: Optional[str]
    table: str
    column: Optional[str] = None
    native_type: str = ""
    nullable: bool = True
    has_default: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ColumnDescriptor:
    """Represents a table column after type normalization."""
    name: str
    type_tag: TypeTag
    nullable: bool = True
    has_default: bool = False
    native_type: str = ""


@dataclass(frozen=True)
class TableDescriptor:
    """Represents a table and its columns in ordinal order."""
    name: str
    columns: Tuple[ColumnDescriptor, ...] = ()
    schema: Optional[str] = None

    @property
    def qualified_name(self) -> str:
        """Table name, prefixed with its schema when it is not the default one."""
        if self.schema:
            return f"{self.schema}.{self.name}"
        return self.name

    def get_column(self, name: str) -> Optional[ColumnDescriptor]:
        for column in self.columns:
            if column.name == name:
                return column
        return None


@dataclass(frozen=True)
class SchemaModel:
    """Every introspected table, keyed by qualified name in catalog order."""
    tables: Mapping[str, TableDescriptor] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.tables)

    def get_table(self, name: str) -> Optional[TableDescriptor]:
        return self.tables.get(name)

    @property
    def column_count(self) -> int:
        return sum(len(table.columns) for table in self.tables.values())
