"""db-typegen - Generate Python row types from a live database schema."""

__version__ = "0.1.0"

from .database import (
    ColumnDescriptor,
    Dialect,
    DialectKind,
    SchemaModel,
    TableDescriptor,
    TypeTag,
    dialect_for_url,
    get_dialect,
    introspect,
)
from .diff import diff
from .errors import (
    DRIFT_MESSAGE,
    ConfigurationError,
    DatabaseConnectionError,
    DriftError,
    IntrospectionError,
    MissingBaselineError,
    TypegenError,
    UnmappableTypeWarning,
)
from .generator import GenerationRequest, GenerationResult, Generator, generate
from .render import NamingConvention, TypeRenderer, render

__all__ = [
    "ColumnDescriptor",
    "Dialect",
    "DialectKind",
    "SchemaModel",
    "TableDescriptor",
    "TypeTag",
    "dialect_for_url",
    "get_dialect",
    "introspect",
    "diff",
    "DRIFT_MESSAGE",
    "ConfigurationError",
    "DatabaseConnectionError",
    "DriftError",
    "IntrospectionError",
    "MissingBaselineError",
    "TypegenError",
    "UnmappableTypeWarning",
    "GenerationRequest",
    "GenerationResult",
    "Generator",
    "generate",
    "NamingConvention",
    "TypeRenderer",
    "render",
]
