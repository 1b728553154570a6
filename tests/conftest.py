"""Shared pytest fixtures for db-typegen tests."""

import sqlite3

import pytest

from db_typegen.database import SQLiteDialect
from db_typegen.database.models import ColumnDescriptor, SchemaModel, TableDescriptor, TypeTag

FOO_BAR_DDL = 'CREATE TABLE foo_bar (id INTEGER PRIMARY KEY, "true" BOOLEAN, "false" BOOLEAN)'


FOO_BAR_CAMEL_CASE_TYPES = '''"""Row types for every table in the database.

This file is generated from the live schema. Do not edit it by hand.
"""

from typing import Annotated, Optional, TypedDict, TypeVar

T = TypeVar("T")

Generated = Annotated[T, "generated"]


class FooBar(TypedDict):
    id: Generated[int]
    true: Optional[bool]
    false: Optional[bool]


class DB(TypedDict):
    fooBar: FooBar
'''


@pytest.fixture
def foo_bar_types():
    """Expected camelCase output for the foo_bar table."""
    return FOO_BAR_CAMEL_CASE_TYPES


@pytest.fixture
def sqlite_dialect():
    return SQLiteDialect()


@pytest.fixture
def sqlite_connection(sqlite_dialect):
    """In-memory SQLite database holding foo_bar with one seeded row."""
    conn = sqlite3.connect(":memory:")
    conn.execute(FOO_BAR_DDL)
    conn.execute(
        'INSERT INTO foo_bar ("true", "false") VALUES (?, ?)',
        (sqlite_dialect.encode_boolean(True), sqlite_dialect.encode_boolean(False)),
    )
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def sqlite_file(tmp_path, sqlite_dialect):
    """On-disk SQLite database holding foo_bar, for CLI tests."""
    path = tmp_path / "app.sqlite3"
    conn = sqlite3.connect(str(path))
    conn.execute(FOO_BAR_DDL)
    conn.commit()
    conn.close()
    return path


@pytest.fixture
def foo_bar_model():
    """SchemaModel equivalent to introspecting foo_bar."""
    return SchemaModel(tables={
        "foo_bar": TableDescriptor(
            name="foo_bar",
            columns=(
                ColumnDescriptor(name="id", type_tag=TypeTag.INTEGER, nullable=False, has_default=True),
                ColumnDescriptor(name="true", type_tag=TypeTag.BOOLEAN),
                ColumnDescriptor(name="false", type_tag=TypeTag.BOOLEAN),
            ),
        ),
    })


@pytest.fixture
def sample_model():
    """SchemaModel covering every TypeTag across two tables."""
    return SchemaModel(tables={
        "users": TableDescriptor(
            name="users",
            columns=(
                ColumnDescriptor(name="id", type_tag=TypeTag.INTEGER, nullable=False, has_default=True),
                ColumnDescriptor(name="email", type_tag=TypeTag.TEXT, nullable=False),
                ColumnDescriptor(name="is_active", type_tag=TypeTag.BOOLEAN, nullable=False, has_default=True),
                ColumnDescriptor(name="balance", type_tag=TypeTag.DECIMAL),
                ColumnDescriptor(name="score", type_tag=TypeTag.FLOAT),
                ColumnDescriptor(name="created_at", type_tag=TypeTag.TIMESTAMP, nullable=False),
            ),
        ),
        "user_events": TableDescriptor(
            name="user_events",
            columns=(
                ColumnDescriptor(name="user_id", type_tag=TypeTag.INTEGER, nullable=False),
                ColumnDescriptor(name="payload", type_tag=TypeTag.JSON),
                ColumnDescriptor(name="happened_on", type_tag=TypeTag.DATE),
                ColumnDescriptor(name="at_time", type_tag=TypeTag.TIME),
                ColumnDescriptor(name="raw", type_tag=TypeTag.BINARY),
                ColumnDescriptor(name="location", type_tag=TypeTag.UNKNOWN, native_type="geometry"),
            ),
        ),
    })
