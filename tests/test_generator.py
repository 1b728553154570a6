"""End-to-end tests for generation, writing and verify mode."""

import logging
import os
import sqlite3

import pytest

from db_typegen.generator import GenerationRequest, Generator, generate
from db_typegen.errors import (
    DRIFT_MESSAGE,
    ConfigurationError,
    DriftError,
    MissingBaselineError,
)
from db_typegen.render import NamingConvention

CAMEL = NamingConvention.CAMEL_CASE


class TestGenerate:

    def test_returns_text_without_target(self, sqlite_connection, sqlite_dialect, foo_bar_types):
        result = Generator().generate(sqlite_connection, sqlite_dialect, GenerationRequest(naming=CAMEL))
        assert result.text == foo_bar_types
        assert result.out_file is None
        assert result.written is False
        assert result.verified is False

    def test_default_request_preserves_names(self, sqlite_connection, sqlite_dialect):
        result = generate(sqlite_connection, sqlite_dialect)
        assert "    foo_bar: FooBar\n" in result.text

    def test_is_deterministic(self, sqlite_connection, sqlite_dialect):
        request = GenerationRequest(naming=CAMEL)
        first = Generator().generate(sqlite_connection, sqlite_dialect, request)
        second = Generator().generate(sqlite_connection, sqlite_dialect, request)
        assert first.text == second.text

    def test_independent_connections_agree(self, sqlite_connection, sqlite_dialect, tmp_path):
        path = tmp_path / "other.sqlite3"
        other = sqlite3.connect(str(path))
        other.execute('CREATE TABLE foo_bar (id INTEGER PRIMARY KEY, "true" BOOLEAN, "false" BOOLEAN)')
        try:
            request = GenerationRequest(naming=CAMEL)
            assert (
                Generator().generate(sqlite_connection, sqlite_dialect, request).text
                == Generator().generate(other, sqlite_dialect, request).text
            )
        finally:
            other.close()

    def test_seeded_row_values(self, sqlite_connection, sqlite_dialect):
        row = sqlite_connection.execute('SELECT id, "true", "false" FROM foo_bar').fetchone()
        assert {
            "id": row[0],
            "true": sqlite_dialect.decode_boolean(row[1]),
            "false": sqlite_dialect.decode_boolean(row[2]),
        } == {"id": 1, "true": True, "false": False}


class TestWrite:

    def test_writes_target(self, sqlite_connection, sqlite_dialect, tmp_path, foo_bar_types):
        out_file = tmp_path / "db_types.py"
        result = Generator().generate(
            sqlite_connection, sqlite_dialect, GenerationRequest(naming=CAMEL, out_file=out_file),
        )
        assert result.written is True
        assert result.out_file == out_file
        assert out_file.read_bytes() == foo_bar_types.encode("utf-8")

    def test_accepts_string_path_and_creates_directories(self, sqlite_connection, sqlite_dialect, tmp_path):
        out_file = tmp_path / "generated" / "nested" / "db_types.py"
        Generator().generate(sqlite_connection, sqlite_dialect, GenerationRequest(out_file=str(out_file)))
        assert out_file.exists()

    def test_overwrites_and_leaves_no_temp_files(self, sqlite_connection, sqlite_dialect, tmp_path, foo_bar_types):
        out_file = tmp_path / "db_types.py"
        out_file.write_text("stale\n")
        Generator().generate(sqlite_connection, sqlite_dialect, GenerationRequest(naming=CAMEL, out_file=out_file))

        assert out_file.read_text() == foo_bar_types
        assert [p.name for p in tmp_path.iterdir()] == ["db_types.py"]

    def test_failed_write_keeps_previous_content(self, sqlite_connection, sqlite_dialect, tmp_path, monkeypatch):
        out_file = tmp_path / "db_types.py"
        out_file.write_text("previous\n")

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", fail_replace)
        with pytest.raises(OSError, match="disk full"):
            Generator().generate(sqlite_connection, sqlite_dialect, GenerationRequest(out_file=out_file))

        assert out_file.read_text() == "previous\n"
        assert [p.name for p in tmp_path.iterdir()] == ["db_types.py"]


class TestVerify:

    def test_verify_after_write_succeeds(self, sqlite_connection, sqlite_dialect, tmp_path, foo_bar_types):
        out_file = tmp_path / "db_types.py"
        generator = Generator()
        generator.generate(sqlite_connection, sqlite_dialect, GenerationRequest(naming=CAMEL, out_file=out_file))

        result = generator.generate(
            sqlite_connection, sqlite_dialect,
            GenerationRequest(naming=CAMEL, out_file=out_file, verify=True),
        )
        assert result.verified is True
        assert result.written is False
        assert result.text == foo_bar_types

    def test_drift_after_adding_column(self, sqlite_connection, sqlite_dialect, tmp_path, caplog):
        out_file = tmp_path / "db_types.py"
        logger = logging.getLogger("tests.generator")
        generator = Generator(logger)
        generator.generate(sqlite_connection, sqlite_dialect, GenerationRequest(naming=CAMEL, out_file=out_file))
        before = out_file.read_bytes()

        sqlite_connection.execute("ALTER TABLE foo_bar ADD COLUMN extra_value TEXT")

        with caplog.at_level(logging.ERROR, logger="tests.generator"):
            with pytest.raises(DriftError) as exc_info:
                generator.generate(
                    sqlite_connection, sqlite_dialect,
                    GenerationRequest(naming=CAMEL, out_file=out_file, verify=True),
                )

        error = exc_info.value
        assert str(error) == DRIFT_MESSAGE
        assert error.message == "Generated types are not up-to-date! Use '--log-level error' option for diff"
        assert error.code == "DRIFT_ERROR"
        assert error.diff is not None
        assert "+    extraValue: Optional[str]\n" in error.diff
        assert any("extraValue" in record.getMessage() for record in caplog.records)
        # Verify mode never touches the target
        assert out_file.read_bytes() == before

    def test_drift_when_naming_changes(self, sqlite_connection, sqlite_dialect, tmp_path):
        out_file = tmp_path / "db_types.py"
        Generator().generate(sqlite_connection, sqlite_dialect, GenerationRequest(out_file=out_file))

        with pytest.raises(DriftError) as exc_info:
            Generator().generate(
                sqlite_connection, sqlite_dialect,
                GenerationRequest(naming=CAMEL, out_file=out_file, verify=True),
            )
        assert "-    foo_bar: FooBar\n" in exc_info.value.diff
        assert "+    fooBar: FooBar\n" in exc_info.value.diff

    def test_missing_baseline(self, sqlite_connection, sqlite_dialect, tmp_path):
        out_file = tmp_path / "db_types.py"
        with pytest.raises(MissingBaselineError) as exc_info:
            Generator().generate(
                sqlite_connection, sqlite_dialect, GenerationRequest(out_file=out_file, verify=True),
            )
        assert exc_info.value.code == "MISSING_BASELINE"
        assert not isinstance(exc_info.value, DriftError)
        assert not out_file.exists()

    def test_trailing_whitespace_is_drift(self, sqlite_connection, sqlite_dialect, tmp_path):
        out_file = tmp_path / "db_types.py"
        result = Generator().generate(sqlite_connection, sqlite_dialect, GenerationRequest(out_file=out_file))
        out_file.write_text(result.text + "\n")

        with pytest.raises(DriftError):
            Generator().generate(
                sqlite_connection, sqlite_dialect, GenerationRequest(out_file=out_file, verify=True),
            )

    def test_verify_requires_out_file(self):
        with pytest.raises(ConfigurationError):
            GenerationRequest(verify=True)
