"""Generate row type definitions from a live database schema."""

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .database.base import Dialect
from .database.introspector import SchemaIntrospector
from .diff import diff
from .errors import ConfigurationError, DriftError, MissingBaselineError
from .render.naming import NamingConvention
from .render.renderer import TypeRenderer

ENCODING = "utf-8"


@dataclass(frozen=True)
class GenerationRequest:
    """Settings for a single generate() call."""
    naming: NamingConvention = NamingConvention.PRESERVE
    out_file: Optional[Path] = None
    verify: bool = False
    include_pattern: Optional[str] = None
    exclude_pattern: Optional[str] = None

    def __post_init__(self):
        if self.out_file is not None and not isinstance(self.out_file, Path):
            object.__setattr__(self, "out_file", Path(self.out_file))
        if self.verify and self.out_file is None:
            raise ConfigurationError("Verify mode needs an out file to compare against")


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a generate() call.

    ``text`` is always the freshly rendered output. ``written`` is set when
    it was saved to ``out_file``; ``verified`` when it matched the file.
    """
    text: str
    out_file: Optional[Path] = None
    written: bool = False
    verified: bool = False


class Generator:
    """Introspects a database and renders its row types.

    Every dependency is passed in, so independent generators can run
    side by side as long as each has its own connection.

    Example usage:
        generator = Generator(logger=logging.getLogger("typegen"))
        result = generator.generate(
            connection,
            SQLiteDialect(),
            GenerationRequest(naming=NamingConvention.CAMEL_CASE, out_file=Path("db_types.py")),
        )
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def generate(
        self,
        connection,
        dialect: Dialect,
        request: Optional[GenerationRequest] = None,
    ) -> GenerationResult:
        """Generate row types, then return, write or verify them.

        Args:
            connection: Open DB-API connection owned by the caller
            dialect: Dialect matching the connection
            request: Naming, output and verify settings

        Returns:
            GenerationResult with the rendered text

        Raises:
            MissingBaselineError: verify requested and the out file is absent
            DriftError: verify requested and the out file differs
        """
        request = request or GenerationRequest()

        if request.verify:
            existing = self.read_existing(request.out_file)
            candidate = self.compute_candidate(connection, dialect, request)
            self.compare(existing, candidate, request.out_file)
            return GenerationResult(text=candidate, out_file=request.out_file, verified=True)

        candidate = self.compute_candidate(connection, dialect, request)
        if request.out_file is None:
            return GenerationResult(text=candidate)

        self.write(request.out_file, candidate)
        return GenerationResult(text=candidate, out_file=request.out_file, written=True)

    def compute_candidate(self, connection, dialect: Dialect, request: GenerationRequest) -> str:
        """Introspect the live schema and render it."""
        model = SchemaIntrospector(dialect, self.logger).introspect(
            connection,
            include_pattern=request.include_pattern,
            exclude_pattern=request.exclude_pattern,
        )
        return TypeRenderer(request.naming).render(model)

    def read_existing(self, path: Path) -> str:
        """Read the persisted output that verify mode compares against."""
        try:
            data = path.read_bytes()
        except FileNotFoundError:
            raise MissingBaselineError(str(path))
        return data.decode(ENCODING, errors="surrogateescape")

    def compare(self, existing: str, candidate: str, path: Optional[Path] = None):
        """Raise DriftError unless the candidate matches the persisted text exactly."""
        if existing == candidate:
            self.logger.info("Generated types are up-to-date")
            return

        changes = diff(existing, candidate, fromfile=str(path or "existing"), tofile="generated")
        self.logger.error(changes)
        raise DriftError(changes, path=str(path) if path else None)

    def write(self, path: Path, text: str):
        """Replace the out file atomically with the rendered text."""
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=str(path.parent), prefix=f".{path.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as tmp:
                tmp.write(text.encode(ENCODING))
            os.chmod(tmp_name, _file_mode(path))
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        self.logger.info("Generated types written to %s", path)


def _file_mode(path: Path) -> int:
    """Keep the permissions of an existing out file; new files get 0o644."""
    try:
        return path.stat().st_mode & 0o777
    except FileNotFoundError:
        return 0o644


def generate(
    connection,
    dialect: Dialect,
    request: Optional[GenerationRequest] = None,
    logger: Optional[logging.Logger] = None,
) -> GenerationResult:
    """Convenience wrapper around Generator.generate."""
    return Generator(logger).generate(connection, dialect, request)
