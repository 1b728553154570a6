"""Error types for db-typegen."""

from typing import Optional, Dict, Any

DRIFT_MESSAGE = "Generated types are not up-to-date! Use '--log-level error' option for diff"


class TypegenError(Exception):
    """Base exception for db-typegen errors."""

    def __init__(self, message: str, code: str = "TYPEGEN_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a dictionary for structured output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(TypegenError):
    """Invalid or incomplete generation settings."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class DatabaseConnectionError(TypegenError):
    """Error connecting or authenticating to the database."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code="CONNECTION_ERROR", details=details)


class IntrospectionError(TypegenError):
    """Error while reading the database metadata catalog."""

    def __init__(self, message: str, dialect: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        details = dict(details or {})
        if dialect:
            details["dialect"] = dialect
        super().__init__(message, code="INTROSPECTION_ERROR", details=details)
        self.dialect = dialect


class MissingBaselineError(TypegenError):
    """Verify mode was requested but there is no existing output to compare."""

    def __init__(self, path: str):
        super().__init__(
            f"Nothing to verify against: '{path}' does not exist",
            code="MISSING_BASELINE",
            details={"path": path},
        )
        self.path = path


class DriftError(TypegenError):
    """Freshly generated types differ from the persisted output.

    The message is always DRIFT_MESSAGE so callers can branch on it;
    the diff itself is attached for diagnostics.
    """

    def __init__(self, diff: Optional[str], path: Optional[str] = None):
        super().__init__(DRIFT_MESSAGE, code="DRIFT_ERROR", details={"path": path})
        self.diff = diff
        self.path = path


class UnmappableTypeWarning(UserWarning):
    """A native column type has no normalized type and falls back to Any."""
