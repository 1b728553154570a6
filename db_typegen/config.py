"""Configuration management for db-typegen."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.db-typegen/.env
    3. Package directory (where this file is located)
    """
    # Current directory
    if os.path.exists(".env"):
        return ".env"

    # User config directory
    user_env = Path.home() / ".db-typegen" / ".env"
    if user_env.exists():
        return str(user_env)

    # Package directory
    package_dir = Path(__file__).parent.parent
    package_env = package_dir / ".env"
    if package_env.exists():
        return str(package_env)

    return None


class Settings(BaseSettings):
    """Generation defaults loaded from environment variables.

    Everything except the connection URL uses the TYPEGEN_ prefix, e.g.
    TYPEGEN_OUT_FILE or TYPEGEN_CAMEL_CASE.
    """

    database_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("DATABASE_URL", "TYPEGEN_DATABASE_URL"),
        description="Connection string of the database to introspect"
    )
    dialect: Optional[str] = Field(
        default=None,
        description="Dialect name; inferred from the connection string when unset"
    )

    # Output
    out_file: Optional[str] = Field(
        default=None,
        description="File to write the generated row types to"
    )
    camel_case: bool = Field(
        default=False,
        description="Convert table and column identifiers to camelCase"
    )
    include_pattern: Optional[str] = Field(
        default=None,
        description="Only generate tables matching this glob, e.g. 'public.*'"
    )
    exclude_pattern: Optional[str] = Field(
        default=None,
        description="Skip tables matching this glob"
    )

    # Logging
    log_level: str = Field(
        default="warning",
        description="Log level: debug, info, warning, error or silent"
    )

    class Config:
        env_prefix = "TYPEGEN_"
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


def get_settings() -> Settings:
    """Load settings from the environment and .env file."""
    return Settings()
