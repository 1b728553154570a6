"""Identifier conversion for rendered row types."""

import re
from enum import Enum
from typing import Iterable


class NamingConvention(str, Enum):
    """How table and column identifiers appear in the generated file."""

    PRESERVE = "preserve"
    CAMEL_CASE = "camelCase"


def to_camel_case(name: str) -> str:
    """Convert snake_case to camelCase (is_active -> isActive).

    Leading underscores and the casing of the first word are kept, so
    already camel-cased names pass through unchanged.
    """
    stripped = name.lstrip("_")
    prefix = name[:len(name) - len(stripped)]
    parts = stripped.split("_")
    return prefix + parts[0] + "".join(part[:1].upper() + part[1:] for part in parts[1:])


def convert_identifier(name: str, naming: NamingConvention) -> str:
    """Apply the naming convention to a (possibly schema-qualified) identifier."""
    if naming is NamingConvention.CAMEL_CASE:
        return ".".join(to_camel_case(part) for part in name.split("."))
    return name


def to_class_name(name: str) -> str:
    """Convert a table name to a PascalCase Python class name."""
    parts = [p for p in re.split(r"[^0-9A-Za-z]+", name) if p]
    class_name = "".join(part[:1].upper() + part[1:] for part in parts)
    if not class_name or class_name[0].isdigit():
        class_name = "Table" + class_name
    return class_name


def unique_name(name: str, taken: Iterable[str]) -> str:
    """Return name, or name with the smallest numeric suffix not in taken."""
    taken = set(taken)
    if name not in taken:
        return name
    suffix = 2
    while f"{name}{suffix}" in taken:
        suffix += 1
    return f"{name}{suffix}"
