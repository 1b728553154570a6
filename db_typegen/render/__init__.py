"""Rendering of introspected schemas into Python row type definitions."""

from .naming import NamingConvention, convert_identifier, to_camel_case, to_class_name
from .renderer import TypeRenderer, render

__all__ = [
    "NamingConvention",
    "TypeRenderer",
    "convert_identifier",
    "render",
    "to_camel_case",
    "to_class_name",
]
