"""Render a SchemaModel as a module of TypedDict row types."""

import json
import keyword
from typing import Dict, List, Optional, Set, Tuple

from ..database.models import ColumnDescriptor, SchemaModel, TypeTag
from ..errors import ConfigurationError
from .naming import NamingConvention, convert_identifier, to_class_name, unique_name

HEADER = '''"""Row types for every table in the database.

This file is generated from the live schema. Do not edit it by hand.
"""'''

ROOT_TYPE = "DB"

# TypeTag -> (annotation, (module, name) import or None)
PYTHON_TYPES: Dict[TypeTag, Tuple[str, Optional[Tuple[str, str]]]] = {
    TypeTag.INTEGER: ("int", None),
    TypeTag.FLOAT: ("float", None),
    TypeTag.DECIMAL: ("Decimal", ("decimal", "Decimal")),
    TypeTag.TEXT: ("str", None),
    TypeTag.BOOLEAN: ("bool", None),
    TypeTag.JSON: ("Json", None),
    TypeTag.DATE: ("date", ("datetime", "date")),
    TypeTag.TIMESTAMP: ("datetime", ("datetime", "datetime")),
    TypeTag.TIME: ("time", ("datetime", "time")),
    TypeTag.BINARY: ("bytes", None),
    TypeTag.UNKNOWN: ("Any", ("typing", "Any")),
}

GENERATED_ALIAS = [
    'T = TypeVar("T")',
    "",
    'Generated = Annotated[T, "generated"]',
]

JSON_ALIAS = [
    "Json = Union[Dict[str, Any], List[Any], str, int, float, bool, None]",
]

# Names the generated module defines or imports; row types must not shadow them
RESERVED_NAMES = {
    ROOT_TYPE, "T", "Generated", "Json",
    "Annotated", "Any", "Dict", "List", "Optional", "TypedDict", "TypeVar", "Union",
    "Decimal",
}


def is_plain_field(name: str) -> bool:
    """Whether name can be a field in class-syntax TypedDict."""
    return name.isidentifier() and not keyword.iskeyword(name) and not name.startswith("__")


class TypeRenderer:
    """Renders a SchemaModel into deterministic Python source text.

    The output holds one TypedDict per table plus a root ``DB`` TypedDict
    mapping table identifiers to their row types. Rendering is pure: the
    same model and naming convention always give identical text.
    """

    def __init__(self, naming: NamingConvention = NamingConvention.PRESERVE):
        self.naming = naming

    def render(self, model: SchemaModel) -> str:
        imports: Set[Tuple[str, str]] = {("typing", "TypedDict")}
        uses_generated = False
        uses_json = False

        class_names = self._class_names(model)
        blocks = []
        for key, table in model.tables.items():
            fields = []
            field_names = self._field_names([column.name for column in table.columns], f"table '{key}'")
            for field_name, column in zip(field_names, table.columns):
                annotation, column_imports = self._annotation(column)
                imports.update(column_imports)
                uses_generated = uses_generated or column.has_default
                uses_json = uses_json or column.type_tag is TypeTag.JSON
                fields.append((field_name, annotation))
            blocks.append(self._typed_dict(class_names[key], fields))

        root_names = self._field_names(list(model.tables), ROOT_TYPE)
        root_fields = [
            (field_name, class_names[key])
            for field_name, key in zip(root_names, model.tables)
        ]
        blocks.append(self._typed_dict(ROOT_TYPE, root_fields))

        aliases: List[List[str]] = []
        if uses_generated:
            imports.update({("typing", "Annotated"), ("typing", "TypeVar")})
            aliases.append(GENERATED_ALIAS)
        if uses_json:
            imports.update({("typing", n) for n in ("Any", "Dict", "List", "Union")})
            aliases.append(JSON_ALIAS)

        lines = [HEADER, ""]
        lines.extend(self._import_lines(imports))
        for alias in aliases:
            lines.append("")
            lines.extend(alias)
        for block in blocks:
            lines.extend(["", ""])
            lines.extend(block)
        return "\n".join(lines) + "\n"

    def _field_names(self, names: List[str], owner: str) -> List[str]:
        """Convert identifiers; two source names that map to the same key raise ConfigurationError."""
        seen: Dict[str, str] = {}
        converted = []
        for name in names:
            field = convert_identifier(name, self.naming)
            if field in seen:
                raise ConfigurationError(
                    f"Identifiers '{seen[field]}' and '{name}' in {owner} both become "
                    f"'{field}' with {self.naming.value} naming",
                    details={"owner": owner, "identifiers": [seen[field], name], "field": field},
                )
            seen[field] = name
            converted.append(field)
        return converted

    def _class_names(self, model: SchemaModel) -> Dict[str, str]:
        """Assign each table a unique row type name, in model order."""
        taken = set(RESERVED_NAMES)
        names = {}
        for key, table in model.tables.items():
            name = unique_name(to_class_name(table.qualified_name), taken)
            taken.add(name)
            names[key] = name
        return names

    def _annotation(self, column: ColumnDescriptor) -> Tuple[str, Set[Tuple[str, str]]]:
        annotation, type_import = PYTHON_TYPES[column.type_tag]
        imports = {type_import} if type_import else set()
        if column.nullable:
            annotation = f"Optional[{annotation}]"
            imports.add(("typing", "Optional"))
        if column.has_default:
            annotation = f"Generated[{annotation}]"
        return annotation, imports

    @staticmethod
    def _typed_dict(name: str, fields: List[Tuple[str, str]]) -> List[str]:
        if all(is_plain_field(field) for field, _ in fields):
            lines = [f"class {name}(TypedDict):"]
            if not fields:
                lines.append("    pass")
            for field, annotation in fields:
                lines.append(f"    {field}: {annotation}")
            return lines

        # Keys that are keywords or not identifiers need the functional syntax
        lines = [f"{name} = TypedDict(", f'    "{name}",', "    {"]
        for field, annotation in fields:
            lines.append(f"        {json.dumps(field)}: {annotation},")
        lines.extend(["    },", ")"])
        return lines

    @staticmethod
    def _import_lines(imports: Set[Tuple[str, str]]) -> List[str]:
        by_module: Dict[str, Set[str]] = {}
        for module, name in imports:
            by_module.setdefault(module, set()).add(name)
        return [
            f"from {module} import {', '.join(sorted(names, key=str.lower))}"
            for module, names in sorted(by_module.items())
        ]


def render(model: SchemaModel, naming: NamingConvention = NamingConvention.PRESERVE) -> str:
    """Render a SchemaModel with the given naming convention."""
    return TypeRenderer(naming).render(model)
