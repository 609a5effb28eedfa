"""Schema loading utilities for fieldcheck.

Declarations can be kept in a YAML or JSON table, one entry per type:

    Foo:
      fields:
        name: {type: str}
        age: {type: int, required: false}
        hobbies: {type: list, array_type: str, nullable: true}
        bar: {type: Bar}
    Bar:
      parent: Base
      fields:
        description: {type: str}

A plain type name (``name: str``) is shorthand for ``{type: str}``. Type
names are resolved against the ``types`` mapping passed by the caller,
then against a small set of builtin names.
"""

import json
from collections.abc import Mapping
from datetime import date, datetime
from pathlib import Path
from typing import Any, cast

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..registry import SchemaRegistry, default_registry
from ..types import FieldSchemaInput

BUILTIN_TYPES: dict[str, Any] = {
    "str": str,
    "string": str,
    "int": int,
    "float": float,
    "number": float,
    "bool": bool,
    "boolean": bool,
    "list": list,
    "array": list,
    "tuple": tuple,
    "dict": dict,
    "object": object,
    "date": date,
    "datetime": datetime,
}

_FIELD_TYPE_KEYS = ("type", "array_type")


def load_schema(
    content: str,
    types: Mapping[str, type],
    format: str = "yaml",
    registry: SchemaRegistry | None = None,
) -> list[type]:
    """Register the declarations found in a schema table.

    Args:
        content: Schema content as string
        types: Record classes referenced by name in the table
        format: Format of the content ('yaml' or 'json')
        registry: Registry to declare into (default: process-wide registry)

    Returns:
        The owner types that were declared, in table order

    Raises:
        ValueError: If the format is not supported, parsing fails, or the
            table is malformed or names an unknown type
    """
    if format == "yaml":
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML: {e}") from e
    elif format == "json":
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise ValueError(f"Failed to parse JSON: {e}") from e
    else:
        raise ValueError(f"Unsupported format: {format}. Use 'yaml' or 'json'")

    return register_schema_table(data or {}, types, registry)


def load_schema_from_file(
    path: str | Path,
    types: Mapping[str, type],
    registry: SchemaRegistry | None = None,
) -> list[type]:
    """Register the declarations found in a YAML or JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        ValueError: If file format is not supported or the table is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    if path.suffix.lower() in [".yaml", ".yml"]:
        format = "yaml"
    elif path.suffix.lower() == ".json":
        format = "json"
    else:
        raise ValueError(f"Unsupported file extension: {path.suffix}. Use .yaml, .yml, or .json")

    content = path.read_text(encoding="utf-8")
    return load_schema(content, types, format=format, registry=registry)


def register_schema_table(
    data: Any,
    types: Mapping[str, type],
    registry: SchemaRegistry | None = None,
) -> list[type]:
    """Register an already parsed schema table. See ``load_schema``."""
    target = registry if registry is not None else default_registry

    if not isinstance(data, Mapping):
        raise ValueError("Schema table must be a mapping of type names to declarations")

    owners = []
    for type_name, entry in data.items():
        owner = _resolve_type(type_name, types)
        entry = entry or {}
        if not isinstance(entry, Mapping):
            raise ValueError(f"Declaration of {type_name} must be a mapping")

        unexpected = set(entry) - {"parent", "fields"}
        if unexpected:
            raise ValueError(f"Unexpected keys in {type_name}: {', '.join(sorted(unexpected))}")

        if entry.get("parent"):
            target.set_parent(owner, _resolve_type(entry["parent"], types))

        fields = entry.get("fields") or {}
        if not isinstance(fields, Mapping):
            raise ValueError(f"Fields of {type_name} must be a mapping")

        for field_name, options in fields.items():
            target.declare(owner, field_name, _field_input(type_name, field_name, options, types))
        owners.append(owner)

    return owners


def _field_input(
    type_name: str, field_name: str, options: Any, types: Mapping[str, type]
) -> FieldSchemaInput:
    # "name: str" is shorthand for "name: {type: str}"
    if isinstance(options, str):
        options = {"type": options}
    elif options is not None and not isinstance(options, Mapping):
        raise ValueError(f"Declaration of {type_name}.{field_name} must be a mapping")

    options = dict(cast(Mapping[str, Any], options or {}))
    for key in _FIELD_TYPE_KEYS:
        if options.get(key) is not None:
            options[key] = _resolve_type(options[key], types)
    try:
        return FieldSchemaInput.model_validate(options)
    except PydanticValidationError as e:
        raise ValueError(f"Invalid declaration of {type_name}.{field_name}: {e}") from e


def _resolve_type(name: Any, types: Mapping[str, type]) -> Any:
    if not isinstance(name, str):
        raise ValueError(f"Type names must be strings, got {name!r}")
    if name in types:
        return types[name]
    if name in BUILTIN_TYPES:
        return BUILTIN_TYPES[name]
    raise ValueError(f"Unknown type: {name}")
