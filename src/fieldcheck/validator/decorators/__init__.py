"""Declaration surface and argument validation for fieldcheck.

These helpers all end in ``SchemaRegistry.declare`` or
``TypeValidator.validate``; they add no validation rules of their own.

Example:
    >>> from fieldcheck.validator.decorators import check, checked, types_check
    >>>
    >>> @checked
    ... class Bar:
    ...     description: str = check()
    >>>
    >>> @types_check(bar=Bar)
    ... def describe(bar: Bar) -> str:
    ...     return bar.description
    >>>
    >>> # Or from a declaration table
    >>> load_schema_from_file("schemas/records.yaml", types={"Bar": Bar})
"""

from .decorators import SchemaBuilder, check, checked, schema, types_check
from .loaders import BUILTIN_TYPES, load_schema, load_schema_from_file, register_schema_table

__all__ = [
    # Declaration
    "check",
    "checked",
    "schema",
    "SchemaBuilder",
    # Argument validation
    "types_check",
    # Schema loaders
    "BUILTIN_TYPES",
    "load_schema",
    "load_schema_from_file",
    "register_schema_table",
]
