"""fieldcheck - runtime schema validation for Python record types.

Declare which fields a class expects, then check object graphs, mappings,
sequences and primitives against those declarations. The first violation is
reported with the path to the offending field.

## Modules

### Validation (`fieldcheck.validator`)
Schema registry, validator and error types.

### Declarations (`fieldcheck.validator.decorators`)
`@checked` classes, the `schema()` builder, YAML/JSON declaration tables and
the `types_check` argument decorator.

### Configuration (`fieldcheck.config`)
Validator settings and their YAML loader.
"""

from .validator import (
    FieldSchema,
    FieldSchemaInput,
    SchemaError,
    SchemaRegistry,
    TypeValidator,
    ValidationError,
    declare,
    validate,
)
from .validator.decorators import check, checked, schema, types_check
from .version import PACKAGE_VERSION as __version__

__all__ = [
    "FieldSchema",
    "FieldSchemaInput",
    "SchemaError",
    "SchemaRegistry",
    "TypeValidator",
    "ValidationError",
    "check",
    "checked",
    "declare",
    "schema",
    "types_check",
    "validate",
]
