"""fieldcheck validator - schema declarations and runtime value checks.

## Key Components

### Core Classes
- `SchemaRegistry`: Per-type store of field schemas
- `TypeValidator`: Recursive, fail-fast matcher over a registry
- `ValidationError`: Exception raised for the first mismatch found
- `SchemaError`: Exception raised for invalid declarations

### Schema Types
- `FieldSchemaInput`: Options given when declaring a field
- `FieldSchema`: Resolved rules of one field
- `TypeSchema`: Fields declared directly on one type

## Quick Examples

```python
from fieldcheck.validator import declare, validate, ValidationError

class Bar:
    pass

class Foo:
    pass

declare(Bar, "description", {"type": str})
declare(Foo, "name", {"type": str})
declare(Foo, "tags", {"type": list, "array_type": str, "nullable": True})
declare(Foo, "bar", {"type": Bar})

foo = Foo()
foo.name = "Name"
foo.tags = None
foo.bar = Bar()

try:
    validate(foo, Foo)
except ValidationError as e:
    print(e)  # bar -> description: Field is required
```
"""

from .converters import SchemaError, TypeConverter, ValidationError
from .core import TypeValidator, get_default_validator, validate
from .registry import SchemaRegistry, declare, default_registry
from .types import FieldSchema, FieldSchemaInput, TypeSchema

__all__ = [
    # Types
    "FieldSchema",
    "FieldSchemaInput",
    "TypeSchema",
    # Errors and classification
    "SchemaError",
    "TypeConverter",
    "ValidationError",
    # Registry
    "SchemaRegistry",
    "declare",
    "default_registry",
    # Core validator
    "TypeValidator",
    "get_default_validator",
    "validate",
]
