"""Type definitions for fieldcheck validator.

This module re-exports the Pydantic models from models.py under their public
names and defines the per-type schema container.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

from .models import FieldSchemaInputModel, FieldSchemaModel

FieldSchema = FieldSchemaModel
FieldSchemaInput = FieldSchemaInputModel

# Runtime kinds a value can be classified as
Kind = Literal["string", "number", "boolean", "date", "array", "object", "null", "any"]

# (owner type, field name -> schema) pairs returned by a registry lookup
SchemaChain = list[tuple[type, Mapping[str, FieldSchemaModel]]]


@dataclass
class TypeSchema:
    """Field schemas declared directly on one record type.

    ``fields`` keeps declaration order. ``parent`` is an explicit parent type
    and overrides the class bases when the ancestor chain is walked.
    """

    owner: type
    fields: dict[str, FieldSchemaModel] = field(default_factory=dict)
    parent: Any | None = None


__all__ = [
    "FieldSchema",
    "FieldSchemaInput",
    "FieldSchemaInputModel",
    "FieldSchemaModel",
    "Kind",
    "SchemaChain",
    "TypeSchema",
]
