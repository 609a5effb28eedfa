"""Schema registry: per-type field declarations.

The registry is populated once, usually at import time while record classes
are defined, and read during validation. Writes are serialized by a lock;
reads take no lock and rely on the registry not being mutated while
validation runs. Call ``freeze()`` once declarations are complete to make any
late declaration fail loudly.
"""

import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, get_type_hints

from .converters import SchemaError, TypeConverter
from .types import FieldSchema, FieldSchemaInput, SchemaChain, TypeSchema

logger = logging.getLogger(__name__)


class SchemaRegistry:
    """Store of field schemas keyed by owner type.

    Example:
        >>> registry = SchemaRegistry()
        >>> registry.declare(Foo, "name", {"type": str})
        >>> registry.declare(Foo, "age", FieldSchemaInput(type=int, required=False))
        >>> [owner for owner, _ in registry.lookup(Foo)]
        [<class 'Foo'>]
    """

    def __init__(self) -> None:
        self._schemas: dict[type, TypeSchema] = {}
        self._lock = threading.Lock()
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Reject any further declaration."""
        with self._lock:
            self._frozen = True

    def clear(self) -> None:
        """Forget every declaration and unfreeze the registry."""
        with self._lock:
            self._schemas.clear()
            self._frozen = False

    def __contains__(self, owner_type: object) -> bool:
        return owner_type in self._schemas

    def get(self, owner_type: type) -> TypeSchema | None:
        """Return the schema declared directly on a type, if any."""
        return self._schemas.get(owner_type)

    def declare(
        self,
        owner_type: type,
        field_name: str,
        schema: FieldSchemaInput | Mapping[str, Any] | None = None,
    ) -> FieldSchema | None:
        """Declare validation rules for one field of a record type.

        The expected type is the explicit one from ``schema`` or, failing
        that, the owner's annotation for the field. A type that can't be
        instantiated without arguments makes the field unchecked: the
        declaration is dropped and None is returned. The same applies to an
        explicit element type of an array field, except that only the element
        check is dropped.

        Args:
            owner_type: The record class owning the field
            field_name: Name of the field
            schema: Declaration options, as a FieldSchemaInput or a dict

        Returns:
            The registered FieldSchema, or None if the declaration was dropped

        Raises:
            SchemaError: If the registry is frozen
        """
        if schema is None:
            schema = FieldSchemaInput()
        elif isinstance(schema, Mapping):
            schema = FieldSchemaInput.model_validate(schema)

        declared_type = schema.expected_type
        if declared_type is None:
            declared_type = self._annotation_for(owner_type, field_name)

        expected_type, element_type = TypeConverter.normalize_type(
            declared_type, schema.element_type
        )
        kind = TypeConverter.resolve_kind(expected_type)
        if kind is None:
            logger.debug(
                f"Skipping {owner_type.__name__}.{field_name}: "
                f"type {declared_type!r} is not instantiable"
            )
            return None

        is_array = kind == "array"
        if is_array and element_type is not None:
            element_kind = TypeConverter.resolve_kind(TypeConverter.normalize_type(element_type)[0])
            if element_kind is None:
                logger.debug(
                    f"Disabling element check on {owner_type.__name__}.{field_name}: "
                    f"type {element_type!r} is not instantiable"
                )
                element_type = None

        field_schema = FieldSchema(
            expected_type=expected_type,
            is_array=is_array,
            element_type=element_type,
            required=True if schema.required is None else schema.required,
            nullable=False if schema.nullable is None else schema.nullable,
        )

        with self._lock:
            if self._frozen:
                raise SchemaError(
                    f"Cannot declare {owner_type.__name__}.{field_name}: registry is frozen"
                )
            type_schema = self._schemas.setdefault(owner_type, TypeSchema(owner=owner_type))
            type_schema.fields[field_name] = field_schema

        logger.debug(f"Declared {owner_type.__name__}.{field_name}: {field_schema!r}")
        return field_schema

    def set_parent(self, owner_type: type, parent_type: type) -> None:
        """Set an explicit parent type, overriding the class bases.

        Raises:
            SchemaError: If the registry is frozen or the parent chain
                would loop back to ``owner_type``
        """
        with self._lock:
            if self._frozen:
                raise SchemaError(
                    f"Cannot set parent of {owner_type.__name__}: registry is frozen"
                )
            if owner_type in self._lineage(parent_type):
                raise SchemaError(
                    f"Parent cycle: {parent_type.__name__} already inherits "
                    f"from {owner_type.__name__}"
                )
            type_schema = self._schemas.setdefault(owner_type, TypeSchema(owner=owner_type))
            type_schema.parent = parent_type

    def lookup(self, owner_type: type) -> SchemaChain:
        """Return the field maps that apply to a type.

        Each entry is ``(ancestor, {field name: FieldSchema})``, the root-most
        ancestor first and ``owner_type`` itself last. Types without declared
        fields contribute no entry.
        """
        chain: SchemaChain = []
        for ancestor in self._lineage(owner_type):
            type_schema = self._schemas.get(ancestor)
            if type_schema is not None and type_schema.fields:
                chain.append((ancestor, MappingProxyType(type_schema.fields)))
        return chain

    def _parents_of(self, owner_type: type) -> list[type]:
        type_schema = self._schemas.get(owner_type)
        if type_schema is not None and type_schema.parent is not None:
            return [type_schema.parent]
        return [base for base in getattr(owner_type, "__bases__", ()) if base is not object]

    def _lineage(self, owner_type: type) -> list[type]:
        """Walk a type and its parents, every parent before its children.

        Parents are visited last-to-first, so a diamond ``D(B, C)`` over
        ``A`` comes out as ``[A, C, B, D]``, the reversed ``D.__mro__``.
        """
        order: list[type] = []
        seen: set[type] = set()

        def visit(current: type) -> None:
            if current in seen or current is object:
                return
            seen.add(current)
            for parent in reversed(self._parents_of(current)):
                visit(parent)
            order.append(current)

        visit(owner_type)
        return order

    @staticmethod
    def _annotation_for(owner_type: type, field_name: str) -> Any:
        try:
            hints = get_type_hints(owner_type)
        except (NameError, TypeError):
            # Unresolvable forward references
            hints = getattr(owner_type, "__annotations__", {})
        return hints.get(field_name)


# Process-wide registry backing the module-level helpers
default_registry = SchemaRegistry()


def declare(
    owner_type: type,
    field_name: str,
    schema: FieldSchemaInput | Mapping[str, Any] | None = None,
) -> FieldSchema | None:
    """Declare a field on the default registry. See ``SchemaRegistry.declare``."""
    return default_registry.declare(owner_type, field_name, schema)
