"""Core validation logic for fieldcheck."""

import logging
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from fieldcheck.config import ValidatorConfig, load_config

from .converters import TypeConverter, ValidationError
from .registry import SchemaRegistry, default_registry
from .types import Kind, SchemaChain

logger = logging.getLogger(__name__)

FIELD_REQUIRED = "Field is required"
FIELD_NOT_NULLABLE = "Field can't be null"

# Kinds an "object" expectation rejects; arrays, dates and null count as objects
PRIMITIVE_KINDS = ("string", "number", "boolean")


class _Failure(Exception):
    """Mismatch travelling up the recursion, collecting its path on the way."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason
        self.fields: list[str] = []
        # Index suffix of an array element whose own fields failed, e.g. "[1]"
        self.suffix = ""

    def attach_index(self, index: int) -> None:
        # An element that is itself the offender keeps the bare field path
        if self.fields:
            self.suffix = f"[{index}]{self.suffix}"

    def prepend(self, field_name: str) -> None:
        self.fields.insert(0, f"{field_name}{self.suffix}")
        self.suffix = ""

    def path(self) -> str:
        segments = [self.suffix, *self.fields] if self.suffix else self.fields
        return " -> ".join(segments)


class TypeValidator:
    """Checks values against the schemas held by a SchemaRegistry.

    Validation is fail-fast: the walk stops at the first mismatch and only
    that one is reported.

    Example:
        >>> validator = TypeValidator()
        >>> validator.validate("foo", str)
        >>> validator.validate(["foo"], list, int)
        Traceback (most recent call last):
        ...
        fieldcheck.validator.converters.ValidationError: Expecting number, received string "foo"
    """

    def __init__(
        self,
        registry: SchemaRegistry | None = None,
        config: ValidatorConfig | None = None,
    ):
        """Initialize the validator.

        Args:
            registry: Registry to read schemas from (default: process-wide registry)
            config: Validator settings (default: ValidatorConfig())
        """
        self.registry = registry if registry is not None else default_registry
        self.config = config if config is not None else ValidatorConfig()

    def validate(self, value: Any, expected_type: Any, element_type: Any = None) -> None:
        """Validate a value against an expected type.

        Args:
            value: The value to check
            expected_type: A primitive, date, array or record type, or ``object``
            element_type: Expected element type when ``expected_type`` is an array

        Raises:
            ValidationError: On the first mismatch found
        """
        try:
            self._validate_value(value, expected_type, element_type, 0)
        except _Failure as e:
            path = e.path()
            logger.debug(f"Validation against {expected_type!r} failed at {path or '<root>'}")
            raise ValidationError(e.reason, path) from None

    def _validate_value(self, value: Any, expected_type: Any, element_type: Any, depth: int) -> None:
        if depth > self.config.max_depth:
            raise _Failure(f"Maximum validation depth of {self.config.max_depth} exceeded")

        expected_type, element_type = TypeConverter.normalize_type(expected_type, element_type)
        kind = TypeConverter.resolve_kind(expected_type)
        if kind is None:
            return

        chain = self.registry.lookup(expected_type)
        if chain:
            self._validate_fields(value, chain, depth)
        else:
            self._validate_leaf(value, kind, element_type, depth)

    def _validate_fields(self, value: Any, chain: SchemaChain, depth: int) -> None:
        for _owner, fields in chain:
            for name, field_schema in fields.items():
                present, field_value = self._get_field(value, name)
                if not present:
                    if field_schema.required:
                        failure = _Failure(FIELD_REQUIRED)
                        failure.prepend(name)
                        raise failure
                    continue

                if field_value is None:
                    if not field_schema.nullable:
                        failure = _Failure(FIELD_NOT_NULLABLE)
                        failure.prepend(name)
                        raise failure
                    continue

                if not self._should_descend(field_value):
                    continue

                try:
                    self._validate_value(
                        field_value, field_schema.expected_type, field_schema.element_type, depth + 1
                    )
                except _Failure as e:
                    e.prepend(name)
                    raise

    def _validate_leaf(self, value: Any, kind: Kind, element_type: Any, depth: int) -> None:
        if kind == "any":
            return

        if kind == "array":
            if not TypeConverter.is_array(value):
                raise self._mismatch("array", value)
            if element_type is None:
                return
            for index, item in enumerate(TypeConverter.to_sequence(value)):
                try:
                    self._validate_value(item, element_type, None, depth + 1)
                except _Failure as e:
                    e.attach_index(index)
                    raise
            return

        if kind == "date":
            if not TypeConverter.is_valid_date(value):
                raise self._mismatch("date", value)
            return

        actual = TypeConverter.kind_of(value)
        if kind == "object":
            if actual in PRIMITIVE_KINDS:
                raise self._mismatch(kind, value)
            return

        if actual != kind:
            raise self._mismatch(kind, value)

    def _should_descend(self, value: Any) -> bool:
        if self.config.skip_falsy_values:
            return TypeConverter.is_truthy(value)
        return True

    @staticmethod
    def _get_field(value: Any, name: str) -> tuple[bool, Any]:
        """Look up a field as an own key or instance attribute.

        Class attributes and properties don't count as present.
        """
        if isinstance(value, Mapping):
            return (name in value, value.get(name))

        try:
            attributes = vars(value)
        except TypeError:
            attributes = None
        if attributes is not None and name in attributes:
            return True, attributes[name]

        if hasattr(type(value), "__slots__") and hasattr(value, name):
            return True, getattr(value, name)
        return False, None

    @staticmethod
    def _mismatch(expected: str, value: Any) -> _Failure:
        actual = TypeConverter.kind_of(value)
        return _Failure(
            f"Expecting {expected}, received {actual} {TypeConverter.render_literal(value)}"
        )


@lru_cache(maxsize=1)
def get_default_validator() -> TypeValidator:
    """Validator over the default registry, configured from ``FIELDCHECK_CONFIG``."""
    return TypeValidator(default_registry, load_config())


def validate(value: Any, expected_type: Any, element_type: Any = None) -> None:
    """Validate a value with the default validator. See ``TypeValidator.validate``."""
    get_default_validator().validate(value, expected_type, element_type)
