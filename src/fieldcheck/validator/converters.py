"""Type classification utilities for fieldcheck validator."""

import json
import numbers
import types
from datetime import date, time
from typing import Any, Union, get_args, get_origin

import numpy as np
import pandas as pd

from .types import Kind


class ValidationError(ValueError):
    """Raised when a value doesn't match its declared schema.

    The message reads ``<path>: <reason>``, or just ``<reason>`` when the
    value passed to ``validate`` is itself the offender.
    """

    def __init__(self, reason: str, path: str = ""):
        self.reason = reason
        self.path = path
        super().__init__(f"{path}: {reason}" if path else reason)


class SchemaError(ValueError):
    """Raised when a schema declaration can't be registered."""

    pass


class TypeConverter:
    """Utility class for classifying types and values into kinds."""

    # Containers accepted wherever an array is expected
    ARRAY_TYPES: tuple[type, ...] = (list, tuple, np.ndarray, pd.Series)
    # datetime and pandas.Timestamp are date subclasses
    DATE_TYPES: tuple[type, ...] = (date, np.datetime64)

    @staticmethod
    def normalize_type(expected_type: Any, element_type: Any = None) -> tuple[Any, Any]:
        """Reduce typing constructs to a concrete type and element type.

        ``Optional[X]`` becomes ``X``, ``typing.Any`` becomes ``object`` and
        ``list[X]`` becomes ``(list, X)`` unless an element type is given.
        Unions of several types are returned as-is and end up unverifiable.
        """
        if expected_type is Any:
            return object, element_type

        origin = get_origin(expected_type)
        if origin is None:
            return expected_type, element_type

        args = get_args(expected_type)
        if origin is Union or origin is types.UnionType:
            members = [arg for arg in args if arg is not type(None)]
            if len(members) == 1:
                return TypeConverter.normalize_type(members[0], element_type)
            return expected_type, element_type

        if isinstance(origin, type) and issubclass(origin, TypeConverter.ARRAY_TYPES):
            if element_type is None and args:
                # tuple[int, str] has no single element type
                if origin is not tuple or len(args) == 1 or args[1] is Ellipsis:
                    element_type = args[0]
            return origin, element_type

        return origin, element_type

    @staticmethod
    def resolve_kind(expected_type: Any) -> Kind | None:
        """Classify an expected type, or return None if it can't be verified.

        Known primitive, array and date types are classified directly. Any
        other class is probed by constructing it with no arguments; the kind
        of the resulting instance is the expected kind.
        """
        if expected_type is object:
            return "any"
        if not isinstance(expected_type, type):
            return None
        if issubclass(expected_type, (bool, np.bool_)):
            return "boolean"
        if issubclass(expected_type, TypeConverter.ARRAY_TYPES):
            return "array"
        if issubclass(expected_type, TypeConverter.DATE_TYPES):
            return "date"

        try:
            probe = expected_type()
        except Exception:
            return None
        return TypeConverter.kind_of(probe)

    @staticmethod
    def kind_of(value: Any) -> Kind:
        """Classify a runtime value."""
        if value is None or value is pd.NaT:
            return "null"
        if isinstance(value, (bool, np.bool_)):
            return "boolean"
        if isinstance(value, numbers.Number):
            return "number"
        if isinstance(value, str):
            return "string"
        if isinstance(value, TypeConverter.DATE_TYPES):
            return "date"
        if isinstance(value, TypeConverter.ARRAY_TYPES):
            return "array"
        return "object"

    @staticmethod
    def is_array(value: Any) -> bool:
        return isinstance(value, TypeConverter.ARRAY_TYPES)

    @staticmethod
    def to_sequence(value: Any) -> list[Any] | tuple[Any, ...]:
        """Return array elements as plain Python values."""
        if isinstance(value, (np.ndarray, pd.Series)):
            return value.tolist()
        return value

    @staticmethod
    def is_valid_date(value: Any) -> bool:
        """Check that a value is a date holding a real timestamp (not NaT)."""
        if isinstance(value, np.datetime64):
            return not np.isnat(value)
        return isinstance(value, date) and value is not pd.NaT

    @staticmethod
    def is_truthy(value: Any) -> bool:
        """Python truthiness, with numpy/pandas containers truthy when non-empty."""
        if isinstance(value, (np.ndarray, pd.Series, pd.DataFrame)):
            return value.size > 0
        return bool(value)

    @staticmethod
    def render_literal(value: Any) -> str:
        """Serialize a value for error messages, JSON style."""
        try:
            return json.dumps(value, default=_literal_default, ensure_ascii=False)
        except (TypeError, ValueError):
            # Circular references and objects that refuse serialization
            return repr(value)


def _literal_default(obj: Any) -> Any:
    if obj is pd.NaT:
        return None
    if isinstance(obj, (date, time)):
        return obj.isoformat()
    if isinstance(obj, np.datetime64):
        return None if np.isnat(obj) else str(obj)
    if isinstance(obj, (np.ndarray, pd.Series)):
        return obj.tolist()
    if isinstance(obj, np.generic):
        return obj.item()
    try:
        attributes = vars(obj)
    except TypeError:
        return repr(obj)
    return {key: value for key, value in attributes.items() if not key.startswith("_")}
