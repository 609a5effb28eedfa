"""Declaration and validation decorators for fieldcheck."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from ..converters import SchemaError
from ..core import TypeValidator, get_default_validator
from ..registry import SchemaRegistry, default_registry
from ..types import FieldSchemaInput

T = TypeVar("T")

# Leading parameters skipped when mapping positional types to parameters
_BOUND_PARAMETERS = ("self", "cls")


def check(
    type: Any = None,
    array_type: Any = None,
    required: bool | None = None,
    nullable: bool | None = None,
) -> FieldSchemaInput:
    """Mark a class attribute as a validated field.

    Used together with ``@checked``. Without an explicit ``type`` the
    field's annotation is used.

    Example:
        >>> @checked
        ... class Foo:
        ...     name: str = check()
        ...     age: int = check(required=False)
        ...     hobbies: list[str] = check(nullable=True)
    """
    return FieldSchemaInput(type=type, array_type=array_type, required=required, nullable=nullable)


def checked(
    cls: type[T] | None = None,
    *,
    parent: type | None = None,
    registry: SchemaRegistry | None = None,
) -> Any:
    """Class decorator registering every ``check()`` attribute of a class.

    The markers are removed from the class body, so instances only have the
    attributes they are given. Can be used bare (``@checked``) or with
    options (``@checked(parent=Base)``).
    """
    target = registry if registry is not None else default_registry

    def decorate(klass: type[T]) -> type[T]:
        if parent is not None:
            target.set_parent(klass, parent)
        for name, marker in list(vars(klass).items()):
            if isinstance(marker, FieldSchemaInput):
                target.declare(klass, name, marker)
                delattr(klass, name)
        return klass

    if cls is None:
        return decorate
    return decorate(cls)


class SchemaBuilder:
    """Fluent declaration of the fields of one type.

    Example:
        >>> schema(Foo).field("name", type=str).field("age", type=int, required=False)
    """

    def __init__(self, owner_type: type, registry: SchemaRegistry):
        self.owner_type = owner_type
        self.registry = registry

    def field(
        self,
        name: str,
        type: Any = None,
        array_type: Any = None,
        required: bool | None = None,
        nullable: bool | None = None,
    ) -> "SchemaBuilder":
        self.registry.declare(
            self.owner_type,
            name,
            FieldSchemaInput(type=type, array_type=array_type, required=required, nullable=nullable),
        )
        return self


def schema(
    owner_type: type,
    parent: type | None = None,
    registry: SchemaRegistry | None = None,
) -> SchemaBuilder:
    """Start declaring fields on ``owner_type``."""
    target = registry if registry is not None else default_registry
    if parent is not None:
        target.set_parent(owner_type, parent)
    return SchemaBuilder(owner_type, target)


class types_check:
    """Validate function arguments before the function body runs.

    Expected types are given by position (``self``/``cls`` are skipped) or by
    parameter name; ``None`` leaves a positional parameter unchecked. Only
    arguments actually passed are checked. On success the call is forwarded
    unchanged; the first failing argument raises ValidationError.

    Examples:
        @types_check(int, Foo)
        def handle(count, foo): ...

        @types_check(foo=Foo, tags=list[str])
        async def handle(count, foo, tags): ...
    """

    def __init__(self, *types: Any, validator: TypeValidator | None = None, **named_types: Any):
        self.types = types
        self.named_types = named_types
        self.validator = validator

    def __call__(self, func: T) -> T:
        expected = self._map_types_to_params(func)
        sig = inspect.signature(func)  # type: ignore[arg-type]

        def check_arguments(args: tuple, kwargs: dict) -> None:
            validator = self.validator if self.validator is not None else get_default_validator()
            bound = sig.bind(*args, **kwargs)
            for name, expected_type in expected.items():
                if name in bound.arguments:
                    validator.validate(bound.arguments[name], expected_type)

        if inspect.iscoroutinefunction(func):

            @wraps(func)  # type: ignore[arg-type]
            async def async_wrapper(*args, **kwargs):
                check_arguments(args, kwargs)
                return await func(*args, **kwargs)  # type: ignore[operator]

            return async_wrapper  # type: ignore[return-value]

        @wraps(func)  # type: ignore[arg-type]
        def sync_wrapper(*args, **kwargs):
            check_arguments(args, kwargs)
            return func(*args, **kwargs)  # type: ignore[operator]

        return sync_wrapper  # type: ignore[return-value]

    def _map_types_to_params(self, func: Any) -> dict[str, Any]:
        """Map positional and named expected types to parameter names.

        Raises:
            SchemaError: If a type doesn't match any parameter
        """
        params = list(inspect.signature(func).parameters)
        if params and params[0] in _BOUND_PARAMETERS:
            params = params[1:]

        if len(self.types) > len(params):
            raise SchemaError(
                f"{func.__name__} takes {len(params)} checkable parameters, "
                f"got {len(self.types)} types"
            )

        expected = {
            name: expected_type
            for name, expected_type in zip(params, self.types)
            if expected_type is not None
        }

        unknown = set(self.named_types) - set(params)
        if unknown:
            raise SchemaError(f"{func.__name__} has no parameters named: {sorted(unknown)}")
        expected.update(self.named_types)
        return expected
