"""Tests for fieldcheck.validator.decorators module."""

import asyncio

import pytest

from fieldcheck.validator import (
    FieldSchemaInput,
    SchemaError,
    ValidationError,
    default_registry,
)
from fieldcheck.validator.decorators import check, checked, schema, types_check


@pytest.fixture
def records(registry):
    @checked(registry=registry)
    class Bar:
        description: str = check()

    @checked(registry=registry)
    class Foo:
        name: str = check()
        bar: Bar = check(required=False)

    return Foo, Bar


class TestCheck:
    """Test the check() field marker."""

    def test_marker_carries_options(self):
        marker = check(type=list, array_type=str, nullable=True)

        assert isinstance(marker, FieldSchemaInput)
        assert marker.expected_type is list
        assert marker.element_type is str
        assert marker.nullable is True
        assert marker.required is None


class TestChecked:
    """Test the @checked class decorator."""

    def test_markers_are_declared_and_removed(self, registry):
        @checked(registry=registry)
        class Foo:
            name: str = check()
            age: int = check(required=False)
            plain = "kept"

        fields = registry.get(Foo).fields
        assert list(fields) == ["name", "age"]
        assert fields["age"].required is False
        assert "name" not in vars(Foo)
        assert "age" not in vars(Foo)
        assert Foo.plain == "kept"

    def test_bare_decorator_uses_default_registry(self):
        @checked
        class Foo:
            name: str = check()

        assert list(default_registry.get(Foo).fields) == ["name"]

    def test_parent_option(self, registry):
        @checked(registry=registry)
        class Base:
            id: int = check()

        @checked(registry=registry, parent=Base)
        class Detached:
            label: str = check()

        assert [owner for owner, _ in registry.lookup(Detached)] == [Base, Detached]

    def test_non_instantiable_marker_is_dropped(self, registry):
        @checked(registry=registry)
        class Foo:
            name: str = check()
            other: str = check(type={})

        assert list(registry.get(Foo).fields) == ["name"]
        assert "other" not in vars(Foo)


class TestSchemaBuilder:
    """Test the schema() builder."""

    def test_fluent_declaration(self, registry, validator):
        class Foo:
            pass

        schema(Foo, registry=registry).field("name", type=str).field(
            "tags", type=list, array_type=str, nullable=True
        )

        fields = registry.get(Foo).fields
        assert list(fields) == ["name", "tags"]
        assert fields["tags"].element_type is str

        with pytest.raises(ValidationError, match="^tags: Expecting string, received number 1$"):
            validator.validate({"name": "x", "tags": [1]}, Foo)

    def test_parent(self, registry):
        class Base:
            pass

        class Foo:
            pass

        schema(Base, registry=registry).field("id", type=int)
        schema(Foo, parent=Base, registry=registry).field("name", type=str)

        assert [owner for owner, _ in registry.lookup(Foo)] == [Base, Foo]


class TestTypesCheck:
    """Test automatic argument validation."""

    def test_positional_types(self, validator):
        @types_check(int, None, str, validator=validator)
        def handle(count, anything, label):
            return count, anything, label

        assert handle(1, object(), "x")[0] == 1
        with pytest.raises(ValidationError, match='^Expecting number, received string "1"$'):
            handle("1", None, "x")
        with pytest.raises(ValidationError, match="^Expecting string, received number 2$"):
            handle(1, None, 2)

    def test_record_argument(self, records, validator):
        Foo, _ = records

        @types_check(int, Foo, str, validator=validator)
        def handle(count, foo, whatever):
            return count

        with pytest.raises(ValidationError, match="^name: Field is required$"):
            handle(5, None, "foo")

        assert handle(5, {"name": "Name"}, "foo") == 5

    def test_named_types(self, validator):
        @types_check(tags=list[str], validator=validator)
        def tag(item, tags=None):
            return tags

        assert tag("x") is None
        assert tag("x", tags=["a"]) == ["a"]
        with pytest.raises(ValidationError, match="^Expecting string, received number 1$"):
            tag("x", tags=[1])
        with pytest.raises(ValidationError, match="^Expecting string, received number 1$"):
            tag("x", [1])

    def test_unchecked_function_is_untouched(self, validator):
        @types_check(validator=validator)
        def identity(value):
            return value

        assert identity(5) == 5
        assert identity.__name__ == "identity"

    def test_methods_skip_self(self, validator):
        class Service:
            @types_check(int, validator=validator)
            def handle(self, count):
                return count * 2

        assert Service().handle(2) == 4
        with pytest.raises(ValidationError):
            Service().handle("2")

    def test_default_validator(self):
        class Foo:
            pass

        default_registry.declare(Foo, "name", {"type": str})

        @types_check(Foo)
        def handle(foo):
            return foo

        with pytest.raises(ValidationError, match="^name: Field is required$"):
            handle({})

    def test_unknown_parameter_name(self):
        with pytest.raises(SchemaError, match="no parameters named"):

            @types_check(missing=int)
            def handle(count):
                return count

    def test_too_many_positional_types(self):
        with pytest.raises(SchemaError, match="checkable parameters"):

            @types_check(int, int)
            def handle(count):
                return count

    def test_async_function(self, validator):
        @types_check(int, validator=validator)
        async def handle(count):
            return count + 1

        assert asyncio.run(handle(1)) == 2
        # The check runs when the coroutine starts
        with pytest.raises(ValidationError, match='^Expecting number, received string "1"$'):
            asyncio.run(handle("1"))
