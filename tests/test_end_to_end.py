"""End-to-end checks through the top-level fieldcheck API."""

import pytest

from fieldcheck import ValidationError, check, checked, types_check, validate


def test_foo_bar_scenario():
    """Declare Foo/Bar on the default registry and walk them to success."""

    @checked
    class Bar:
        description: str = check()

    @checked
    class Foo:
        name: str = check()
        age: int = check(required=False)
        hobbies: list[str] = check(nullable=True)
        bar: Bar = check()

    foo = Foo()
    with pytest.raises(ValidationError, match="^name: Field is required$"):
        validate(foo, Foo)

    foo.name = "Name"
    foo.hobbies = [3, 4]
    with pytest.raises(ValidationError, match="^hobbies: Expecting string, received number 3$"):
        validate(foo, Foo)

    foo.hobbies = None
    foo.bar = None
    with pytest.raises(ValidationError, match="^bar: Field can't be null$"):
        validate(foo, Foo)

    foo.bar = Bar()
    with pytest.raises(ValidationError, match="^bar -> description: Field is required$"):
        validate(foo, Foo)

    foo.bar.description = "Description"
    foo.age = 42
    validate(foo, Foo)

    @types_check(int, Foo)
    def greet(times, foo):
        return " ".join([foo.name] * times)

    assert greet(2, foo) == "Name Name"
    with pytest.raises(ValidationError, match="^name: Field is required$"):
        greet(1, Foo())
