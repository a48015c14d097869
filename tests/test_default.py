import pytest

from tether import default
from tether.errors import BindingNotFound


class Person:
    def __init__(self, name="John Doe"):
        self.name = name


@pytest.fixture(autouse=True)
def fresh_default_registry():
    yield default.reset_default_registry()
    default.reset_default_registry()


def test_default_registry_starts_empty(fresh_default_registry):
    assert default.default_registry() is fresh_default_registry
    assert len(fresh_default_registry) == 0


def test_bind_and_get_through_the_facade():
    registry = default.bind_singleton(Person, Person, {"name": "Peter Parker"})

    assert registry is default.default_registry()
    assert default.has(Person)
    assert default.get(Person).name == "Peter Parker"
    assert default.get(Person) is default.get(Person)


def test_bind_multiple_accepts_call_arguments():
    default.bind_multiple(Person, Person).add_singleton("nothing", None)

    assert default.get(Person, {"name": "Mary Jane"}).name == "Mary Jane"
    assert default.get(Person) is not default.get(Person)
    assert default.get("nothing") is None


def test_clear_empties_the_default_registry():
    default.bind_singleton(Person, Person)

    default.clear()

    assert not default.has(Person)
    with pytest.raises(BindingNotFound):
        default.get(Person)


def test_reset_replaces_the_default_registry():
    previous = default.bind_singleton(Person, Person)

    fresh = default.reset_default_registry()

    assert fresh is not previous
    assert not default.has(Person)
    assert previous.has(Person)
