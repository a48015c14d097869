"""Domain models used throughout the container."""

import inspect
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Optional, Union

__all__ = [
    "BindingKey",
    "Lifetime",
    "Null",
    "TypeReference",
    "Factory",
    "Instance",
    "Implementation",
    "Dependency",
    "implementation_of",
    "describe",
]


BindingKey = Union[str, type]


class Lifetime(Enum):
    """How often a binding constructs its implementation."""

    MULTIPLE = "multiple"
    SINGLETON = "singleton"


@dataclass(frozen=True)
class Null:
    """An implementation that explicitly resolves to ``None``."""


@dataclass(frozen=True)
class TypeReference:
    """A class constructed on resolution, with its ``__init__`` parameters injected."""

    cls: type


@dataclass(frozen=True)
class Factory:
    """A callable invoked on resolution, with its parameters injected."""

    func: Callable[..., Any]


@dataclass(frozen=True, eq=False)
class Instance:
    """A pre-built object returned as-is, never reconstructed."""

    obj: Any


Implementation = Union[Null, TypeReference, Factory, Instance]


@dataclass(frozen=True)
class Dependency:
    """Describes one formal parameter of a constructor or factory.

    Attributes:
        parameter_name: The parameter name in the callable's signature.
        kind: The ``inspect.Parameter`` kind, used to decide how the value is passed.
        declared_type: The annotated type with any ``Optional`` wrapper removed,
            or ``None`` if the parameter is not annotated.
        component_name: An optional binding name taken from ``Annotated`` metadata,
            used in preference to the declared type.
        has_default: Whether the signature declares a default value.
        default: The declared default value, if any.
    """

    parameter_name: str
    kind: Any = inspect.Parameter.POSITIONAL_OR_KEYWORD
    declared_type: Optional[Any] = None
    component_name: Optional[str] = None
    has_default: bool = False
    default: Any = field(default=None, compare=False)


def implementation_of(value: Any) -> Implementation:
    """Classify a raw registration value into one of the implementation variants.

    Values that are already variants are returned unchanged, which is the way
    to register a callable object as an :class:`Instance`.

    Example:
        >>> implementation_of(None)           # Null()
        >>> implementation_of(Database)       # TypeReference(Database)
        >>> implementation_of(make_database)  # Factory(make_database)
        >>> implementation_of(Database())     # Instance(<Database>)
    """
    if isinstance(value, (Null, TypeReference, Factory, Instance)):
        return value
    if value is None:
        return Null()
    if inspect.isclass(value):
        return TypeReference(value)
    if callable(value):
        return Factory(value)
    return Instance(value)


def describe(key: Any) -> str:
    """Render a binding key for diagnostics."""
    if inspect.isclass(key):
        return key.__qualname__
    return str(key)
