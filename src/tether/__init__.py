"""Tether inversion-of-control container.

Tether maps abstract names (strings or classes) to construction recipes and
resolves object graphs on demand, injecting each constructor or factory
parameter from an explicit override, a nested binding, or its default value.

Key Features:
    - Singleton and transient ("multiple") lifetimes
    - Type-directed injection using standard type hints, ``Optional`` and
      ``Annotated[T, "name"]`` qualifiers
    - Registration-time overrides and per-call arguments
    - Cycle detection that always leaves bindings resolvable afterwards
    - Thread-safe resolution and at-most-once singleton construction
    - A process-wide default registry with a module-level facade

Basic Usage:
    >>> from tether import Registry
    >>>
    >>> registry = Registry()
    >>> registry.add_singleton(Database, MariaDatabase, {"name": "Test Database"})
    >>> registry.add_singleton(Configurations, Configurations)
    >>>
    >>> db = registry.resolve(Database)

The package consists of several core modules:
    - registry: The registry of bindings and its public API
    - binding: A single binding and its resolution state machine
    - parameters: Parameter introspection and resolution
    - domain: Lifetimes, implementation variants and parameter descriptors
    - default: The process-wide default registry
    - errors: Resolution exceptions
"""

from tether.binding import Binding
from tether.default import (
    bind_multiple,
    bind_singleton,
    default_registry,
    get,
    reset_default_registry,
)
from tether.domain import Factory, Instance, Lifetime, Null, TypeReference
from tether.errors import (
    BindingNotFound,
    ConstructionError,
    CyclicDependency,
    InvalidArguments,
    MissingParameterValue,
    ResolveError,
)
from tether.registry import Registry

__all__ = [
    "Registry",
    "Binding",
    "Lifetime",
    "Null",
    "TypeReference",
    "Factory",
    "Instance",
    "ResolveError",
    "BindingNotFound",
    "CyclicDependency",
    "InvalidArguments",
    "MissingParameterValue",
    "ConstructionError",
    "default_registry",
    "reset_default_registry",
    "bind_multiple",
    "bind_singleton",
    "get",
]
