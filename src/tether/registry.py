"""The registry of bindings and its public resolution API."""

import inspect
import logging
import threading
from typing import Any, Callable, Optional, get_type_hints

from tether.binding import Binding
from tether.domain import BindingKey, Lifetime, describe, implementation_of
from tether.errors import (
    BindingNotFound,
    ConstructionError,
    InvalidArguments,
    ResolveError,
)

__all__ = ["Registry", "inferred_name"]

logger = logging.getLogger(__name__)


class Registry:
    """Maps binding keys (names or classes) to bindings and resolves them.

    Registering a key that is already bound replaces the old binding and
    discards anything it had cached. Registries are independent of each other;
    :mod:`tether.default` holds the process-wide shared one.

    Example:
        >>> registry = Registry()
        >>> registry.add_singleton(Database, MariaDatabase, {"name": "test"})
        >>> registry.add_multiple(Service, Service)
        >>> service = registry.resolve(Service)  # Service(db=<MariaDatabase>)
    """

    def __init__(self, fire_exceptions: bool = True):
        """Create an empty registry.

        Args:
            fire_exceptions: The default ``fire_exceptions`` setting of bindings
                registered without an explicit one.
        """
        self._bindings: dict[BindingKey, Binding] = {}
        self._lock = threading.RLock()
        self._resolution_lock = threading.RLock()
        self._fire_exceptions = fire_exceptions

    def register(
        self,
        name: BindingKey,
        implementation: Any,
        lifetime: Lifetime = Lifetime.MULTIPLE,
        overrides: Optional[dict[str, Any]] = None,
        fire_exceptions: Optional[bool] = None,
    ) -> "Registry":
        """Bind ``name`` to an implementation, replacing any existing binding.

        The implementation is not validated until it is resolved.

        Args:
            name: The key to register under, usually a class or interface.
            implementation: A class, a callable, a pre-built object, ``None``, or
                an already tagged implementation variant.
            lifetime: Whether to construct once or on every resolve.
            overrides: Parameter values keyed by parameter name.
            fire_exceptions: Whether failures raise; defaults to the registry setting.

        Returns:
            This registry, for chaining.
        """
        if fire_exceptions is None:
            fire_exceptions = self._fire_exceptions
        binding = Binding(
            self,
            name,
            lifetime,
            implementation_of(implementation),
            overrides,
            fire_exceptions,
        )
        with self._lock:
            replaced = name in self._bindings
            self._bindings[name] = binding

        logger.debug("%s %r", "Replaced" if replaced else "Registered", binding)
        return self

    def add_multiple(
        self,
        name: BindingKey,
        implementation: Any,
        overrides: Optional[dict[str, Any]] = None,
    ) -> "Registry":
        """Register a binding that constructs a new object on every resolve."""
        return self.register(name, implementation, Lifetime.MULTIPLE, overrides)

    def add_singleton(
        self,
        name: BindingKey,
        implementation: Any,
        overrides: Optional[dict[str, Any]] = None,
    ) -> "Registry":
        """Register a binding that constructs once and then returns the same object."""
        return self.register(name, implementation, Lifetime.SINGLETON, overrides)

    @property
    def resolution_lock(self):
        """The lock held by every binding of this registry while it resolves."""
        return self._resolution_lock

    def has(self, name: BindingKey) -> bool:
        with self._lock:
            return name in self._bindings

    def binding(self, name: BindingKey) -> Binding:
        """Return the live binding registered under ``name``.

        Raises:
            BindingNotFound: If nothing is registered under ``name``.
        """
        with self._lock:
            try:
                return self._bindings[name]
            except KeyError:
                raise BindingNotFound(
                    f"Binding '{describe(name)}' not found"
                ) from None

    def names(self) -> list[BindingKey]:
        with self._lock:
            return list(self._bindings)

    def resolve(self, name: BindingKey, args: Optional[dict[str, Any]] = None) -> Any:
        """Resolve the binding registered under ``name``.

        Args:
            name: The key to resolve.
            args: Per-call parameter values replacing the registered overrides.
                Only allowed for ``Lifetime.MULTIPLE`` bindings.

        Returns:
            The resolved object, or ``None`` for a null binding.

        Raises:
            BindingNotFound: If nothing is registered under ``name``.
            InvalidArguments: If ``args`` are given for a singleton binding.
            CyclicDependency: If resolving ``name`` requires resolving itself.
            MissingParameterValue: If a parameter cannot be supplied.
            ConstructionError: If a constructor or factory raised; the original
                exception is the ``__cause__``.

            Every error names the chain of bindings that led to the failure,
            starting with ``name``.
        """
        try:
            binding = self.binding(name)
            if args is not None and binding.lifetime is Lifetime.SINGLETON:
                raise InvalidArguments(
                    f"Arguments cannot be passed to singleton binding '{describe(name)}'"
                )
            return binding.resolve(args)
        except ResolveError as ex:
            ex.add_context(name)
            raise
        except Exception as ex:
            error = ConstructionError(f"{type(ex).__name__}: {ex}")
            error.add_context(name)
            raise error from ex

    def clear(self) -> None:
        """Remove every binding, and every cached instance, from this registry."""
        with self._lock:
            count = len(self._bindings)
            self._bindings = {}
        logger.debug("Cleared %d bindings", count)

    def provides(
        self,
        name: Optional[BindingKey] = None,
        lifetime: Lifetime = Lifetime.MULTIPLE,
        overrides: Optional[dict[str, Any]] = None,
    ) -> Callable:
        """Decorator to register a class or factory function.

        Args:
            name: Optional key to register under; defaults to :func:`inferred_name`.
            lifetime: Whether to construct once or on every resolve.
            overrides: Parameter values keyed by parameter name.

        Returns:
            A decorator that registers its target and returns it unchanged.

        Example:
            @registry.provides(lifetime=Lifetime.SINGLETON)
            def make_database(config: Config) -> Database:
                return MariaDatabase(config)
        """

        def decorator(target):
            self.register(name or inferred_name(target), target, lifetime, overrides)
            return target

        return decorator

    def __contains__(self, name: BindingKey) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._bindings)


def inferred_name(target: Any) -> BindingKey:
    """Derive the binding key for a decorated class or function.

    Classes are bound under themselves. Functions are bound under their return
    annotation if they have one, otherwise under their name with any ``make_``
    prefix removed.

    Example:
        >>> inferred_name(Database)                    # Database
        >>> def make_database() -> Database: ...
        >>> inferred_name(make_database)               # Database
        >>> def make_cache(): ...
        >>> inferred_name(make_cache)                  # "cache"
    """
    if inspect.isclass(target):
        return target

    return_type = get_type_hints(target).get("return", None)
    if return_type is not None:
        return return_type

    if target.__name__.startswith("make_"):
        return target.__name__[5:]
    else:
        return target.__name__
