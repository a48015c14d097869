"""A single registered recipe and its resolution state machine."""

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Optional

from tether.domain import (
    BindingKey,
    Factory,
    Implementation,
    Instance,
    Lifetime,
    Null,
    TypeReference,
    describe,
)
from tether.errors import CyclicDependency, InvalidArguments
from tether.parameters import call_with, dependencies_of, resolve_parameters

if TYPE_CHECKING:
    from tether.registry import Registry

__all__ = ["Binding"]

logger = logging.getLogger(__name__)

_UNSET = object()


class Binding:
    """One name to implementation mapping, owned by a :class:`Registry`.

    A binding is idle until :meth:`resolve` is called, resolving for the extent
    of that call (including the nested resolution of its parameters), and idle
    again afterwards whether it succeeded or failed. Singletons keep the first
    successfully resolved value for the lifetime of the binding.

    Resolution is serialised by the owning registry's re-entrant resolution lock.
    Re-entering a binding on one thread is reported as a cycle, a cycle reached
    from several threads fails on each of them instead of deadlocking, and a
    singleton is constructed at most once across threads.

    Attributes:
        name: The key this binding was registered under.
        lifetime: Whether the implementation is constructed once or on every resolve.
        implementation: The tagged implementation variant.
        overrides: Parameter values keyed by parameter name, used when no
            per-call arguments are given.
        fire_exceptions: If false, failures are logged and resolve to ``None``.
    """

    def __init__(
        self,
        registry: "Registry",
        name: BindingKey,
        lifetime: Lifetime,
        implementation: Implementation,
        overrides: Optional[dict[str, Any]] = None,
        fire_exceptions: bool = True,
    ):
        self._registry = registry
        self.name = name
        self.lifetime = lifetime
        self.implementation = implementation
        self.overrides = dict(overrides or {})
        self.fire_exceptions = fire_exceptions
        self._instance: Any = _UNSET
        self._resolving = False
        self._lock = registry.resolution_lock

    @property
    def resolving(self) -> bool:
        return self._resolving

    @property
    def is_cached(self) -> bool:
        return self._instance is not _UNSET

    def resolve(self, args: Optional[dict[str, Any]] = None) -> Any:
        """Resolve this binding and return the constructed object.

        Args:
            args: Per-call parameter values that replace the stored overrides.
                Only allowed for ``Lifetime.MULTIPLE`` bindings.

        Returns:
            The resolved object, or ``None`` for an explicit null binding or a
            swallowed failure when ``fire_exceptions`` is false.

        Raises:
            InvalidArguments: If ``args`` are given for a singleton.
            CyclicDependency: If this binding is already being resolved on this thread.
            ResolveError: For any other resolution failure, when ``fire_exceptions``
                is true.
        """
        singleton = self.lifetime is Lifetime.SINGLETON
        if args is not None and singleton:
            raise InvalidArguments(
                f"Arguments cannot be passed to singleton binding '{describe(self.name)}'"
            )

        if self._instance is not _UNSET:
            logger.debug("Returning cached instance of %s", describe(self.name))
            return self._instance

        with self._lock:
            if self._instance is not _UNSET:
                return self._instance
            if self._resolving:
                raise CyclicDependency(
                    f"Cyclic dependency detected on '{describe(self.name)}'"
                )

            with self._resolution():
                try:
                    instance = self._construct(self.overrides if args is None else args)
                except Exception as ex:
                    if self.fire_exceptions:
                        raise
                    logger.warning(
                        "Resolving %s failed, returning None: %s",
                        describe(self.name),
                        ex,
                    )
                    return None

                if singleton:
                    self._instance = instance
                return instance

    @contextmanager
    def _resolution(self):
        self._resolving = True
        try:
            yield
        finally:
            self._resolving = False

    def _construct(self, overrides: dict[str, Any]) -> Any:
        implementation = self.implementation
        logger.debug("Constructing %s from %r", describe(self.name), implementation)

        if isinstance(implementation, Null):
            return None
        if isinstance(implementation, Instance):
            return implementation.obj
        if isinstance(implementation, Factory):
            return self._invoke(implementation.func, overrides)
        if isinstance(implementation, TypeReference):
            return self._invoke(implementation.cls, overrides)

        raise TypeError(f"Unknown implementation {implementation!r}")

    def _invoke(self, target: Any, overrides: dict[str, Any]) -> Any:
        dependencies = dependencies_of(target)
        if not dependencies:
            return target()
        values = resolve_parameters(self._registry, dependencies, overrides)
        return call_with(target, dependencies, values)

    def __repr__(self) -> str:
        return (
            f"Binding({describe(self.name)!r}, {self.lifetime.value}, "
            f"{self.implementation!r})"
        )
