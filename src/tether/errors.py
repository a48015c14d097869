"""Exceptions raised while resolving bindings."""

from typing import Any

from tether.domain import describe

__all__ = [
    "ResolveError",
    "BindingNotFound",
    "CyclicDependency",
    "InvalidArguments",
    "MissingParameterValue",
    "ConstructionError",
]


class ResolveError(Exception):
    """Base class for every failure raised while resolving a binding.

    Attributes:
        message: The description of the failure itself.
        path: Binding keys from the outermost requested binding down to the one
            that failed. Filled in by the registry as the error propagates.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.path: list[Any] = []

    def add_context(self, name: Any) -> None:
        self.path.insert(0, name)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        chain = " -> ".join(describe(name) for name in self.path)
        return f"Can't resolve {chain}: {self.message}"


class BindingNotFound(ResolveError):
    """Raised when no binding is registered under the requested name."""

    pass


class CyclicDependency(ResolveError):
    """Raised when a binding is reached again while it is still being resolved."""

    pass


class InvalidArguments(ResolveError):
    """Raised when per-call arguments are supplied for a singleton binding."""

    pass


class MissingParameterValue(ResolveError):
    """Raised when a parameter has no override, no matching binding and no default."""

    def __init__(self, parameter_name: str):
        super().__init__(f"No parameter value for '{parameter_name}' given")
        self.parameter_name = parameter_name


class ConstructionError(ResolveError):
    """Raised when a constructor or factory fails; the original error is the cause."""

    pass
