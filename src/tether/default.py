"""The process-wide default registry.

A single :class:`Registry` is created when this module is first imported, with
no bindings, so unrelated code can register and resolve through a common
namespace. It lives until the process exits, or until
:func:`reset_default_registry` replaces it with a fresh one (typically between
tests). Code that needs isolation should construct its own :class:`Registry`.
"""

from typing import Any, Optional

from tether.domain import BindingKey
from tether.registry import Registry

__all__ = [
    "default_registry",
    "reset_default_registry",
    "bind_multiple",
    "bind_singleton",
    "get",
    "has",
    "clear",
]

_default = Registry()


def default_registry() -> Registry:
    return _default


def reset_default_registry() -> Registry:
    """Replace the default registry with an empty one and return it."""
    global _default
    _default = Registry()
    return _default


def bind_multiple(
    name: BindingKey, implementation: Any, overrides: Optional[dict[str, Any]] = None
) -> Registry:
    """Register a transient binding in the default registry.

    Returns:
        The default registry, for chaining.
    """
    return _default.add_multiple(name, implementation, overrides)


def bind_singleton(
    name: BindingKey, implementation: Any, overrides: Optional[dict[str, Any]] = None
) -> Registry:
    """Register a singleton binding in the default registry.

    Returns:
        The default registry, for chaining.
    """
    return _default.add_singleton(name, implementation, overrides)


def get(name: BindingKey, args: Optional[dict[str, Any]] = None) -> Any:
    """Resolve ``name`` from the default registry."""
    return _default.resolve(name, args)


def has(name: BindingKey) -> bool:
    return _default.has(name)


def clear() -> None:
    _default.clear()
