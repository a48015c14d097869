"""Introspection of constructor and factory parameters, and their resolution."""

import inspect
import logging
import types
from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    Callable,
    Optional,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from tether.domain import Dependency
from tether.errors import MissingParameterValue

if TYPE_CHECKING:
    from tether.registry import Registry

__all__ = ["dependencies_of", "resolve_parameters", "call_with"]

logger = logging.getLogger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def dependencies_of(target: Callable) -> list[Dependency]:
    """Extract the ordered parameter descriptors of a callable or class constructor.

    Classes that inherit ``object.__init__``, or whose signature cannot be
    introspected (some builtins), yield no dependencies and are constructed
    without arguments. ``*args`` and ``**kwargs`` are never injected.

    Args:
        target: The function, callable or class to analyse.

    Returns:
        One Dependency per injectable parameter, in declaration order.

    Example:
        >>> def service(untyped, db: Database, cache: Annotated[Cache, "redis"] = None):
        ...     pass
        >>> dependencies_of(service)
        >>> # [Dependency("untyped"),
        >>> #  Dependency("db", declared_type=Database),
        >>> #  Dependency("cache", declared_type=Cache, component_name="redis",
        >>> #             has_default=True)]
    """
    if inspect.isclass(target):
        if target.__init__ is object.__init__:
            return []
        hint_source = target.__init__
    else:
        hint_source = target

    try:
        sig = inspect.signature(target)
    except (ValueError, TypeError):
        logger.debug("No introspectable signature for %r", target)
        return []

    hints = _type_hints(hint_source, sig)
    return [
        _make_dependency(param, hints.get(name, param.annotation))
        for name, param in sig.parameters.items()
        if param.kind not in _SKIPPED_KINDS
    ]


def resolve_parameters(
    registry: "Registry",
    dependencies: list[Dependency],
    overrides: Optional[dict[str, Any]] = None,
) -> list[Any]:
    """Produce the ordered argument values for a list of parameter descriptors.

    Each parameter is supplied, in order of precedence, by an override keyed by
    its name, by a binding registered under its ``Annotated`` name or declared
    type, or by its declared default.

    Args:
        registry: The registry used to resolve nested bindings.
        dependencies: Parameter descriptors, as returned by :func:`dependencies_of`.
        overrides: Literal values keyed by parameter name.

    Returns:
        The argument values, one per dependency.

    Raises:
        MissingParameterValue: If a parameter cannot be supplied by any of the above.
    """
    overrides = overrides or {}
    resolved = []

    for dependency in dependencies:
        name = dependency.parameter_name
        if name in overrides:
            resolved.append(overrides[name])
            continue

        key = _registered_key(registry, dependency)
        if key is not None:
            resolved.append(registry.resolve(key))
        elif dependency.has_default:
            resolved.append(dependency.default)
        else:
            raise MissingParameterValue(name)

    return resolved


def call_with(target: Callable, dependencies: list[Dependency], values: list[Any]) -> Any:
    """Invoke ``target``, passing keyword-only parameters by keyword."""
    args = []
    kwargs = {}
    for dependency, value in zip(dependencies, values):
        if dependency.kind is inspect.Parameter.KEYWORD_ONLY:
            kwargs[dependency.parameter_name] = value
        else:
            args.append(value)
    return target(*args, **kwargs)


def _type_hints(target: Any, sig: inspect.Signature) -> dict[str, Any]:
    try:
        return get_type_hints(target, include_extras=True)
    except (NameError, TypeError):
        pass

    # At least one forward reference is unresolvable: evaluate the string
    # annotations one by one, leaving only the failing ones as raw strings.
    globalns = getattr(inspect.unwrap(target), "__globals__", {})
    hints = {}
    for name, param in sig.parameters.items():
        annotation = param.annotation
        if isinstance(annotation, str):
            try:
                annotation = eval(annotation, globalns)
            except (NameError, SyntaxError, TypeError, AttributeError):
                continue
        hints[name] = annotation
    return hints


def _make_dependency(param: inspect.Parameter, annotation: Any) -> Dependency:
    has_default = param.default is not inspect.Parameter.empty
    default = param.default if has_default else None

    if annotation is inspect.Parameter.empty:
        return Dependency(param.name, param.kind, None, None, has_default, default)

    declared_type, component_name = _unwrap(annotation)
    return Dependency(
        param.name, param.kind, declared_type, component_name, has_default, default
    )


def _unwrap(annotation: Any) -> tuple[Any, Optional[str]]:
    """Strip ``Optional`` and ``Annotated`` wrappers, in either nesting order."""
    component_name = None
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation, *metadata = get_args(annotation)
            component_name = component_name or next(
                (m for m in metadata if isinstance(m, str)), None
            )
        elif origin is Union or origin is types.UnionType:
            members = [a for a in get_args(annotation) if a is not type(None)]
            if len(members) != 1:
                return annotation, component_name
            annotation = members[0]
        else:
            return annotation, component_name


def _registered_key(registry: "Registry", dependency: Dependency) -> Any:
    for key in (dependency.component_name, dependency.declared_type):
        if key is not None and registry.has(key):
            return key
    return None
