"""Route declarations and ahead-of-time source mapping derivation.

Handlers declare their route name and where each parameter travels::

    @route("users:show")
    @param("userId", "path")
    @param("verbose", "query")
    def show_user(request: ShowUser) -> dict: ...

Classes grouping several handlers may carry ``@route`` and ``@param``
too.  A method's own route wins over its class's route, and method-level
parameters override class-level ones of the same name.

``derive_source_mapping`` turns these declarations into the
``SourceMapping`` consumed by the binder.  It runs once at startup.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from types import ModuleType
from typing import Any

from reqbind.domain.errors import ConfigurationError
from reqbind.domain.mapping import SourceMapping
from reqbind.domain.requests import OperationRequest, type_name
from reqbind.domain.types import SourceKind

logger = logging.getLogger(__name__)

_ROUTE_ATTR = "__reqbind_route__"
_PARAMS_ATTR = "__reqbind_params__"


@dataclass(frozen=True)
class ParamDeclaration:
    """Where one named parameter travels on a route."""

    name: str
    location: SourceKind


@dataclass(frozen=True)
class Endpoint:
    """A handler callable and the class that groups it, if any."""

    handler: Callable[..., Any]
    owner: type | None = None


def route[T](name: str) -> Callable[[T], T]:
    """Attach a route name to a handler function or handler class."""
    if not name:
        raise ConfigurationError("Route name must not be empty")

    def decorator(target: T) -> T:
        setattr(target, _ROUTE_ATTR, name)
        return target

    return decorator


def param[T](name: str, location: str | SourceKind) -> Callable[[T], T]:
    """Declare that parameter *name* is read from *location*."""
    try:
        kind = SourceKind(str(location).lower())
    except ValueError:
        raise ConfigurationError(f"Invalid location {location!r} for parameter {name!r}") from None

    def decorator(target: T) -> T:
        existing = vars(target).get(_PARAMS_ATTR, ())
        # Decorators apply bottom-up; prepend to keep source order.
        setattr(target, _PARAMS_ATTR, (ParamDeclaration(name, kind), *existing))
        return target

    return decorator


def declared_route(target: object) -> str | None:
    return vars(target).get(_ROUTE_ATTR) if hasattr(target, "__dict__") else None


def declared_params(target: object) -> dict[str, SourceKind]:
    """Parameter locations declared on *target*; later declarations win."""
    if not hasattr(target, "__dict__"):
        return {}
    return {decl.name: decl.location for decl in vars(target).get(_PARAMS_ATTR, ())}


def handler_signature(handler: Callable[..., Any]) -> inspect.Signature:
    """Signature of *handler* with string annotations evaluated."""
    try:
        return inspect.signature(handler, eval_str=True)
    except (NameError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Cannot inspect handler {handler!r}: {exc}") from exc


def collect_endpoints(module: ModuleType) -> list[Endpoint]:
    """Find handler functions and public methods defined in *module*."""
    endpoints: list[Endpoint] = []
    for _name, obj in inspect.getmembers(module):
        if getattr(obj, "__module__", None) != module.__name__:
            continue  # skip imported names
        if inspect.isfunction(obj):
            endpoints.append(Endpoint(obj))
        elif inspect.isclass(obj):
            for attr_name, member in vars(obj).items():
                if attr_name.startswith("_") or not inspect.isfunction(member):
                    continue
                endpoints.append(Endpoint(member, obj))
    return endpoints


def _bound_request_types(handler: Callable[..., Any], request_types: frozenset[type] | None) -> list[type]:
    found: list[type] = []
    for parameter in handler_signature(handler).parameters.values():
        annotation = parameter.annotation
        if not isinstance(annotation, type):
            continue
        if request_types is None:
            if issubclass(annotation, OperationRequest) and annotation is not OperationRequest:
                found.append(annotation)
        elif annotation in request_types:
            found.append(annotation)
    return found


def derive_source_mapping(
    endpoints: Iterable[Endpoint],
    request_types: Iterable[type] | None = None,
) -> SourceMapping:
    """Build the source mapping table from route declarations.

    Args:
        endpoints: Handlers to inspect (see :func:`collect_endpoints`).
        request_types: Types to map.  Defaults to every ``OperationRequest``
            subclass found in handler signatures.

    Handlers with no route name (on the method or its class) are skipped.
    Only declared parameters are recorded; the binder reads everything
    else from the body.
    """
    wanted = frozenset(request_types) if request_types is not None else None
    table: dict[str, dict[str, dict[str, str]]] = {}

    for endpoint in endpoints:
        owner = endpoint.owner
        route_name = declared_route(endpoint.handler) or (declared_route(owner) if owner else None)
        if not route_name:
            continue

        bound = _bound_request_types(endpoint.handler, wanted)
        if not bound:
            continue

        params = {**(declared_params(owner) if owner else {}), **declared_params(endpoint.handler)}
        for request_type in bound:
            table.setdefault(type_name(request_type), {})[route_name] = {
                field: kind.value for field, kind in params.items()
            }
            logger.debug("Mapped %s on route %s", type_name(request_type), route_name)

    return SourceMapping(table)


def derive_from_modules(modules: Iterable[ModuleType], request_types: Iterable[type] | None = None) -> SourceMapping:
    """Collect endpoints from *modules* and derive one mapping table."""
    endpoints = [ep for module in modules for ep in collect_endpoints(module)]
    return derive_source_mapping(endpoints, request_types)
