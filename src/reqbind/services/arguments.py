"""ArgumentResolver — the seam between handler signatures and the binder.

A framework adapter asks the resolver for each handler parameter.
Parameters annotated with an ``OperationRequest`` subclass are bound;
everything else yields no value and is left to other resolvers.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from reqbind.domain.requests import OperationRequest
from reqbind.domain.values import ValueBag
from reqbind.infrastructure.routes import handler_signature
from reqbind.services.binder import RequestBinder

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def request_type_of(parameter: inspect.Parameter) -> type[OperationRequest] | None:
    """Return the bindable request type of *parameter*, if it has one."""
    annotation = parameter.annotation
    if annotation is inspect.Parameter.empty or parameter.kind in _VARIADIC:
        return None
    if not isinstance(annotation, type) or not issubclass(annotation, OperationRequest):
        return None
    return annotation


class ArgumentResolver:
    """Resolves request-typed handler arguments through a RequestBinder."""

    def __init__(self, binder: RequestBinder) -> None:
        self._binder = binder

    def supports(self, parameter: inspect.Parameter) -> bool:
        return request_type_of(parameter) is not None

    def resolve(self, values: ValueBag, route: str | None, parameter: inspect.Parameter) -> list[object]:
        """Return ``[bound request]`` or ``[]`` when *parameter* is not ours."""
        request_type = request_type_of(parameter)
        if request_type is None:
            return []
        return [self._binder.resolve(values, route, request_type)]

    def resolve_arguments(
        self,
        handler: Callable[..., Any],
        values: ValueBag,
        route: str | None,
    ) -> dict[str, object]:
        """Bind every request-typed parameter of *handler*, keyed by name."""
        arguments: dict[str, object] = {}
        for name, parameter in handler_signature(handler).parameters.items():
            for value in self.resolve(values, route, parameter):
                arguments[name] = value
        return arguments
