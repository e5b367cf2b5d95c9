"""reqbind — bind multi-source request data onto typed request objects."""

from __future__ import annotations

from reqbind.domain.errors import ConfigurationError, ReqbindError
from reqbind.domain.mapping import SourceMapping
from reqbind.domain.requests import OperationRequest
from reqbind.domain.types import SourceKind
from reqbind.domain.values import ValueBag
from reqbind.domain.violations import ValidationFailed, Violation
from reqbind.infrastructure.routes import param, route
from reqbind.services.arguments import ArgumentResolver
from reqbind.services.binder import RequestBinder

__version__ = "0.1.0"

__all__ = [
    "ArgumentResolver",
    "ConfigurationError",
    "OperationRequest",
    "ReqbindError",
    "RequestBinder",
    "SourceKind",
    "SourceMapping",
    "ValidationFailed",
    "ValueBag",
    "Violation",
    "__version__",
    "param",
    "route",
]
