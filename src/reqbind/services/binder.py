"""RequestBinder — bind raw request values onto a request type, then validate.

Every field is attempted.  A value that cannot be coerced onto its field
is validated raw instead, so the caller sees a constraint violation
rather than an assignment crash.  Violations from all fields are
deduplicated and raised together as one ``ValidationFailed``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from reqbind.domain.errors import ConfigurationError
from reqbind.domain.fields import FieldDescriptor, enumerate_fields
from reqbind.domain.mapping import SourceMapping
from reqbind.domain.naming import NameConverter, SnakeCaseConverter
from reqbind.domain.requests import type_name
from reqbind.domain.types import SourceKind
from reqbind.domain.values import ValueBag
from reqbind.domain.violations import ValidationFailed, Violation, dedupe_violations
from reqbind.services.validation import PropertyValidator, PydanticPropertyValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Assigned:
    """The value was coerced and stored on the instance."""

    value: Any


@dataclass(frozen=True)
class RawFallback:
    """Coercion or assignment failed; the field keeps its prior state."""

    value: Any
    reason: str


AssignOutcome = Assigned | RawFallback


def try_assign(instance: object, descriptor: FieldDescriptor, raw: Any) -> AssignOutcome:
    """Coerce *raw* to the field's bare type and store it on *instance*.

    Assignment goes through ``object.__setattr__`` so frozen dataclasses
    bind the same way as plain classes.
    """
    try:
        value = descriptor.coercer.validate_python(raw)
        object.__setattr__(instance, descriptor.name, value)
    except Exception as exc:
        reason = str(exc).splitlines()[0] if str(exc) else type(exc).__name__
        return RawFallback(raw, reason)
    return Assigned(value)


class RequestBinder:
    """Stateless bind-and-validate engine.

    Holds only the read-only source mapping, the property validator, and
    the name converter used for the fallback lookup, so one binder can
    serve concurrent requests.

    Usage::

        binder = RequestBinder(mapping)
        request = binder.resolve(values, "users:show", ShowUser)
    """

    def __init__(
        self,
        mapping: SourceMapping | None = None,
        *,
        validator: PropertyValidator | None = None,
        name_converter: NameConverter | None = None,
    ) -> None:
        self._mapping = mapping if mapping is not None else SourceMapping()
        self._validator = validator if validator is not None else PydanticPropertyValidator()
        self._name_converter = name_converter if name_converter is not None else SnakeCaseConverter()

    @property
    def mapping(self) -> SourceMapping:
        """The read-only source table this binder consults."""
        return self._mapping

    def supports(self, request_type: type) -> bool:
        """Whether the mapping table declares any route for *request_type*."""
        return self._mapping.supports(request_type)

    def resolve[T](self, values: ValueBag, route: str | None, request_type: type[T]) -> T:
        """Bind *values* onto a new *request_type* instance and validate it.

        Raises:
            ConfigurationError: The type cannot be enumerated or instantiated.
            ValidationFailed: One or more fields violate their constraints.
        """
        fields = enumerate_fields(request_type)
        instance = self._instantiate(request_type, fields)
        if not fields:
            # A request without fields is a bare command.
            return instance

        sources = self._mapping.for_route(request_type, route)
        logger.debug(
            "Binding %s on route %s (%d fields, %d mapped)",
            type_name(request_type),
            route,
            len(fields),
            len(sources),
        )

        violations: list[Violation] = []
        for name, descriptor in fields.items():
            source = sources.get(name, SourceKind.BODY)
            raw = self._extract(values, source, name)

            if raw is None and descriptor.has_default:
                candidate = getattr(instance, name)
            else:
                outcome = try_assign(instance, descriptor, raw)
                if isinstance(outcome, RawFallback):
                    logger.debug("Field %s kept raw %s value: %s", name, source, outcome.reason)
                candidate = outcome.value

            violations.extend(self._validator.validate_property(instance, name, candidate))

        unique = dedupe_violations(violations)
        if unique:
            logger.debug("Binding %s failed with %d violation(s)", type_name(request_type), len(unique))
            raise ValidationFailed(instance, unique)
        return instance

    def _instantiate[T](self, request_type: type[T], fields: Mapping[str, FieldDescriptor]) -> T:
        """Allocate without ``__init__`` and apply declared defaults."""
        try:
            instance = request_type.__new__(request_type)
            for name, descriptor in fields.items():
                if descriptor.has_default:
                    object.__setattr__(instance, name, descriptor.make_default())
        except (TypeError, AttributeError) as exc:
            msg = f"Cannot instantiate {type_name(request_type)}: {exc}"
            raise ConfigurationError(msg) from exc
        return instance

    def _extract(self, values: ValueBag, source: SourceKind, name: str) -> Any:
        """Look up *name*, then its converted transport name, in one source."""
        bag = self._source_map(values, source)
        value = bag.get(name)
        if value is None:
            value = bag.get(self._name_converter.normalize(name))
        return value

    @staticmethod
    def _source_map(values: ValueBag, source: SourceKind) -> Mapping[str, Any]:
        if source is SourceKind.PATH:
            return values.path
        if source is SourceKind.QUERY:
            return values.query
        if source is SourceKind.HEADER:
            return values.headers
        return values.body
