"""Field enumeration for request types.

A request type's bindable fields are its class-level annotations plus
those inherited from its ancestors.  Ancestors are walked first so their
fields keep their declaration position; a subtype that redeclares a field
replaces the ancestor's descriptor in place.

INVARIANT: enumeration is deterministic and cached per type.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import types
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin

from pydantic import PydanticUserError, TypeAdapter

from reqbind.domain.errors import ConfigurationError
from reqbind.domain.requests import OperationRequest, type_name


class _Missing:
    """Sentinel for "no default declared"."""

    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

# Class attributes that share a field name but are not default values.
_NOT_DEFAULTS = (types.MemberDescriptorType, property)


@dataclass(frozen=True, eq=False)
class FieldDescriptor:
    """One bindable field of a request type.

    Attributes:
        name: Semantic field name (the attribute name).
        owner: The class that declared this field.
        annotation: Declared type including ``Annotated`` constraints.
        default: Declared default value, or ``MISSING``.
        default_factory: Dataclass default factory, if any.
    """

    name: str
    owner: type
    annotation: Any
    default: Any = MISSING
    default_factory: Callable[[], Any] | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not MISSING or self.default_factory is not None

    def make_default(self) -> Any:
        """Return a fresh default value. Only valid when ``has_default``."""
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    @functools.cached_property
    def base_type(self) -> Any:
        """The declared type with its constraint metadata stripped."""
        if get_origin(self.annotation) is Annotated:
            return get_args(self.annotation)[0]
        return self.annotation

    @functools.cached_property
    def nullable(self) -> bool:
        tp = self.base_type
        if tp is Any or tp is None or tp is type(None):
            return True
        if get_origin(tp) in (Union, types.UnionType):
            return any(arg is type(None) for arg in get_args(tp))
        return False

    @functools.cached_property
    def coercer(self) -> TypeAdapter[Any]:
        """Adapter for the bare type, used to coerce raw values on assignment."""
        return _adapter(self.base_type, self)

    @functools.cached_property
    def validator(self) -> TypeAdapter[Any]:
        """Adapter for the full annotated type, used for constraint checks."""
        return _adapter(self.annotation, self)


def _adapter(tp: Any, descriptor: FieldDescriptor) -> TypeAdapter[Any]:
    try:
        return TypeAdapter(tp)
    except (PydanticUserError, TypeError) as exc:
        msg = f"Cannot build a validator for {type_name(descriptor.owner)}.{descriptor.name}: {exc}"
        raise ConfigurationError(msg) from exc


def _is_class_var(hint: Any) -> bool:
    return hint is ClassVar or get_origin(hint) is ClassVar


def _resolve_hints(klass: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(klass, include_extras=True)
    except (NameError, TypeError) as exc:
        msg = f"Cannot resolve annotations of {type_name(klass)}: {exc}"
        raise ConfigurationError(msg) from exc


def _own_fields(klass: type) -> list[FieldDescriptor]:
    """Return descriptors for the fields *klass* itself declares."""
    try:
        own_names = list(inspect.get_annotations(klass))
    except NameError as exc:
        raise ConfigurationError(f"Cannot resolve annotations of {type_name(klass)}: {exc}") from exc
    if not own_names:
        return []

    hints = _resolve_hints(klass)
    dc_fields = klass.__dict__.get("__dataclass_fields__", {})
    descriptors: list[FieldDescriptor] = []

    for name in own_names:
        hint = hints.get(name)
        if hint is None or _is_class_var(hint):
            continue
        if hint is dataclasses.KW_ONLY or isinstance(hint, dataclasses.InitVar):
            continue

        default: Any = MISSING
        factory: Callable[[], Any] | None = None
        dc_field = dc_fields.get(name)
        if dc_field is not None:
            if dc_field.default is not dataclasses.MISSING:
                default = dc_field.default
            if dc_field.default_factory is not dataclasses.MISSING:
                factory = dc_field.default_factory
        elif name in klass.__dict__ and not isinstance(klass.__dict__[name], _NOT_DEFAULTS):
            default = klass.__dict__[name]

        descriptors.append(
            FieldDescriptor(
                name=name,
                owner=klass,
                annotation=hint,
                default=default,
                default_factory=factory,
            )
        )
    return descriptors


@functools.cache
def enumerate_fields(request_type: type) -> Mapping[str, FieldDescriptor]:
    """Return the ordered bindable fields of *request_type*.

    Ancestor fields come first in declaration order, followed by fields
    only the subtype declares.  A redeclared field keeps the ancestor's
    position but carries the subtype's descriptor.  ``ClassVar``
    annotations are skipped.

    Raises:
        ConfigurationError: *request_type* is not a class, or an annotation
            cannot be resolved or turned into a validator.
    """
    if not isinstance(request_type, type):
        raise ConfigurationError(f"Not a request type: {request_type!r}")

    fields: dict[str, FieldDescriptor] = {}
    for klass in reversed(request_type.__mro__):
        if klass is object or klass is OperationRequest:
            continue
        for descriptor in _own_fields(klass):
            fields[descriptor.name] = descriptor

    # Build adapters now so a bad annotation fails before any binding.
    for descriptor in fields.values():
        _ = descriptor.coercer, descriptor.validator
    return types.MappingProxyType(fields)
