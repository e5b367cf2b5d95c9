"""Per-property constraint validation.

The binder calls ``validate_property`` once per field with the value it
managed to assign (or the raw value when assignment failed).  Any object
with that method can stand in for the pydantic-backed default.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from reqbind.domain.errors import ConfigurationError
from reqbind.domain.fields import enumerate_fields
from reqbind.domain.requests import type_name
from reqbind.domain.violations import Violation

MISSING_MESSAGE = "Field required"


@runtime_checkable
class PropertyValidator(Protocol):
    """Validates one property value in the context of its instance."""

    def validate_property(self, instance: object, property_name: str, value: Any) -> list[Violation]: ...


def _child(value: Any, part: int | str) -> Any:
    if isinstance(value, Mapping):
        return value.get(part)
    if isinstance(part, int):
        if isinstance(value, Sequence) and not isinstance(value, str) and -len(value) <= part < len(value):
            return value[part]
        return None
    return getattr(value, "__dict__", {}).get(part)


def _addresses(value: Any, part: str) -> bool:
    if isinstance(value, Mapping):
        return part in value
    return part in getattr(value, "__dict__", {})


def property_path(property_name: str, loc: Sequence[int | str], value: Any = None, *, missing: bool = False) -> str:
    """Join a property name with the data-addressing parts of a pydantic error location.

    pydantic also records union members and validator tags in ``loc``
    (``int``, ``function-after[...]``).  A string part is kept only when it
    is a key or attribute of *value* at that depth, or when it names the
    absent key of a *missing* error.

    ``("tags", (0,), [...])`` -> ``tags[0]``; ``("address", ("city",), {"city": 3})`` -> ``address.city``;
    ``("ident", ("int",), [1])`` -> ``ident``.
    """
    path = property_name
    current = value
    last = len(loc) - 1
    for index, part in enumerate(loc):
        if isinstance(part, int):
            path += f"[{part}]"
        elif _addresses(current, part) or (missing and index == last):
            path += f".{part}"
        else:
            continue
        current = _child(current, part)
    return path


def violation_from_error(property_name: str, error: ErrorDetails, value: Any = None) -> Violation:
    return Violation(
        property_path=property_path(property_name, error["loc"], value, missing=error["type"] == "missing"),
        message=error["msg"],
        invalid_value=error.get("input"),
        code=error["type"],
    )


class PydanticPropertyValidator:
    """Checks values against the field's ``Annotated`` type with pydantic.

    A ``None`` value on a non-nullable field is reported as a single
    ``missing`` violation instead of a type error.
    """

    def validate_property(self, instance: object, property_name: str, value: Any) -> list[Violation]:
        descriptor = enumerate_fields(type(instance)).get(property_name)
        if descriptor is None:
            msg = f"{type_name(type(instance))} has no field {property_name!r}"
            raise ConfigurationError(msg)

        if value is None and not descriptor.nullable:
            return [Violation(property_name, MISSING_MESSAGE, None, "missing")]

        try:
            descriptor.validator.validate_python(value)
        except ValidationError as exc:
            return [violation_from_error(property_name, err, value) for err in exc.errors(include_url=False)]
        return []
