"""BindResult and BindError — structured outcomes for calling layers.

Framework adapters and the CLI turn a bind into one of these so the
full violation list can be rendered (an HTTP 400 body, JSON output).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic_core import to_jsonable_python

from reqbind.domain.fields import enumerate_fields
from reqbind.domain.violations import ValidationFailed

VALIDATION_FAILED = "VALIDATION_FAILED"


def _jsonable(value: Any) -> Any:
    return to_jsonable_python(value, fallback=repr)


class ViolationItem(BaseModel):
    """One violation in serializable form."""

    model_config = {"frozen": True}

    property_path: str
    message: str
    code: str | None = None
    invalid_value: Any = None


class BindError(BaseModel):
    """Structured error payload within a BindResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    violations: list[ViolationItem] = Field(default_factory=list)


class BindResult(BaseModel):
    """Outcome of a bind operation.

    Attributes:
        ok: Whether the request bound cleanly.
        op: Name of the operation (e.g. ``"bind"``).
        data: Field values of the bound request on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: BindError | None = None

    @classmethod
    def from_instance(cls, instance: object, *, op: str = "bind", warnings: list[str] | None = None) -> BindResult:
        data = {
            name: _jsonable(getattr(instance, name, None))
            for name in enumerate_fields(type(instance))
        }
        return cls(ok=True, op=op, data=data, warnings=warnings or [])

    @classmethod
    def from_failure(cls, failure: ValidationFailed, *, op: str = "bind") -> BindResult:
        items = [
            ViolationItem(
                property_path=v.property_path,
                message=v.message,
                code=v.code,
                invalid_value=_jsonable(v.invalid_value),
            )
            for v in failure.violations
        ]
        error = BindError(
            code=VALIDATION_FAILED,
            message=f"{len(items)} violation(s) on {type(failure.value).__name__}",
            violations=items,
        )
        return cls(ok=False, op=op, error=error)

    @classmethod
    def from_error(cls, code: str, message: str, *, op: str = "bind") -> BindResult:
        return cls(ok=False, op=op, error=BindError(code=code, message=message))
