"""Command: list the bindable fields of a request type."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from reqbind.commands._base import ReqbindCommand

if TYPE_CHECKING:
    from reqbind.commands._context import AppContext
    from reqbind.domain.fields import FieldDescriptor


def _type_label(annotation: Any) -> str:
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def _field_row(descriptor: FieldDescriptor) -> dict[str, Any]:
    return {
        "name": descriptor.name,
        "owner": descriptor.owner.__qualname__,
        "type": _type_label(descriptor.annotation),
        "nullable": descriptor.nullable,
        "default": repr(descriptor.default) if descriptor.default_factory is None else "<factory>",
    }


@click.command(
    cls=ReqbindCommand,
    examples="""\
  reqbind fields app.requests:ShowUser
  reqbind --json fields app.requests:CreateOrder""",
)
@click.argument("target")
@click.pass_obj
def fields(app: AppContext, target: str) -> None:
    """List the bindable fields of TARGET (module:Type), ancestors first."""
    from reqbind.domain.errors import ConfigurationError
    from reqbind.domain.fields import enumerate_fields
    from reqbind.domain.requests import type_name
    from reqbind.infrastructure.imports import import_object
    from reqbind.services.result import BindResult

    try:
        request_type = import_object(target)
        descriptors = enumerate_fields(request_type)
    except ConfigurationError as exc:
        app.emit(BindResult.from_error("CONFIGURATION", str(exc), op="fields"))
        return

    app.emit(
        BindResult(
            ok=True,
            op="fields",
            data={
                "type": type_name(request_type),
                "fields": [_field_row(d) for d in descriptors.values()],
            },
        )
    )
