"""Command: derive the source mapping from route declarations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from reqbind.commands._base import ReqbindCommand

if TYPE_CHECKING:
    from reqbind.commands._context import AppContext


@click.command(
    cls=ReqbindCommand,
    examples="""\
  reqbind mapping app.handlers.users app.handlers.orders
  reqbind mapping app.handlers --output build/mapping.json""",
)
@click.argument("modules", nargs=-1, required=True)
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the table to this .json file.",
)
@click.pass_obj
def mapping(app: AppContext, modules: tuple[str, ...], output: Path | None) -> None:
    """Derive the source mapping table from handlers in MODULES."""
    from reqbind.domain.errors import ConfigurationError
    from reqbind.infrastructure.imports import import_module
    from reqbind.infrastructure.mapping_file import write_mapping
    from reqbind.infrastructure.routes import derive_from_modules
    from reqbind.services.result import BindResult

    try:
        table = derive_from_modules([import_module(name) for name in modules])
        if output is not None:
            write_mapping(table, output)
    except ConfigurationError as exc:
        app.emit(BindResult.from_error("CONFIGURATION", str(exc), op="mapping"))
        return

    data: dict[str, object] = {"count": len(table), "mapping": table.to_dict()}
    if output is not None:
        data["output"] = str(output)
    app.emit(BindResult(ok=True, op="mapping", data=data))
