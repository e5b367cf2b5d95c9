"""Rich/JSON output helpers.

The CLI renders BindResult for humans (Rich tables) or machines
(--json).  Human output is rendered per operation; unknown operations
fall back to indented key-value pairs.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from reqbind.output.console import create_console, get_output, style_for_source

if TYPE_CHECKING:
    from reqbind.services.result import BindError, BindResult


def _render_data(console: Console, data: dict[str, Any]) -> None:
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            value = _json.dumps(value, separators=(",", ":"))
        console.print(Text.assemble("  ", (f"{key}: ", "rb.key"), str(value)))


def _render_fields(console: Console, data: dict[str, Any]) -> None:
    table = Table(title=Text(str(data.get("type", ""))), show_edge=False)
    table.add_column("Field", style="rb.path")
    table.add_column("Declared by")
    table.add_column("Type")
    table.add_column("Default")
    for row in data.get("fields", []):
        table.add_row(*(Text(str(row.get(key, ""))) for key in ("name", "owner", "type", "default")))
    console.print(table)


def _render_mapping(console: Console, data: dict[str, Any]) -> None:
    table = Table(show_edge=False)
    table.add_column("Request type")
    table.add_column("Route", style="rb.op")
    table.add_column("Field", style="rb.path")
    table.add_column("Source")
    for type_key, routes in data.get("mapping", {}).items():
        for route, fields in routes.items():
            if not fields:
                table.add_row(Text(type_key), Text(route), Text("*"), Text("body", style="rb.source.body"))
            for field, source in fields.items():
                table.add_row(Text(type_key), Text(route), Text(field), Text(source, style=style_for_source(source)))
    console.print(table)


def _render_violations(console: Console, error: BindError) -> None:
    table = Table(show_edge=False)
    table.add_column("Property", style="rb.path")
    table.add_column("Message")
    table.add_column("Value")
    for item in error.violations:
        table.add_row(Text(item.property_path), Text(item.message), Text(repr(item.invalid_value)))
    console.print(table)


_RENDERERS: dict[str, Callable[[Console, dict[str, Any]], None]] = {
    "fields": _render_fields,
    "mapping": _render_mapping,
}


def format_result(result: BindResult, *, json_output: bool = False) -> str:
    """Format a BindResult for display.

    Args:
        result: The result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console()
    if result.ok:
        console.print(Text.assemble(("OK", "rb.ok"), ": ", (result.op, "rb.op")))
        if result.data:
            _RENDERERS.get(result.op, _render_data)(console, result.data)
    else:
        message = result.error.message if result.error else "Unknown error"
        console.print(Text.assemble(("ERROR", "rb.error"), ": ", (result.op, "rb.op"), f" - {message}"))
        if result.error and result.error.violations:
            _render_violations(console, result.error)
    return get_output(console).rstrip("\n")
