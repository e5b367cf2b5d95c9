"""Command: bind request values onto a request type and validate them."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from reqbind.commands._base import ReqbindCommand

if TYPE_CHECKING:
    from reqbind.commands._context import AppContext


def _parse_pairs(
    _ctx: click.Context,
    param: click.Parameter,
    values: tuple[str, ...],
) -> dict[str, str]:
    """Turn repeated ``key=value`` options into a dict."""
    pairs: dict[str, str] = {}
    for item in values:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected key=value, got {item!r}", param=param)
        pairs[key] = value
    return pairs


def _parse_body(_ctx: click.Context, param: click.Parameter, value: str | None) -> Any:
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"invalid JSON: {exc}", param=param) from exc


@click.command(
    cls=ReqbindCommand,
    examples="""\
  reqbind bind app.requests:ShowUser --route users:show --path userId=7
  reqbind bind app.requests:CreateUser --route users:create --body '{"email": "a@b.co"}'
  reqbind --json bind app.requests:Search --route search --query q=books --header X-Locale=en""",
)
@click.argument("target")
@click.option("-r", "--route", default=None, help="Route name used to look up field sources.")
@click.option("--path", "path_values", multiple=True, callback=_parse_pairs, help="Path variable key=value.")
@click.option("--query", "query_values", multiple=True, callback=_parse_pairs, help="Query parameter key=value.")
@click.option("--header", "header_values", multiple=True, callback=_parse_pairs, help="Header key=value.")
@click.option("--form", "form_values", multiple=True, callback=_parse_pairs, help="Form field key=value.")
@click.option("--body", default=None, callback=_parse_body, help="Decoded body as a JSON object.")
@click.pass_obj
def bind(
    app: AppContext,
    target: str,
    route: str | None,
    path_values: dict[str, str],
    query_values: dict[str, str],
    header_values: dict[str, str],
    form_values: dict[str, str],
    body: Any,
) -> None:
    """Bind the given values onto TARGET (module:Type) and report the outcome."""
    from reqbind.domain.errors import ConfigurationError
    from reqbind.domain.requests import type_name
    from reqbind.domain.values import ValueBag
    from reqbind.domain.violations import ValidationFailed
    from reqbind.infrastructure.imports import import_object
    from reqbind.services.result import BindResult

    values = ValueBag.build(
        path=path_values,
        query=query_values,
        headers=header_values,
        body=body,
        form=form_values,
    )

    try:
        request_type = import_object(target)
        instance = app.binder.resolve(values, route, request_type)
    except ValidationFailed as exc:
        app.emit(BindResult.from_failure(exc))
        return
    except ConfigurationError as exc:
        app.emit(BindResult.from_error("CONFIGURATION", str(exc)))
        return

    warnings: list[str] = []
    if route is not None and route not in app.binder.mapping.routes_for(request_type):
        warnings.append(f"No source mapping for {type_name(request_type)} on route {route!r}; fields read from body")
    app.emit(BindResult.from_instance(instance, warnings=warnings))
