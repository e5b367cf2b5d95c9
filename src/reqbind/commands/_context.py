"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy binder construction and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from reqbind.output.formatters import format_result

if TYPE_CHECKING:
    from reqbind.config.settings import ReqbindSettings
    from reqbind.services.binder import RequestBinder
    from reqbind.services.result import BindResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The binder is built on first use so ``--help`` and ``--version`` never
    load mapping files or plugins.
    """

    def __init__(self, settings: ReqbindSettings) -> None:
        self.settings = settings
        self._binder: RequestBinder | None = None

        from reqbind.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def binder(self) -> RequestBinder:
        """The binder (created lazily on first access)."""
        if self._binder is None:
            from reqbind.infrastructure.wiring import build_binder

            self._binder = build_binder(self.settings)
        return self._binder

    def emit(self, result: BindResult) -> None:
        """Format and output a BindResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
