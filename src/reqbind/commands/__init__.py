"""Subcommand modules for reqbind.

Provides register_commands() which uses deferred imports to keep
``reqbind --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from reqbind.commands.bind import bind
    from reqbind.commands.fields import fields
    from reqbind.commands.mapping import mapping

    cli.add_command(fields)
    cli.add_command(mapping)
    cli.add_command(bind)
