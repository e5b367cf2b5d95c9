"""Pluggy hook specifications for reqbind setup extensions."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pluggy

if TYPE_CHECKING:
    from reqbind.domain.naming import NameConverter

hookspec = pluggy.HookspecMarker("reqbind")
hookimpl = pluggy.HookimplMarker("reqbind")


class ReqbindHookSpec:
    """Hook specifications for the reqbind plugin system."""

    @hookspec
    def register_name_converters(self) -> dict[str, NameConverter]:
        """Return extra name converters keyed by the name used in config."""
