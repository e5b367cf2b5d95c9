"""Composition root — build a RequestBinder from settings.

The mapping table, name converter, and plugins are resolved once here.
Reloading configuration means building a new binder and swapping the
reference; a binder is never mutated after construction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from reqbind.domain.mapping import SourceMapping
from reqbind.domain.naming import get_name_converter
from reqbind.infrastructure.mapping_file import load_mapping
from reqbind.services.binder import RequestBinder

if TYPE_CHECKING:
    from reqbind.config.settings import ReqbindSettings
    from reqbind.plugins.manager import PluginManager
    from reqbind.services.validation import PropertyValidator

logger = logging.getLogger(__name__)


def build_mapping(settings: ReqbindSettings) -> SourceMapping:
    """Load the mapping file (if any) and overlay the inline ``[mapping]`` table."""
    mapping = SourceMapping()
    path = settings.mapping_file()
    if path is not None:
        mapping = load_mapping(path)
        logger.debug("Loaded source mapping for %d request types from %s", len(mapping), path)
    if settings.mapping:
        mapping = mapping.merged(SourceMapping(settings.mapping))
    return mapping


def build_binder(
    settings: ReqbindSettings,
    *,
    plugins: PluginManager | None = None,
    validator: PropertyValidator | None = None,
) -> RequestBinder:
    """Assemble a binder from *settings*.

    Raises:
        ConfigurationError: The mapping file or converter name is invalid.
    """
    if settings.plugins.enabled:
        if plugins is None:
            from reqbind.plugins.manager import PluginManager

            plugins = PluginManager()
        if not plugins.is_loaded:
            plugins.discover_and_load()

    return RequestBinder(
        build_mapping(settings),
        validator=validator,
        name_converter=get_name_converter(settings.binding.name_converter),
    )
