"""Plugin discovery and loading.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
Capabilities: extra naming-convention converters.
"""

from __future__ import annotations

import inspect
import logging

import pluggy

from reqbind.domain.errors import ConfigurationError
from reqbind.plugins.hookspecs import ReqbindHookSpec

PROJECT_NAME = "reqbind"
ENTRY_POINT_GROUP = "reqbind.plugins"

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and converter registration."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(ReqbindHookSpec)
        self._loaded: bool = False

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and register their converters.

        Returns a list of loaded plugin names.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._normalize_plugin_instances()
        for plugin in self._pm.get_plugins():
            self._register_plugin_converters(plugin, self._plugin_name(plugin))
        self._loaded = True
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register a plugin instance directly."""
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        if self._loaded:
            self._register_plugin_converters(plugin, resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    @property
    def is_loaded(self) -> bool:
        """Whether discover_and_load() has been called."""
        return self._loaded

    def list_plugin_names(self) -> list[str]:
        """Return names of all registered plugins."""
        return [self._plugin_name(p) for p in self._pm.get_plugins()]

    def _plugin_name(self, plugin: object) -> str:
        return self._pm.get_name(plugin) or plugin.__class__.__name__

    def _normalize_plugin_instances(self) -> None:
        """Replace registered plugin classes with instantiated objects.

        Entry-point loading may register a plugin class directly; hook calls
        against a class leave ``self`` unbound.
        """
        for plugin in list(self._pm.get_plugins()):
            if not inspect.isclass(plugin):
                continue
            plugin_name = self._pm.get_name(plugin) or plugin.__name__
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", plugin_name, exc_info=True)
                continue
            self._pm.register(instance, name=plugin_name)
            logger.debug("Instantiated entry-point plugin: %s", plugin_name)

    @staticmethod
    def _register_plugin_converters(plugin: object, plugin_name: str) -> None:
        """Register name converters exposed by a single plugin instance."""
        from reqbind.domain.naming import register_name_converter

        hook = getattr(plugin, "register_name_converters", None)
        if hook is None:
            return

        try:
            converters = hook()
        except Exception:
            logger.warning("Failed to collect name converters from plugin %s", plugin_name, exc_info=True)
            return

        if not isinstance(converters, dict):
            logger.warning("Plugin %s returned non-dict name converter registrations", plugin_name)
            return

        for name, converter in converters.items():
            try:
                register_name_converter(name, converter)
            except ConfigurationError as exc:
                logger.warning("Plugin %s: %s", plugin_name, exc)
                continue
            logger.debug("Plugin %s registered name converter %s", plugin_name, name)
