"""Resolve ``module:Name`` references given on the command line."""

from __future__ import annotations

import importlib
from types import ModuleType
from typing import Any

from reqbind.domain.errors import ConfigurationError


def import_module(name: str) -> ModuleType:
    try:
        return importlib.import_module(name)
    except ImportError as exc:
        raise ConfigurationError(f"Cannot import module {name!r}: {exc}") from exc


def import_object(reference: str) -> Any:
    """Import ``package.module:Outer.Inner`` and return the named object."""
    module_name, sep, qualname = reference.partition(":")
    if not sep or not module_name or not qualname:
        raise ConfigurationError(f"Expected 'module:Name', got {reference!r}")

    obj: Any = import_module(module_name)
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError:
            raise ConfigurationError(f"{module_name!r} has no attribute {qualname!r}") from None
    return obj
