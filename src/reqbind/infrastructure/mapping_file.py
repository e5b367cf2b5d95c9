"""Load and dump source mapping artifacts.

A mapping file is the ahead-of-time output of route analysis, shipped
with the application and loaded once at startup.  TOML and JSON share
one shape::

    ["app.requests.ShowUser"."users:show"]
    userId = "path"
    verbose = "query"
"""

from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any

from reqbind.domain.errors import ConfigurationError
from reqbind.domain.mapping import SourceMapping

SUPPORTED_SUFFIXES = (".toml", ".json")


def load_mapping(path: Path) -> SourceMapping:
    """Read a mapping table from a ``.toml`` or ``.json`` file."""
    if path.suffix not in SUPPORTED_SUFFIXES:
        raise ConfigurationError(f"Unsupported mapping file type: {path.name}")
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read mapping file {path}: {exc}") from exc

    try:
        data: Any = tomllib.loads(raw) if path.suffix == ".toml" else json.loads(raw)
    except (tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Invalid mapping file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Mapping file {path} must contain a table at the top level")
    return SourceMapping(data)


def dump_mapping(mapping: SourceMapping) -> str:
    """Serialize *mapping* as stable, indented JSON."""
    return json.dumps(mapping.to_dict(), indent=2, sort_keys=True)


def write_mapping(mapping: SourceMapping, path: Path) -> None:
    """Write *mapping* to a ``.json`` file."""
    if path.suffix != ".json":
        raise ConfigurationError(f"Mapping output must be a .json file: {path.name}")
    path.write_text(dump_mapping(mapping) + "\n", encoding="utf-8")
