"""Config file discovery and loading.

Walk-up finder locates reqbind.toml, similar to how git finds .git/.
Supports REQBIND_CONFIG env var and --config CLI flag overrides.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

from reqbind.config.models import ReqbindConfig
from reqbind.domain.errors import ConfigurationError

CONFIG_FILENAME = "reqbind.toml"
CONFIG_ENV_VAR = "REQBIND_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Walk up from *start* (default: cwd) looking for reqbind.toml.

    Returns the path to the config file, or None if not found.
    Checks REQBIND_CONFIG env var first.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return p

    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML, raising ConfigurationError on syntax errors."""
    raw = path.read_text(encoding="utf-8")
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigurationError(f"Invalid TOML in {path}: {exc}") from exc


def load_config(path: Path | None = None, cwd: Path | None = None) -> ReqbindConfig:
    """Load and validate config from a TOML file.

    If *path* is None, uses find_config(*cwd*) to discover the file.
    Returns default ReqbindConfig if no file is found.
    """
    if path is None:
        path = find_config(cwd)

    if path is None:
        return ReqbindConfig()

    return ReqbindConfig.model_validate(read_toml(path))
