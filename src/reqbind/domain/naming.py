"""Naming-convention converters for the second lookup attempt.

A field is first looked up under its semantic name (``userId``).  When
that key is absent, the binder retries with the converted transport name
(``user_id``).  Converters are plain objects with a ``normalize`` method;
the built-ins live in ``NAME_CONVERTERS`` and plugins may add more.
"""

from __future__ import annotations

import re
from typing import Protocol, runtime_checkable

from reqbind.domain.errors import ConfigurationError

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z\d])([A-Z])")


@runtime_checkable
class NameConverter(Protocol):
    """Maps a semantic field name to its transport name."""

    def normalize(self, name: str) -> str: ...


def _split_words(name: str, sep: str) -> str:
    text = _ACRONYM_BOUNDARY.sub(rf"\1{sep}\2", name)
    text = _WORD_BOUNDARY.sub(rf"\1{sep}\2", text)
    return text.lower()


class SnakeCaseConverter:
    """``userId`` -> ``user_id``, ``HTTPStatus`` -> ``http_status``."""

    def normalize(self, name: str) -> str:
        return _split_words(name, "_")


class KebabCaseConverter:
    """``userId`` -> ``user-id``; underscores become hyphens too."""

    def normalize(self, name: str) -> str:
        return _split_words(name, "-").replace("_", "-")


class IdentityConverter:
    """Leaves names untouched, disabling the fallback lookup."""

    def normalize(self, name: str) -> str:
        return name


NAME_CONVERTERS: dict[str, NameConverter] = {
    "snake": SnakeCaseConverter(),
    "kebab": KebabCaseConverter(),
    "identity": IdentityConverter(),
}


def register_name_converter(name: str, converter: NameConverter) -> None:
    """Add *converter* under *name*. Built-in names cannot be replaced."""
    if not isinstance(converter, NameConverter):
        raise ConfigurationError(f"Name converter {name!r} has no normalize() method")
    existing = NAME_CONVERTERS.get(name)
    if existing is not None and existing is not converter:
        raise ConfigurationError(f"Name converter {name!r} is already registered")
    NAME_CONVERTERS[name] = converter


def get_name_converter(name: str) -> NameConverter:
    """Look up a registered converter by name."""
    try:
        return NAME_CONVERTERS[name]
    except KeyError:
        known = ", ".join(sorted(NAME_CONVERTERS))
        raise ConfigurationError(f"Unknown name converter {name!r} (known: {known})") from None
