"""ValueBag — the raw request values available to one bind.

The bag is a read-only snapshot.  The body map is whatever the caller
decoded; when decoding was unavailable the body falls back to the form
fields merged with the query parameters (query wins on conflicts).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


def _empty() -> Mapping[str, Any]:
    return MappingProxyType({})


def normalize_header(name: str) -> str:
    """Header keys compare case-insensitively with ``_`` equal to ``-``."""
    return name.lower().replace("_", "-")


class HeaderMap(Mapping[str, Any]):
    """Read-only header mapping with HTTP header-bag key semantics."""

    __slots__ = ("_items",)

    def __init__(self, headers: Mapping[str, Any] | None = None) -> None:
        self._items: dict[str, Any] = {}
        for key, value in (headers or {}).items():
            self._items.setdefault(normalize_header(str(key)), value)

    def __getitem__(self, key: str) -> Any:
        return self._items[normalize_header(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and normalize_header(key) in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"HeaderMap({self._items!r})"


@dataclass(frozen=True)
class ValueBag:
    """Path variables, query parameters, headers, and the body map."""

    path: Mapping[str, Any] = field(default_factory=_empty)
    query: Mapping[str, Any] = field(default_factory=_empty)
    headers: HeaderMap = field(default_factory=HeaderMap)
    body: Mapping[str, Any] = field(default_factory=_empty)

    def __post_init__(self) -> None:
        if not isinstance(self.headers, HeaderMap):
            object.__setattr__(self, "headers", HeaderMap(self.headers))

    @classmethod
    def build(
        cls,
        *,
        path: Mapping[str, Any] | None = None,
        query: Mapping[str, Any] | None = None,
        headers: Mapping[str, Any] | None = None,
        body: Any = None,
        form: Mapping[str, Any] | None = None,
    ) -> ValueBag:
        """Assemble a bag from per-source maps.

        *body* is the decoded request body.  Pass ``None`` when it could not
        be decoded; a decoded value that is not a mapping (a JSON list, say)
        is treated the same way.  Either case binds body fields from
        ``form`` merged with ``query``.
        """
        query_map = dict(query or {})
        if isinstance(body, Mapping):
            body_map = dict(body)
        else:
            body_map = {**(form or {}), **query_map}
        return cls(
            path=MappingProxyType(dict(path or {})),
            query=MappingProxyType(query_map),
            headers=HeaderMap(headers),
            body=MappingProxyType(body_map),
        )
