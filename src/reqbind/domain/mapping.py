"""The per-route source mapping table.

Shape: ``(request type name, route name) -> (field name -> SourceKind)``.

The table is built ahead of request traffic (from route declarations or a
mapping file) and is read-only afterwards.  Anything not in the table
reads from the body:

- a field with no entry for its route defaults to ``BODY``;
- a ``(type, route)`` pair with no entry defaults every field to ``BODY``.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from reqbind.domain.errors import ConfigurationError
from reqbind.domain.requests import type_name
from reqbind.domain.types import SourceKind

RawMappingTable = Mapping[str, Mapping[str, Mapping[str, str]]]

_EMPTY: Mapping[str, SourceKind] = MappingProxyType({})


def _coerce_kind(value: object, where: str) -> SourceKind:
    try:
        return SourceKind(str(value).lower())
    except ValueError:
        known = ", ".join(k.value for k in SourceKind)
        raise ConfigurationError(f"Invalid source {value!r} for {where} (expected one of {known})") from None


def _key(request_type: type | str) -> str:
    return request_type if isinstance(request_type, str) else type_name(request_type)


class SourceMapping:
    """Immutable lookup table from request fields to their value sources."""

    __slots__ = ("_table",)

    def __init__(self, table: RawMappingTable | None = None) -> None:
        frozen: dict[str, Mapping[str, Mapping[str, SourceKind]]] = {}
        for type_key, routes in (table or {}).items():
            if not isinstance(routes, Mapping):
                raise ConfigurationError(f"Routes for {type_key!r} must be a table")
            frozen_routes: dict[str, Mapping[str, SourceKind]] = {}
            for route, fields in routes.items():
                if not isinstance(fields, Mapping):
                    raise ConfigurationError(f"Fields for {type_key!r} on {route!r} must be a table")
                frozen_routes[str(route)] = MappingProxyType(
                    {
                        str(field): _coerce_kind(kind, f"{type_key}.{field} on route {route!r}")
                        for field, kind in fields.items()
                    }
                )
            frozen[str(type_key)] = MappingProxyType(frozen_routes)
        self._table: Mapping[str, Mapping[str, Mapping[str, SourceKind]]] = MappingProxyType(frozen)

    def __len__(self) -> int:
        return len(self._table)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SourceMapping):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"SourceMapping({self.to_dict()!r})"

    def supports(self, request_type: type | str) -> bool:
        """Whether *request_type* has any route entries at all."""
        return _key(request_type) in self._table

    def routes_for(self, request_type: type | str) -> Mapping[str, Mapping[str, SourceKind]]:
        return self._table.get(_key(request_type), MappingProxyType({}))

    def for_route(self, request_type: type | str, route: str | None) -> Mapping[str, SourceKind]:
        """Field sources for one route; empty when nothing is declared."""
        if route is None:
            return _EMPTY
        return self.routes_for(request_type).get(route, _EMPTY)

    def source_of(self, request_type: type | str, route: str | None, field: str) -> SourceKind:
        return self.for_route(request_type, route).get(field, SourceKind.BODY)

    def merged(self, other: SourceMapping) -> SourceMapping:
        """Return a new table where *other*'s route entries replace ours."""
        combined = self.to_dict()
        for type_key, routes in other.to_dict().items():
            combined.setdefault(type_key, {}).update(routes)
        return SourceMapping(combined)

    def to_dict(self) -> dict[str, dict[str, dict[str, str]]]:
        return {
            type_key: {
                route: {field: kind.value for field, kind in fields.items()}
                for route, fields in routes.items()
            }
            for type_key, routes in self._table.items()
        }
