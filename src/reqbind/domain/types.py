"""Source kinds for request values."""

from __future__ import annotations

from enum import StrEnum


class SourceKind(StrEnum):
    """Where a request field's raw value is read from."""

    PATH = "path"
    QUERY = "query"
    HEADER = "header"
    BODY = "body"
