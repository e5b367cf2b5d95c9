"""Exception hierarchy shared by every layer."""

from __future__ import annotations


class ReqbindError(Exception):
    """Base class for all reqbind errors."""


class ConfigurationError(ReqbindError):
    """A type, mapping, or setting is malformed.

    Raised for deployment defects, never for bad request data.
    Callers must not retry at the request level.
    """
