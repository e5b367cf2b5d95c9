"""Service layer — the bind-and-validate engine and its seams.

INVARIANT: services hold only immutable configuration and perform no I/O.
"""

from reqbind.services.arguments import ArgumentResolver
from reqbind.services.binder import RequestBinder
from reqbind.services.validation import PropertyValidator, PydanticPropertyValidator

__all__ = ["ArgumentResolver", "PropertyValidator", "PydanticPropertyValidator", "RequestBinder"]
