"""Request type identity and the bindable-request marker."""

from __future__ import annotations


class OperationRequest:
    """Marker base for request types the argument resolver should bind.

    Subclasses declare their fields as class-level annotations, either on a
    plain class or a dataclass::

        class ShowUser(OperationRequest):
            user_id: Annotated[int, Field(gt=0)]
            verbose: bool = False

    The marker itself declares no fields.
    """

    __slots__ = ()


def type_name(request_type: type) -> str:
    """Return the stable ``module.QualName`` identity of *request_type*."""
    return f"{request_type.__module__}.{request_type.__qualname__}"
