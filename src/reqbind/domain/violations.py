"""Constraint violations and the aggregated validation failure."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from reqbind.domain.errors import ReqbindError


@dataclass(frozen=True)
class Violation:
    """One constraint failure on one property.

    Two violations with the same ``property_path`` and ``message`` describe
    the same defect, whatever produced them.
    """

    property_path: str
    message: str
    invalid_value: Any = None
    code: str | None = None

    @property
    def key(self) -> tuple[str, str]:
        return (self.property_path, self.message)


def dedupe_violations(violations: Iterable[Violation]) -> list[Violation]:
    """Drop repeated ``(property_path, message)`` pairs, keeping the first."""
    seen: set[tuple[str, str]] = set()
    unique: list[Violation] = []
    for violation in violations:
        if violation.key in seen:
            continue
        seen.add(violation.key)
        unique.append(violation)
    return unique


class ValidationFailed(ReqbindError):
    """Binding finished but one or more fields violate their constraints.

    Attributes:
        value: The partially populated request instance.
        violations: Deduplicated violations in field order.
    """

    def __init__(self, value: object, violations: Iterable[Violation]) -> None:
        self.value = value
        self.violations: tuple[Violation, ...] = tuple(violations)
        super().__init__(self._summary())

    def _summary(self) -> str:
        lines = [f"{len(self.violations)} violation(s) on {type(self.value).__name__}"]
        lines.extend(f"  {v.property_path}: {v.message}" for v in self.violations)
        return "\n".join(lines)

    def by_property(self) -> dict[str, list[str]]:
        """Group violation messages by property path, preserving order."""
        grouped: dict[str, list[str]] = {}
        for violation in self.violations:
            grouped.setdefault(violation.property_path, []).append(violation.message)
        return grouped
