"""Core value types shared by the resolution pipeline."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

type AttributeValue = object
type PrincipalAttributes = dict[str, AttributeValue]
"""Principal form: attribute name to a single value or a list of values."""

type PersonAttributes = Mapping[str, list[AttributeValue]]
"""Source form: attribute name to a (possibly empty) list of values."""


@dataclass(frozen=True, slots=True)
class Principal:
    """An already-authenticated identity and the attributes it carries."""

    id: str
    attributes: Mapping[str, AttributeValue] = field(default_factory=dict[str, object])

    def __post_init__(self) -> None:
        if not self.id or not self.id.strip():
            raise ValueError("Principal id must be a non-blank string")


@dataclass(frozen=True, slots=True)
class Person:
    """Record returned by an attribute source for a single principal id."""

    id: str
    attributes: PersonAttributes | None = None


__all__ = [
    "AttributeValue",
    "Person",
    "PersonAttributes",
    "Principal",
    "PrincipalAttributes",
]
