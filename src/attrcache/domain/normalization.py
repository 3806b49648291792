"""Conversions between principal-form and source-form attribute mappings.

Principals carry attributes as ``name -> value | [values]`` while attribute
sources and mergers work on ``name -> [values]``. Both conversions are pure
and total: ``None`` or empty input yields an empty mapping.

Source-form mappings produced here are :class:`AttributeMap` instances, so
attribute names compare case-insensitively and iterate in case-folded order.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .types import AttributeValue, PersonAttributes, PrincipalAttributes


class AttributeMap(MutableMapping[str, list["AttributeValue"]]):
    """Case-insensitive attribute mapping ordered by case-folded name.

    The first spelling of a name is kept; writing a name that differs only by
    case replaces the value under the original spelling.
    """

    __slots__ = ("_entries",)

    def __init__(self, initial: PersonAttributes | None = None) -> None:
        self._entries: dict[str, tuple[str, list[AttributeValue]]] = {}
        if initial:
            self.update(initial)

    def __getitem__(self, key: str) -> list[AttributeValue]:
        return self._entries[key.casefold()][1]

    def __setitem__(self, key: str, value: list[AttributeValue]) -> None:
        folded = key.casefold()
        existing = self._entries.get(folded)
        original = existing[0] if existing is not None else key
        self._entries[folded] = (original, value)

    def __delitem__(self, key: str) -> None:
        del self._entries[key.casefold()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.casefold() in self._entries

    def __iter__(self) -> Iterator[str]:
        for folded in sorted(self._entries):
            yield self._entries[folded][0]

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self.items())!r})"

    def copy(self) -> AttributeMap:
        return AttributeMap({name: list(values) for name, values in self.items()})


def to_person_attributes(attributes: Mapping[str, AttributeValue] | None) -> AttributeMap:
    """Return ``attributes`` in source form, wrapping single values in lists."""

    converted = AttributeMap()
    if not attributes:
        return converted
    for name, value in attributes.items():
        converted[name] = _as_value_list(value)
    return converted


def to_principal_attributes(attributes: PersonAttributes | None) -> PrincipalAttributes:
    """Return ``attributes`` in principal form, unwrapping one-element lists."""

    converted: PrincipalAttributes = {}
    if not attributes:
        return converted
    for name, values in attributes.items():
        value: AttributeValue = values[0] if len(values) == 1 else list(values)
        # later entries win on collision
        converted[name] = value
    return converted


def _as_value_list(value: AttributeValue) -> list[AttributeValue]:
    if isinstance(value, list):
        return list(value)  # pyright: ignore[reportUnknownArgumentType]
    if isinstance(value, tuple):
        return list(value)  # pyright: ignore[reportUnknownArgumentType]
    return [value]


__all__ = ["AttributeMap", "to_person_attributes", "to_principal_attributes"]
