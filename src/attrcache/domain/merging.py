"""Merging strategies for existing principal attributes and source attributes.

Every merger receives source-form mappings (``name -> [values]``), leaves its
inputs untouched and returns a fresh :class:`AttributeMap`. Attribute names are
matched case-insensitively.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from .errors import UnknownMergeStrategyError
from .normalization import AttributeMap

if TYPE_CHECKING:
    from .types import PersonAttributes


@runtime_checkable
class AttributeMerger(Protocol):
    """Combine existing attributes with attributes retrieved from a source."""

    def merge(self, existing: PersonAttributes, incoming: PersonAttributes) -> AttributeMap: ...


class ReplacingAttributeMerger:
    """Incoming values replace existing values for the same attribute."""

    def merge(self, existing: PersonAttributes, incoming: PersonAttributes) -> AttributeMap:
        merged = _copy(existing)
        for name, values in incoming.items():
            merged[name] = list(values)
        return merged


class NoncollidingAttributeMerger:
    """Existing values win; incoming attributes only fill the gaps."""

    def merge(self, existing: PersonAttributes, incoming: PersonAttributes) -> AttributeMap:
        merged = _copy(existing)
        for name, values in incoming.items():
            if name not in merged:
                merged[name] = list(values)
        return merged


class SourceAttributeMerger:
    """No merging: the source attributes are returned as they are."""

    def merge(self, existing: PersonAttributes, incoming: PersonAttributes) -> AttributeMap:
        _ = existing
        return _copy(incoming)


class MultivaluedAttributeMerger:
    """Combine both value lists per attribute.

    Existing values come first, followed by incoming values that are not
    already present.
    """

    def merge(self, existing: PersonAttributes, incoming: PersonAttributes) -> AttributeMap:
        merged = _copy(existing)
        for name, values in incoming.items():
            current = merged.get(name)
            if current is None:
                merged[name] = list(values)
                continue
            for value in values:
                if value not in current:
                    current.append(value)
        return merged


class MergingStrategy(StrEnum):
    """How attributes already on a principal are reconciled with the source."""

    REPLACE = "REPLACE"
    ADD = "ADD"
    NONE = "NONE"
    MULTIVALUED = "MULTIVALUED"

    @classmethod
    def parse(cls, name: str) -> MergingStrategy:
        """Return the strategy called ``name`` (case-insensitive)."""

        try:
            return cls(name.strip().upper())
        except ValueError as exc:
            raise UnknownMergeStrategyError(name) from exc

    @property
    def attribute_merger(self) -> AttributeMerger:
        return merger_for(self)


_MERGERS: dict[MergingStrategy, type[AttributeMerger]] = {
    MergingStrategy.REPLACE: ReplacingAttributeMerger,
    MergingStrategy.ADD: NoncollidingAttributeMerger,
    MergingStrategy.NONE: SourceAttributeMerger,
    MergingStrategy.MULTIVALUED: MultivaluedAttributeMerger,
}


def merger_for(strategy: MergingStrategy | str) -> AttributeMerger:
    """Return a merger for ``strategy`` or raise :class:`UnknownMergeStrategyError`."""

    key = strategy if isinstance(strategy, MergingStrategy) else MergingStrategy.parse(strategy)
    try:
        merger_cls = _MERGERS[key]
    except KeyError as exc:
        raise UnknownMergeStrategyError(strategy) from exc
    return merger_cls()


def _copy(attributes: PersonAttributes) -> AttributeMap:
    return AttributeMap({name: list(values) for name, values in attributes.items()})


__all__ = [
    "AttributeMerger",
    "MergingStrategy",
    "MultivaluedAttributeMerger",
    "NoncollidingAttributeMerger",
    "ReplacingAttributeMerger",
    "SourceAttributeMerger",
    "merger_for",
]
