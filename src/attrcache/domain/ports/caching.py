"""Port for stores holding resolved principal attributes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from attrcache.domain.types import AttributeValue, PrincipalAttributes


@runtime_checkable
class AttributeCache(Protocol):
    """Key/value store of resolved attributes keyed by principal id.

    Entries expire according to the store's cache configuration; an expired
    entry must behave exactly like one that was never stored.
    """

    def get(self, principal_id: str) -> PrincipalAttributes | None: ...

    def put(self, principal_id: str, attributes: Mapping[str, AttributeValue]) -> None: ...

    def invalidate(self, principal_id: str) -> None: ...


__all__ = ["AttributeCache"]
