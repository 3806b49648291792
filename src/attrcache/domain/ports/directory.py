"""Port for external attribute sources (directories, person repositories)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from attrcache.domain.types import Person


@runtime_checkable
class AttributeSource(Protocol):
    """Look up the raw attributes of a principal in an external directory.

    ``get_person`` returns ``None`` for unknown ids. Sources that cannot be
    reached raise :class:`~attrcache.domain.errors.AttributeSourceUnavailableError`.
    """

    def get_person(self, principal_id: str) -> Person | None: ...

    def is_available(self) -> bool: ...


__all__ = ["AttributeSource"]
