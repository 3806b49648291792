"""Reusable fakes for attribute resolution tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from attrcache.domain.errors import AttributeSourceUnavailableError
from attrcache.domain.types import Person

if TYPE_CHECKING:
    from collections.abc import Mapping

    from attrcache.domain.normalization import AttributeMap
    from attrcache.domain.types import AttributeValue, PersonAttributes, PrincipalAttributes


class FakeClock:
    """Manually advanced clock usable as both a datetime and a float timer."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def timer(self) -> float:
        return self.now.timestamp()

    def advance(self, delta: timedelta) -> None:
        self.now += delta


class RecordingCache:
    """Dict-backed cache that records every put."""

    def __init__(self, initial: dict[str, PrincipalAttributes] | None = None) -> None:
        self.entries: dict[str, PrincipalAttributes] = dict(initial or {})
        self.puts: list[tuple[str, PrincipalAttributes]] = []
        self.closed = False

    def get(self, principal_id: str) -> PrincipalAttributes | None:
        return self.entries.get(principal_id)

    def put(self, principal_id: str, attributes: Mapping[str, AttributeValue]) -> None:
        self.entries[principal_id] = dict(attributes)
        self.puts.append((principal_id, dict(attributes)))

    def invalidate(self, principal_id: str) -> None:
        self.entries.pop(principal_id, None)

    def close(self) -> None:
        self.closed = True


class FakeAttributeSource:
    """In-memory attribute source counting lookups."""

    def __init__(
        self,
        people: dict[str, PersonAttributes | None] | None = None,
        *,
        available: bool = True,
        unreachable: bool = False,
    ) -> None:
        self.people = dict(people or {})
        self.available = available
        self.unreachable = unreachable
        self.calls: list[str] = []

    def is_available(self) -> bool:
        return self.available

    def get_person(self, principal_id: str) -> Person | None:
        self.calls.append(principal_id)
        if self.unreachable:
            raise AttributeSourceUnavailableError("directory is down")
        if principal_id not in self.people:
            return None
        return Person(id=principal_id, attributes=self.people[principal_id])


class FailingMerger:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error or RuntimeError("merger exploded")

    def merge(self, existing: PersonAttributes, incoming: PersonAttributes) -> AttributeMap:
        _ = (existing, incoming)
        raise self.error
