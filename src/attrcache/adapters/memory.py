"""In-process attribute cache backed by ``cachetools.TTLCache``."""

from __future__ import annotations

import threading
import time
from typing import TYPE_CHECKING

from cachetools import TTLCache

from attrcache.domain.cache_policy import CacheConfig

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from attrcache.domain.types import AttributeValue, PrincipalAttributes

DEFAULT_MAXSIZE = 10_000


class InMemoryAttributeCache:
    """Thread-safe TTL store holding copies of the attributes it is given."""

    def __init__(
        self,
        config: CacheConfig | None = None,
        *,
        maxsize: int = DEFAULT_MAXSIZE,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or CacheConfig()
        self._lock = threading.Lock()
        self._entries: TTLCache[str, PrincipalAttributes] = TTLCache(
            maxsize=maxsize,
            ttl=self.config.ttl_seconds,
            timer=timer,
        )

    def get(self, principal_id: str) -> PrincipalAttributes | None:
        with self._lock:
            attributes = self._entries.get(principal_id)
        return _copy(attributes) if attributes is not None else None

    def put(self, principal_id: str, attributes: Mapping[str, AttributeValue]) -> None:
        with self._lock:
            self._entries[principal_id] = _copy(attributes)

    def invalidate(self, principal_id: str) -> None:
        with self._lock:
            self._entries.pop(principal_id, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._entries.expire()
            return len(self._entries)


def _copy(attributes: Mapping[str, AttributeValue]) -> PrincipalAttributes:
    return {
        name: list(value) if isinstance(value, list) else value  # pyright: ignore[reportUnknownArgumentType]
        for name, value in attributes.items()
    }
