from __future__ import annotations

from datetime import timedelta

from attrcache.adapters.memory import InMemoryAttributeCache
from attrcache.domain.cache_policy import CacheConfig, TimeUnit
from attrcache.domain.ports import AttributeCache
from tests.helpers.fakes import FakeClock


def _cache(clock: FakeClock, **kwargs: int) -> InMemoryAttributeCache:
    return InMemoryAttributeCache(
        CacheConfig(expiration=30, time_unit=TimeUnit.SECONDS),
        timer=clock.timer,
        **kwargs,
    )


def test_satisfies_cache_port(clock: FakeClock) -> None:
    assert isinstance(_cache(clock), AttributeCache)


def test_get_returns_stored_attributes(clock: FakeClock) -> None:
    cache = _cache(clock)
    cache.put("ann", {"email": "a@x", "role": ["user"]})

    assert cache.get("ann") == {"email": "a@x", "role": ["user"]}
    assert cache.get("bob") is None


def test_entries_expire_after_ttl(clock: FakeClock) -> None:
    cache = _cache(clock)
    cache.put("ann", {"email": "a@x"})

    clock.advance(timedelta(seconds=29))
    assert cache.get("ann") == {"email": "a@x"}

    clock.advance(timedelta(seconds=1))
    assert cache.get("ann") is None
    assert len(cache) == 0


def test_stored_values_are_isolated_from_callers(clock: FakeClock) -> None:
    cache = _cache(clock)
    roles = ["user"]
    cache.put("ann", {"role": roles})
    roles.append("admin")

    fetched = cache.get("ann")
    assert fetched == {"role": ["user"]}
    fetched["role"].append("auditor")  # pyright: ignore[reportOptionalSubscript, reportAttributeAccessIssue, reportUnknownMemberType]

    assert cache.get("ann") == {"role": ["user"]}


def test_invalidate_and_clear(clock: FakeClock) -> None:
    cache = _cache(clock)
    cache.put("ann", {"email": "a@x"})
    cache.put("bob", {"email": "b@x"})

    cache.invalidate("ann")
    cache.invalidate("missing")
    assert cache.get("ann") is None
    assert len(cache) == 1

    cache.clear()
    assert cache.get("bob") is None


def test_maxsize_evicts_entries(clock: FakeClock) -> None:
    cache = _cache(clock, maxsize=1)
    cache.put("ann", {"email": "a@x"})
    cache.put("bob", {"email": "b@x"})

    assert cache.get("ann") is None
    assert cache.get("bob") == {"email": "b@x"}
