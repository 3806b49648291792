"""Expiration policy shared by attribute caches and the resolution repository."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import StrEnum
from typing import Final

from .errors import InvalidCachePolicyError

DEFAULT_CACHE_EXPIRATION: Final[int] = 2


class TimeUnit(StrEnum):
    NANOSECONDS = "NANOSECONDS"
    MICROSECONDS = "MICROSECONDS"
    MILLISECONDS = "MILLISECONDS"
    SECONDS = "SECONDS"
    MINUTES = "MINUTES"
    HOURS = "HOURS"
    DAYS = "DAYS"

    @classmethod
    def parse(cls, name: str) -> TimeUnit:
        try:
            return cls(name.strip().upper())
        except ValueError as exc:
            raise InvalidCachePolicyError(f"Unsupported cache time unit: {name}") from exc

    def to_timedelta(self, amount: int) -> timedelta:
        match self:
            case TimeUnit.NANOSECONDS:
                return timedelta(microseconds=amount / 1000)
            case TimeUnit.MICROSECONDS:
                return timedelta(microseconds=amount)
            case TimeUnit.MILLISECONDS:
                return timedelta(milliseconds=amount)
            case TimeUnit.SECONDS:
                return timedelta(seconds=amount)
            case TimeUnit.MINUTES:
                return timedelta(minutes=amount)
            case TimeUnit.HOURS:
                return timedelta(hours=amount)
            case TimeUnit.DAYS:
                return timedelta(days=amount)


@dataclass(frozen=True, slots=True)
class CacheConfig:
    """Expiration policy of an attribute cache.

    Two configurations are equal when both the expiration and the unit are
    equal. Repositories use this as their identity, so repositories wrapping
    different backends with the same TTL compare equal.
    """

    expiration: int = DEFAULT_CACHE_EXPIRATION
    time_unit: TimeUnit = TimeUnit.HOURS

    def __post_init__(self) -> None:
        if isinstance(self.expiration, bool) or not isinstance(self.expiration, int):
            raise InvalidCachePolicyError("Cache expiration must be an integer")
        if self.expiration <= 0:
            raise InvalidCachePolicyError("Cache expiration must be positive")
        if not isinstance(self.time_unit, TimeUnit):
            object.__setattr__(self, "time_unit", TimeUnit.parse(str(self.time_unit)))
        # timedelta has microsecond resolution
        if self.ttl <= timedelta(0):
            raise InvalidCachePolicyError(
                f"Cache expiration of {self.expiration} {self.time_unit} is below one microsecond"
            )

    @property
    def ttl(self) -> timedelta:
        return self.time_unit.to_timedelta(self.expiration)

    @property
    def ttl_seconds(self) -> float:
        return self.ttl.total_seconds()


__all__ = ["CacheConfig", "TimeUnit"]
