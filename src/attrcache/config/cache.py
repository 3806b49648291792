"""Attribute cache configuration read from the environment."""

from __future__ import annotations

import os
from typing import Final, Literal

from attrcache.domain.cache_policy import DEFAULT_CACHE_EXPIRATION, CacheConfig, TimeUnit
from attrcache.domain.errors import InvalidCachePolicyError

from .errors import ConfigurationError

type CacheBackend = Literal["memory", "sql"]

DEFAULT_CACHE_BACKEND: Final[CacheBackend] = "memory"


def get_cache_config() -> CacheConfig:
    raw_expiration = os.getenv("ATTRCACHE_CACHE_EXPIRATION")
    raw_unit = os.getenv("ATTRCACHE_CACHE_TIME_UNIT")
    expiration = DEFAULT_CACHE_EXPIRATION
    if raw_expiration is not None and raw_expiration.strip():
        try:
            expiration = int(raw_expiration)
        except ValueError as exc:
            raise ConfigurationError(
                f"ATTRCACHE_CACHE_EXPIRATION must be an integer, got {raw_expiration!r}"
            ) from exc
    try:
        unit = TimeUnit.parse(raw_unit) if raw_unit and raw_unit.strip() else TimeUnit.HOURS
        return CacheConfig(expiration=expiration, time_unit=unit)
    except InvalidCachePolicyError as exc:
        raise ConfigurationError(str(exc)) from exc


def get_cache_backend() -> CacheBackend:
    raw = (os.getenv("ATTRCACHE_CACHE_BACKEND") or DEFAULT_CACHE_BACKEND).strip().lower()
    if raw == "memory":
        return "memory"
    if raw == "sql":
        return "sql"
    raise ConfigurationError(f"Unsupported cache backend: {raw}")
