"""Application wiring entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from attrcache.adapters.directory import DirectoryClient, HttpAttributeSource
from attrcache.adapters.memory import InMemoryAttributeCache
from attrcache.adapters.sqlalchemy import (
    SqlAlchemyAttributeCache,
    SqlAlchemyAttributeSource,
    configured_engine,
    is_started,
    startup,
)
from attrcache.config import (
    get_cache_backend,
    get_cache_config,
    get_directory_config,
    get_merging_strategy,
)
from attrcache.domain.resolution import CachingPrincipalAttributesRepository
from attrcache.domain.types import Principal

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.engine import Engine

    from attrcache.config import DirectoryConfig
    from attrcache.config.cache import CacheBackend
    from attrcache.domain.cache_policy import CacheConfig
    from attrcache.domain.merging import MergingStrategy
    from attrcache.domain.ports import AttributeCache, AttributeSource
    from attrcache.domain.types import AttributeValue, PrincipalAttributes

log = getLogger(__name__)

_UNSET = object()


def _engine() -> Engine:
    return configured_engine() if is_started() else startup()


def build_attribute_cache(
    *,
    backend: CacheBackend | None = None,
    cache_config: CacheConfig | None = None,
) -> AttributeCache:
    effective_config = cache_config or get_cache_config()
    effective_backend = backend or get_cache_backend()
    if effective_backend == "sql":
        return SqlAlchemyAttributeCache(_engine(), effective_config)
    return InMemoryAttributeCache(effective_config)


def build_attribute_source(config: DirectoryConfig | None = None) -> AttributeSource | None:
    effective_config = config or get_directory_config()
    if effective_config.backend == "none":
        return None
    if effective_config.backend == "http":
        return HttpAttributeSource(DirectoryClient(config=effective_config))
    return SqlAlchemyAttributeSource(_engine())


def build_attributes_repository(
    *,
    cache: AttributeCache | None = None,
    source: AttributeSource | None | object = _UNSET,
    merging_strategy: MergingStrategy | None | object = _UNSET,
    cache_config: CacheConfig | None = None,
) -> CachingPrincipalAttributesRepository:
    """Build a repository from explicit collaborators, falling back to configuration."""

    effective_config = cache_config or get_cache_config()
    effective_cache = (
        cache if cache is not None else build_attribute_cache(cache_config=effective_config)
    )
    effective_source = build_attribute_source() if source is _UNSET else source
    effective_strategy = get_merging_strategy() if merging_strategy is _UNSET else merging_strategy
    repository = CachingPrincipalAttributesRepository(
        effective_cache,
        source=effective_source,  # pyright: ignore[reportArgumentType]
        merging_strategy=effective_strategy,  # pyright: ignore[reportArgumentType]
        cache_config=effective_config,
    )
    log.debug("Built %r", repository)
    return repository


def resolve_principal_attributes(
    principal_id: str,
    attributes: Mapping[str, AttributeValue] | None = None,
    *,
    repository: CachingPrincipalAttributesRepository | None = None,
) -> PrincipalAttributes:
    """Resolve attributes for one principal using the configured adapters."""

    effective_repository = repository or build_attributes_repository()
    principal = Principal(id=principal_id, attributes=dict(attributes or {}))
    log.info(
        "Resolving attributes for [%s] (strategy=%s)",
        principal_id,
        effective_repository.merging_strategy,
    )
    return effective_repository.get_attributes(principal)


def add_directory_person(principal_id: str, attributes: Mapping[str, AttributeValue]) -> None:
    SqlAlchemyAttributeSource(_engine()).add_person(principal_id, attributes)
    log.info("Stored person [%s] with %s attributes", principal_id, len(attributes))


def purge_expired_cache_entries(*, cache_config: CacheConfig | None = None) -> int:
    cache = SqlAlchemyAttributeCache(_engine(), cache_config or get_cache_config())
    return cache.purge_expired()
