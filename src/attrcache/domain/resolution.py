"""Cached resolution of principal attributes against an attribute source.

Resolution flow for :meth:`CachingPrincipalAttributesRepository.get_attributes`:

1. a non-empty cache entry for the principal id is returned as-is;
2. without a reachable attribute source the principal's own attributes are
   returned and nothing is cached;
3. otherwise source attributes are fetched and, when a merging strategy is
   configured, merged with the principal's attributes;
4. the result is written to the cache and returned.

A failing merger never breaks resolution: the failure is logged and the
principal's original attributes are cached and returned instead.
"""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Self

from .cache_policy import CacheConfig
from .errors import AttributeSourceUnavailableError
from .normalization import AttributeMap, to_person_attributes, to_principal_attributes

if TYPE_CHECKING:
    from types import TracebackType

    from .merging import AttributeMerger, MergingStrategy
    from .ports import AttributeCache, AttributeSource
    from .types import PersonAttributes, Principal, PrincipalAttributes

log = getLogger(__name__)


class CachingPrincipalAttributesRepository:
    """Resolve, merge and cache the attributes of authenticated principals.

    Equality and hashing only consider :attr:`cache_config`: two repositories
    with the same expiration policy are equivalent even when they wrap
    different cache stores or attribute sources.
    """

    def __init__(
        self,
        cache: AttributeCache,
        *,
        source: AttributeSource | None = None,
        merging_strategy: MergingStrategy | None = None,
        cache_config: CacheConfig | None = None,
    ) -> None:
        self.cache = cache
        self.source = source
        self.cache_config = cache_config or CacheConfig()
        self._merging_strategy = merging_strategy
        self._merger: AttributeMerger | None = (
            merging_strategy.attribute_merger if merging_strategy is not None else None
        )

    @property
    def merging_strategy(self) -> MergingStrategy | None:
        return self._merging_strategy

    def get_attributes(
        self,
        principal: Principal,
        service: object | None = None,
    ) -> PrincipalAttributes:
        """Return the final attributes for ``principal``.

        ``service`` identifies the service being accessed; it is accepted for
        callers that have one and not used by the resolution itself.
        """

        _ = service
        cached = self.cache.get(principal.id)
        if cached:
            log.debug(
                "Found %s cached attributes for principal [%s]: %s",
                len(cached),
                principal.id,
                cached,
            )
            return cached

        if not self._source_available():
            log.debug(
                "No attribute source is available; returning default attributes for [%s]",
                principal.id,
            )
            return dict(principal.attributes)

        try:
            source_attributes = self.retrieve_person_attributes(principal.id)
        except AttributeSourceUnavailableError as exc:
            log.warning(
                "Attribute source unavailable while resolving [%s]: %s", principal.id, exc
            )
            return dict(principal.attributes)
        log.debug(
            "Found %s attributes for principal [%s] in the attribute source",
            len(source_attributes),
            principal.id,
        )

        if self._merger is None:
            log.debug("No merging strategy configured; using attributes from the source")
            return self._cache_as_principal_attributes(principal, source_attributes)

        principal_attributes = to_person_attributes(principal.attributes)
        log.debug(
            "Merging attributes of [%s] with the source via strategy [%s]",
            principal.id,
            self._merging_strategy,
        )
        try:
            merged = self._merger.merge(principal_attributes, source_attributes)
        except Exception as exc:  # noqa: BLE001
            log.error(  # noqa: TRY400
                "Merging strategy [%s] failed to produce attributes for [%s]: [%s]. "
                "Skipping the merge and returning the original attributes %s",
                self._merging_strategy,
                principal.id,
                _describe_failure(exc),
                dict(principal_attributes),
            )
            return self._cache_as_principal_attributes(principal, principal_attributes)
        return self._cache_as_principal_attributes(principal, merged)

    def retrieve_person_attributes(self, principal_id: str) -> PersonAttributes:
        """Fetch source-form attributes; unknown ids yield an empty mapping."""

        if self.source is None:
            raise AttributeSourceUnavailableError("No attribute source configured")
        person = self.source.get_person(principal_id)
        if person is None:
            log.debug("Principal [%s] not found in the attribute source", principal_id)
            return AttributeMap()
        if person.attributes is None:
            log.debug("Principal [%s] has no attributes in the attribute source", principal_id)
            return AttributeMap()
        return person.attributes

    def invalidate(self, principal_id: str) -> None:
        self.cache.invalidate(principal_id)

    def close(self) -> None:
        for resource in (self.cache, self.source):
            close = getattr(resource, "close", None)
            if callable(close):
                close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CachingPrincipalAttributesRepository):
            return NotImplemented
        return self.cache_config == other.cache_config

    def __hash__(self) -> int:
        return hash(self.cache_config)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(cache_config={self.cache_config!r}, "
            f"merging_strategy={self._merging_strategy!r})"
        )

    def _source_available(self) -> bool:
        return self.source is not None and self.source.is_available()

    def _cache_as_principal_attributes(
        self, principal: Principal, attributes: PersonAttributes
    ) -> PrincipalAttributes:
        final = to_principal_attributes(attributes)
        self.cache.put(principal.id, final)
        return final


def _describe_failure(exc: BaseException) -> str:
    name = f"{type(exc).__module__}.{type(exc).__qualname__}"
    message = str(exc)
    return f"{name}-{message}" if message.strip() else f"{name}-"


__all__ = ["CachingPrincipalAttributesRepository"]
