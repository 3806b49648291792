"""Attribute cache persisted in a SQL table."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select

from attrcache.domain.cache_policy import CacheConfig

from .mappings import cached_attributes_table

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from sqlalchemy.engine import Engine

    from attrcache.domain.types import AttributeValue, PrincipalAttributes

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SqlAlchemyAttributeCache:
    """Store resolved attributes as JSON rows with an absolute expiry time.

    Expired rows are ignored on read and removed lazily; :meth:`purge_expired`
    removes all of them at once.
    """

    def __init__(
        self,
        engine: Engine,
        config: CacheConfig | None = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.engine = engine
        self.config = config or CacheConfig()
        self._clock = clock

    def get(self, principal_id: str) -> PrincipalAttributes | None:
        table = cached_attributes_table
        stmt = select(table.c.attributes, table.c.expires_at).where(
            table.c.principal_id == principal_id
        )
        with self.engine.connect() as connection:
            row = connection.execute(stmt).one_or_none()
        if row is None:
            return None
        if row.expires_at <= self._clock():
            log.debug("Cached attributes for [%s] expired at %s", principal_id, row.expires_at)
            self.invalidate(principal_id)
            return None
        try:
            loaded = json.loads(row.attributes)
        except ValueError:
            loaded = None
        if not isinstance(loaded, dict):
            log.warning("Discarding malformed cache entry for [%s]", principal_id)
            self.invalidate(principal_id)
            return None
        return cast(dict[str, Any], loaded)

    def put(self, principal_id: str, attributes: Mapping[str, AttributeValue]) -> None:
        table = cached_attributes_table
        now = self._clock()
        payload = json.dumps(dict(attributes), default=str, sort_keys=True)
        with self.engine.begin() as connection:
            connection.execute(delete(table).where(table.c.principal_id == principal_id))
            connection.execute(
                insert(table).values(
                    principal_id=principal_id,
                    attributes=payload,
                    cached_at=now,
                    expires_at=now + self.config.ttl,
                )
            )

    def invalidate(self, principal_id: str) -> None:
        table = cached_attributes_table
        with self.engine.begin() as connection:
            connection.execute(delete(table).where(table.c.principal_id == principal_id))

    def purge_expired(self) -> int:
        """Delete every expired entry and return how many were removed."""

        table = cached_attributes_table
        with self.engine.begin() as connection:
            result = connection.execute(delete(table).where(table.c.expires_at <= self._clock()))
        removed = result.rowcount or 0
        log.info("Purged %s expired attribute cache entries", removed)
        return removed
