"""Attribute source backed by the HTTP directory API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from attrcache.domain.errors import AttributeSourceUnavailableError
from attrcache.domain.normalization import AttributeMap
from attrcache.domain.types import Person

from .client import DirectoryAPIError, DirectoryUnreachableError

if TYPE_CHECKING:
    from .client import DirectoryClient

log = getLogger(__name__)


class HttpAttributeSource:
    def __init__(self, client: DirectoryClient) -> None:
        self.client = client

    def is_available(self) -> bool:
        return bool(self.client.base_url)

    def get_person(self, principal_id: str) -> Person | None:
        try:
            payload = self.client.fetch_person(principal_id)
        except DirectoryUnreachableError as exc:
            raise AttributeSourceUnavailableError(str(exc)) from exc
        except (DirectoryAPIError, ValidationError) as exc:
            log.warning("Directory returned an unusable response for [%s]: %s", principal_id, exc)
            raise AttributeSourceUnavailableError(str(exc)) from exc
        if payload is None:
            return None
        if payload.attributes is None:
            return Person(id=payload.id)
        return Person(id=payload.id, attributes=AttributeMap(payload.attributes))
