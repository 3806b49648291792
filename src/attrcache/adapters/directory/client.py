"""HTTP directory API client."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx

from attrcache.adapters.http_resilience import ResilientClient

from .schema import DirectoryPerson

if TYPE_CHECKING:
    from collections.abc import Callable

    from attrcache.config.directory import DirectoryConfig
    from attrcache.config.http_resilience import ResilienceConfig

log = getLogger(__name__)


class DirectoryAPIError(RuntimeError):
    """Raised when the directory API returns an unexpected response."""


class DirectoryUnreachableError(DirectoryAPIError):
    """Raised when the directory cannot be reached or keeps failing server-side."""


class DirectoryClient:
    """Low-level HTTP client for a people directory."""

    def __init__(
        self,
        *,
        config: DirectoryConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        if config.resilience is None or not config.resilience.base_url:
            raise DirectoryAPIError("Missing directory base_url in resilience configuration")
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    @property
    def base_url(self) -> str | None:
        return self._resilience.base_url

    def fetch_person(self, person_id: str) -> DirectoryPerson | None:
        return asyncio.run(self._fetch_person_async(person_id))

    async def _fetch_person_async(self, person_id: str) -> DirectoryPerson | None:
        path = f"{self._config.people_path.strip('/')}/{quote(person_id, safe='')}"
        async with self._client_factory(self._resilience) as client:
            try:
                response = await client.get(path)
            except httpx.TransportError as exc:
                raise DirectoryUnreachableError(f"Directory request failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            log.debug("Directory has no person [%s]", person_id)
            return None
        if response.is_server_error:
            raise DirectoryUnreachableError(
                f"Directory responded with HTTP {response.status_code} for [{person_id}]"
            )
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise DirectoryAPIError(str(exc)) from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise DirectoryAPIError(
                f"Directory returned a non-JSON body for [{person_id}]"
            ) from exc
        if not isinstance(payload, dict):
            raise DirectoryAPIError("Unexpected directory response payload")
        return DirectoryPerson.model_validate(payload)
