"""Attribute source (directory) configuration values."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Final, Literal

from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError
from .http_resilience import RateLimit, ResilienceConfig

type DirectoryBackend = Literal["sql", "http", "none"]

DEFAULT_DIRECTORY_BACKEND: Final[DirectoryBackend] = "sql"
DIRECTORY_TIMEOUT_SECONDS: Final[float] = 5.0
DIRECTORY_PEOPLE_PATH: Final[str] = "people"


@dataclass(frozen=True, slots=True)
class DirectoryConfig:
    """Selects and configures the attribute source."""

    backend: DirectoryBackend = DEFAULT_DIRECTORY_BACKEND
    resilience: ResilienceConfig | None = None
    people_path: str = DIRECTORY_PEOPLE_PATH

    def __post_init__(self) -> None:
        if self.backend == "http" and (
            self.resilience is None or not self.resilience.base_url
        ):
            raise ConfigurationError("HTTP directory backend requires a base URL")


def _parse_backend(raw: str) -> DirectoryBackend:
    value = raw.strip().lower()
    if value == "sql":
        return "sql"
    if value == "http":
        return "http"
    if value == "none":
        return "none"
    raise ConfigurationError(f"Unsupported directory backend: {raw}")


def get_directory_config(*, resilience: ResilienceConfig | None = None) -> DirectoryConfig:
    backend = _parse_backend(os.getenv("ATTRCACHE_DIRECTORY_BACKEND") or DEFAULT_DIRECTORY_BACKEND)
    if backend != "http":
        return DirectoryConfig(backend=backend)

    values = require_env_vars(("ATTRCACHE_DIRECTORY_URL",))
    token = optional_env_var("ATTRCACHE_DIRECTORY_TOKEN")
    headers = {"Authorization": f"Bearer {token}"} if token else None
    return DirectoryConfig(
        backend=backend,
        resilience=resilience
        or ResilienceConfig(
            name="directory",
            base_url=values["ATTRCACHE_DIRECTORY_URL"],
            timeout_seconds=DIRECTORY_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=20, per_seconds=1.0),
            default_headers=headers,
        ),
    )
