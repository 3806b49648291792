"""Application configuration helpers."""

from __future__ import annotations

from .cache import get_cache_backend, get_cache_config
from .database import DatabaseConfig, default_data_dir, get_database_config
from .directory import DirectoryConfig, get_directory_config
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .merging import get_merging_strategy, parse_merging_strategy

__all__ = [
    "ConfigurationError",
    "DatabaseConfig",
    "DirectoryConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "configure_logging",
    "default_data_dir",
    "get_cache_backend",
    "get_cache_config",
    "get_database_config",
    "get_directory_config",
    "get_merging_strategy",
    "optional_env_var",
    "parse_merging_strategy",
    "require_env_vars",
]
