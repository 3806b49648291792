"""Location of the SQL database backing the cache and directory adapters."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import optional_env_var
from .errors import ConfigurationError

APP_DIR_NAME: Final[str] = "attrcache"
DEFAULT_DB_FILENAME: Final[str] = "attrcache.db"

_TRUE_FLAGS: Final[frozenset[str]] = frozenset({"1", "true", "yes", "on"})
_FALSE_FLAGS: Final[frozenset[str]] = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class DatabaseConfig:
    uri: str
    echo: bool = False


def default_data_dir() -> Path:
    """Return ``ATTRCACHE_DATA_DIR`` or the per-user data directory for attrcache."""

    override = optional_env_var("ATTRCACHE_DATA_DIR")
    if override is not None:
        return Path(override).expanduser().resolve()
    if os.name == "nt":
        base = optional_env_var("LOCALAPPDATA")
        root = Path(base) if base else Path.home() / "AppData" / "Local"
    else:
        base = optional_env_var("XDG_DATA_HOME")
        root = Path(base) if base else Path.home() / ".local" / "share"
    return (root / APP_DIR_NAME).expanduser().resolve()


def sqlite_uri(path: Path) -> str:
    return f"sqlite+pysqlite:///{path}"


def get_database_config(*, data_dir: Path | None = None) -> DatabaseConfig:
    """Read ``DATABASE_URI``; without it, use a SQLite file in the data directory."""

    uri = optional_env_var("DATABASE_URI")
    if uri is None:
        directory = data_dir or default_data_dir()
        directory.mkdir(parents=True, exist_ok=True)
        uri = sqlite_uri(directory / DEFAULT_DB_FILENAME)
    return DatabaseConfig(uri=uri, echo=_parse_flag("ATTRCACHE_DATABASE_ECHO"))


def _parse_flag(name: str) -> bool:
    raw = optional_env_var(name)
    if raw is None:
        return False
    lowered = raw.lower()
    if lowered in _TRUE_FLAGS:
        return True
    if lowered in _FALSE_FLAGS:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {raw!r}")
