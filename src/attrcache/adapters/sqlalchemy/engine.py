"""Process-wide SQLAlchemy engine lifecycle."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import create_engine

from attrcache.config.database import DatabaseConfig, get_database_config

from .mappings import create_all_tables

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


class StartupError(RuntimeError):
    """Raised when the SQLAlchemy adapter is used before initialisation."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> Engine:
    """Initialise the shared engine and create missing tables."""

    if _STATE.engine is not None and not force:
        raise StartupError(
            "SQLAlchemy adapter already initialised. Pass force=True to reconfigure."
        )
    if force and _STATE.engine is not None and _STATE.engine is not engine:
        _STATE.engine.dispose()

    resolved_engine = engine
    if resolved_engine is None:
        config = DatabaseConfig(uri=database_uri) if database_uri else get_database_config()
        resolved_engine = create_engine(config.uri, echo=config.echo, future=True)
    create_all_tables(resolved_engine)
    _STATE.engine = resolved_engine
    return resolved_engine


def configured_engine() -> Engine:
    """Return the engine managed by the adapter or raise if not started."""

    if _STATE.engine is None:
        raise StartupError(
            "SQLAlchemy adapter not initialised. Call attrcache.adapters.sqlalchemy."
            "engine.startup() first."
        )
    return _STATE.engine


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    """Dispose the managed engine and reset state (primarily for tests)."""

    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.engine = None
