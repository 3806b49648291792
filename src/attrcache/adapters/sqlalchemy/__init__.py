"""SQLAlchemy adapter package for attrcache."""

from __future__ import annotations

from .cache import SqlAlchemyAttributeCache
from .directory import SqlAlchemyAttributeSource
from .engine import StartupError, configured_engine, is_started, shutdown, startup
from .mappings import create_all_tables, metadata

__all__ = [
    "SqlAlchemyAttributeCache",
    "SqlAlchemyAttributeSource",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
]
