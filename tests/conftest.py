from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from attrcache.adapters.sqlalchemy import create_all_tables, shutdown
from tests.helpers.fakes import FakeClock

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine(
        "sqlite+pysqlite:///:memory:",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_all_tables(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path_factory: pytest.TempPathFactory
) -> Iterator[None]:
    for name in (
        "ATTRCACHE_CACHE_EXPIRATION",
        "ATTRCACHE_CACHE_TIME_UNIT",
        "ATTRCACHE_CACHE_BACKEND",
        "ATTRCACHE_MERGING_STRATEGY",
        "ATTRCACHE_DIRECTORY_BACKEND",
        "ATTRCACHE_DIRECTORY_URL",
        "ATTRCACHE_DIRECTORY_TOKEN",
        "ATTRCACHE_DATABASE_ECHO",
        "DATABASE_URI",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("ATTRCACHE_DATA_DIR", str(tmp_path_factory.mktemp("attrcache-data")))
    yield
    shutdown()
