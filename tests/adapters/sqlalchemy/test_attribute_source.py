from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.pool import NullPool

from attrcache.adapters.sqlalchemy import SqlAlchemyAttributeSource
from attrcache.domain.ports import AttributeSource

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine


def test_satisfies_source_port(sqlite_engine: Engine) -> None:
    assert isinstance(SqlAlchemyAttributeSource(sqlite_engine), AttributeSource)


def test_get_person_returns_grouped_ordered_values(sqlite_engine: Engine) -> None:
    source = SqlAlchemyAttributeSource(sqlite_engine)
    source.add_person("ann", {"role": ["user", "admin"], "email": "a@x", "age": 42})

    person = source.get_person("ann")

    assert person is not None
    assert person.id == "ann"
    assert dict(person.attributes or {}) == {
        "age": [42],
        "email": ["a@x"],
        "role": ["user", "admin"],
    }


def test_unknown_person_is_none(sqlite_engine: Engine) -> None:
    assert SqlAlchemyAttributeSource(sqlite_engine).get_person("ghost") is None


def test_person_without_attributes_has_empty_mapping(sqlite_engine: Engine) -> None:
    source = SqlAlchemyAttributeSource(sqlite_engine)
    source.add_person("ann", {})

    person = source.get_person("ann")

    assert person is not None
    assert len(person.attributes or {}) == 0


def test_add_person_replaces_previous_attributes(sqlite_engine: Engine) -> None:
    source = SqlAlchemyAttributeSource(sqlite_engine)
    source.add_person("ann", {"email": "a@x", "dept": "eng"})
    source.add_person("ann", {"email": "b@x"})

    person = source.get_person("ann")

    assert person is not None
    assert dict(person.attributes or {}) == {"email": ["b@x"]}


def test_remove_person(sqlite_engine: Engine) -> None:
    source = SqlAlchemyAttributeSource(sqlite_engine)
    source.add_person("ann", {"email": "a@x"})

    assert source.remove_person("ann") is True
    assert source.remove_person("ann") is False
    assert source.get_person("ann") is None


def test_is_available_reports_reachable_database(sqlite_engine: Engine) -> None:
    assert SqlAlchemyAttributeSource(sqlite_engine).is_available() is True


def test_is_available_false_when_database_cannot_be_opened(tmp_path: Path) -> None:
    missing = tmp_path / "missing-dir" / "directory.db"
    engine = create_engine(f"sqlite+pysqlite:///{missing}", poolclass=NullPool)

    assert SqlAlchemyAttributeSource(engine).is_available() is False
