"""Attribute source reading people from SQL tables."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select, text
from sqlalchemy.exc import OperationalError

from attrcache.domain.errors import AttributeSourceUnavailableError
from attrcache.domain.normalization import AttributeMap, to_person_attributes
from attrcache.domain.types import Person

from .mappings import person_attribute_table, person_table

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.engine import Engine

    from attrcache.domain.types import AttributeValue

log = getLogger(__name__)


class SqlAlchemyAttributeSource:
    """Directory of people and their (possibly multi-valued) attributes.

    Values are stored JSON-encoded, one row per value, so their type and
    order survive the round trip.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def is_available(self) -> bool:
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except OperationalError as exc:
            log.warning("Attribute directory database is unreachable: %s", exc)
            return False
        return True

    def get_person(self, principal_id: str) -> Person | None:
        person_stmt = select(person_table.c.id).where(person_table.c.id == principal_id)
        attribute_stmt = (
            select(person_attribute_table.c.name, person_attribute_table.c.value)
            .where(person_attribute_table.c.person_id == principal_id)
            .order_by(person_attribute_table.c.name, person_attribute_table.c.position)
        )
        try:
            with self.engine.connect() as connection:
                if connection.execute(person_stmt).one_or_none() is None:
                    return None
                rows = connection.execute(attribute_stmt).all()
        except OperationalError as exc:
            raise AttributeSourceUnavailableError(str(exc)) from exc

        attributes = AttributeMap()
        for row in rows:
            attributes.setdefault(row.name, []).append(json.loads(row.value))
        return Person(id=principal_id, attributes=attributes)

    def add_person(self, principal_id: str, attributes: Mapping[str, AttributeValue]) -> None:
        """Create or replace a person together with all of its attributes."""

        values = to_person_attributes(attributes)
        rows = [
            {
                "person_id": principal_id,
                "name": name,
                "position": position,
                "value": json.dumps(value, default=str),
            }
            for name, name_values in values.items()
            for position, value in enumerate(name_values)
        ]
        with self.engine.begin() as connection:
            connection.execute(
                delete(person_attribute_table).where(
                    person_attribute_table.c.person_id == principal_id
                )
            )
            connection.execute(delete(person_table).where(person_table.c.id == principal_id))
            connection.execute(insert(person_table).values(id=principal_id))
            if rows:
                connection.execute(insert(person_attribute_table), rows)
        log.debug("Stored %s attributes for person [%s]", len(values), principal_id)

    def remove_person(self, principal_id: str) -> bool:
        with self.engine.begin() as connection:
            connection.execute(
                delete(person_attribute_table).where(
                    person_attribute_table.c.person_id == principal_id
                )
            )
            result = connection.execute(
                delete(person_table).where(person_table.c.id == principal_id)
            )
        return bool(result.rowcount)
