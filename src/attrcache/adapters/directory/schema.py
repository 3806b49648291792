"""Payload schema of the HTTP directory API."""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

log = logging.getLogger(__name__)


class DirectoryBaseModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)
    _logged_extra_keys: ClassVar[set[str]] = set()

    def model_post_init(self, _context: object, /) -> None:
        extras = self.__pydantic_extra__
        if not extras:
            return
        new_keys = set(extras).difference(self._logged_extra_keys)
        if not new_keys:
            return
        self._logged_extra_keys.update(new_keys)
        log.debug(
            "Directory %s: unmodeled keys: %s",
            type(self).__name__,
            ", ".join(sorted(new_keys)),
        )


class DirectoryPerson(DirectoryBaseModel):
    """``GET /people/{id}`` response body."""

    id: str
    attributes: dict[str, list[Any]] | None = Field(default=None)

    @field_validator("attributes", mode="before")
    @classmethod
    def _wrap_single_values(cls, value: object) -> object:
        # some directories send single-valued attributes unwrapped
        if not isinstance(value, dict):
            return value
        return {
            name: item if isinstance(item, list) else [item]
            for name, item in value.items()  # pyright: ignore[reportUnknownVariableType]
        }
