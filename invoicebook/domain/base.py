"""Shared base for domain entities

Entities serialize with camelCase keys so a stored snapshot keeps the layout
the application has always written; Python code uses snake_case attributes.
"""

import time
from datetime import datetime, timezone
from typing import Annotated, Callable

from pydantic import (
    BaseModel as PydanticBaseModel,
    BeforeValidator,
    ConfigDict,
    ValidationError,
    WrapValidator,
)
from pydantic.alias_generators import to_camel

_last_id = 0


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def fallback(default_factory: Callable) -> WrapValidator:
    """
    Field validator that replaces an unreadable value with a default

    Stored data is never rejected field by field: a value that does not
    validate reads as ``default_factory()`` and the rest of the record is kept.
    """

    def _validate(value, handler):
        try:
            return handler(value)
        except ValidationError:
            return default_factory()

    return WrapValidator(_validate)


def generate_id() -> str:
    """
    Creation-timestamp derived identifier

    Milliseconds since epoch, bumped by one when two ids are requested within
    the same millisecond so ids stay unique and ordered by creation.
    """
    global _last_id
    candidate = int(time.time() * 1000)
    _last_id = candidate if candidate > _last_id else _last_id + 1
    return str(_last_id)


class BaseModel(PydanticBaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=False,
    )

    def to_document(self) -> dict:
        """JSON-compatible dict with camelCase keys"""
        return self.model_dump(mode="json", by_alias=True)


def _as_text(value) -> str:
    return "" if value is None else str(value)


# Free-text field: a missing or null value reads as an empty string
Text = Annotated[str, BeforeValidator(_as_text)]
