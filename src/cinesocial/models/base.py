"""Base class shared by all stored entities."""

from pydantic import BaseModel, ConfigDict


class Entity(BaseModel):
    """Immutable snapshot of a stored record.

    The store never mutates an entity in place; every change writes back a new
    copy built with ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    id: int
