"""Exceptions raised by the entity store."""

from __future__ import annotations


class StoreError(RuntimeError):
    """Base exception for logical-state failures inside the store."""


class NotFoundError(StoreError):
    """Raised when an update targets an id that does not resolve."""

    def __init__(self, entity: str, entity_id: int) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class InvalidTransitionError(StoreError):
    """Raised when a state machine is asked to leave a terminal state."""

    def __init__(self, entity: str, entity_id: int, current: str, requested: str) -> None:
        super().__init__(
            f"{entity} {entity_id} cannot move from {current!r} to {requested!r}"
        )
        self.entity = entity
        self.entity_id = entity_id
        self.current = current
        self.requested = requested


class ConflictError(StoreError):
    """Raised when a unique field is already taken."""

    def __init__(self, field: str, value: str) -> None:
        super().__init__(f"{field} {value!r} is already in use")
        self.field = field
        self.value = value
