"""In-memory storage for CineSocial entities and relationships."""

from .errors import ConflictError, InvalidTransitionError, NotFoundError, StoreError
from .indices import IdSequence, RelationIndex, canonical_pair
from .memory import MemStorage

__all__ = [
    "MemStorage",
    "StoreError", "NotFoundError", "InvalidTransitionError", "ConflictError",
    "RelationIndex", "IdSequence", "canonical_pair",
]
