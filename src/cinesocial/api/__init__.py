"""HTTP wiring that exposes the CineSocial store."""

from .dependencies import StoreDep, get_store
from .system import router as system_router

__all__ = ["StoreDep", "get_store", "system_router"]
