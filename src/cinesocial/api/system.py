"""System endpoints for CineSocial."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from cinesocial.api.dependencies import StoreDep

router = APIRouter(prefix="/system", tags=["system"])


@router.get("/stats")
async def get_stats(store: StoreDep) -> dict[str, Any]:
    """Return live store counts for the admin dashboard."""
    return await store.get_stats()
