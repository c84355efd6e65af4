"""Shared API dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from cinesocial.storage import MemStorage


def get_store(request: Request) -> MemStorage:
    """Return the store the application built at startup."""
    return request.app.state.store


# Type alias for store dependency
StoreDep = Annotated[MemStorage, Depends(get_store)]
