"""Application entry point for CineSocial."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from cinesocial.api import system_router
from cinesocial.core.settings import Settings
from cinesocial.core.settings import settings as default_settings
from cinesocial.storage import ConflictError, InvalidTransitionError, MemStorage, NotFoundError

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, store: MemStorage | None = None) -> FastAPI:
    """Build the FastAPI application and the single store it serves.

    Args:
        settings: Configuration to use; defaults to the environment-loaded settings.
        store: Pre-built store, mainly for tests; a fresh one is created otherwise.
    """
    settings = settings or default_settings
    logging.getLogger("cinesocial").setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.store = store or MemStorage(settings=settings)
        logger.info("%s %s store ready", settings.app_name, settings.app_version)
        yield

    app = FastAPI(title=f"{settings.app_name} API", version=settings.app_version, lifespan=lifespan)
    app.include_router(system_router)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(_: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)})

    @app.exception_handler(InvalidTransitionError)
    @app.exception_handler(ConflictError)
    async def conflict_handler(_: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(status_code=status.HTTP_409_CONFLICT, content={"detail": str(exc)})

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint to verify the service is running."""
        return {"status": "ok"}

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn
    uvicorn.run("cinesocial.main:app", host="0.0.0.0", port=8000, reload=default_settings.debug)
