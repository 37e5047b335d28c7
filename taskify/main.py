"""FastAPI application entry point."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskify import __version__
from taskify.config import Settings
from taskify.models import HealthResponse
from taskify.routes import router as task_router
from taskify.store import MongoTaskStore, StoreConnectionError, TaskStore

logger = logging.getLogger(__name__)

system_router = APIRouter(tags=["System"])


@system_router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(version=__version__)


def create_app(settings: Settings | None = None, store: TaskStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Server settings; read from the environment when omitted.
        store: Task store to serve from. Defaults to a ``MongoTaskStore``
            built from ``settings``.
    """
    settings = settings or Settings()
    if store is None:
        store = MongoTaskStore(
            settings.MONGODB_URL,
            settings.DATABASE_NAME,
            server_selection_timeout_ms=settings.SERVER_SELECTION_TIMEOUT_MS,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting Taskify API...")
        try:
            await store.connect()
        except StoreConnectionError as exc:
            logger.critical("%s", exc)
            raise SystemExit(1) from exc
        yield
        logger.info("Shutting down Taskify API...")
        await store.close()

    app = FastAPI(
        title="Taskify API",
        description="Create, list, update and delete tasks with a due date, priority and status.",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(system_router, prefix=settings.API_PREFIX)
    app.include_router(task_router, prefix=settings.API_PREFIX)

    return app


app = create_app()
