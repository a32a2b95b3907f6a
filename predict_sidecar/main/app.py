"""
Main Application - Main Layer

Creates the FastAPI application, initializes the container and ties the
scoring resources to the application lifespan.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from predict_sidecar.main.config import get_settings
from predict_sidecar.main.container import app_lifespan, init_container
from predict_sidecar.presentation.controllers import (
    predictions_router,
    series_router,
    system_router,
)
from predict_sidecar.shared import (
    configure_logging,
    get_logger,
    update_logging_from_settings,
)

# Bootstrap logging before settings are loaded, then refine it from them.
configure_logging()
update_logging_from_settings(get_settings())

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Record the start time and hold the container resources while serving."""
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("Application starting up")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    init_container(settings)

    app = FastAPI(
        title=settings.sidecar.title,
        description=settings.sidecar.description,
        version=settings.sidecar.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(series_router)
    app.include_router(predictions_router)
    app.include_router(system_router)

    return app


app = create_app()
