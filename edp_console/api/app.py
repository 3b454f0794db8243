"""
Main API application module for the EDP admin console.

This module creates and configures the FastAPI application with its routers,
exception handlers and shared clients.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from edp_console import __version__
from edp_console.api.exception_handlers import setup_exception_handlers
from edp_console.api.routers import cd_pipeline
from edp_console.k8s import KubernetesResourceClient
from edp_console.settings import settings
from edp_console.utils.db_manager import db_manager
from edp_console.utils.logger import logger, setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Configures logging, creates database tables and the orchestrator
    resource client.
    """
    setup_logging(settings)

    await db_manager.create_db_and_tables_async()
    logger.info("Database initialized with async support")

    app.state.resource_client = KubernetesResourceClient.from_settings(settings)
    logger.info(
        f"Resource client targets {settings.k8s_api_url}, namespace {settings.resource_namespace}"
    )

    logger.info("Application startup complete")

    try:
        yield
    finally:
        await app.state.resource_client.close()
        await db_manager.close()
        logger.info("Application shutdown")


def create_app(root_path: str = "/") -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        root_path: The root path for the application

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="EDP Admin Console",
        description="CD pipelines, stages and codebase branches of the delivery platform",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        root_path=root_path,
    )

    setup_exception_handlers(app)

    app.include_router(cd_pipeline.router, prefix="/api/v1/edp/cd-pipeline", tags=["CD Pipelines"])

    return app


# Create default application instance
app = create_app(root_path=settings.root_url)
