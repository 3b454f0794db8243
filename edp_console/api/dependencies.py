"""
Common dependencies for the admin console API endpoints.

Services are assembled per request from the request's database session, the
application-wide resource client and the platform configuration.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import ConfigurationError
from ..k8s import ResourceClient
from ..repositories import CDPipelineRepository, CodebaseRepository
from ..services.cd_pipeline_service import CDPipelineService
from ..services.codebase_service import CodebaseService
from ..services.links import LinkBuilder
from ..settings import PlatformConfig, get_settings
from ..utils.database import get_async_session

SessionDep = Annotated[AsyncSession, Depends(get_async_session)]


def get_platform_config() -> PlatformConfig:
    """Get the platform configuration from settings."""
    return get_settings().platform


PlatformConfigDep = Annotated[PlatformConfig, Depends(get_platform_config)]


def get_resource_client(request: Request) -> ResourceClient:
    """Get the resource client created at application startup.

    Raises:
        ConfigurationError: If the application started without a client
    """
    client: ResourceClient | None = getattr(request.app.state, "resource_client", None)
    if client is None:
        raise ConfigurationError("Resource client is not initialized")
    return client


ResourceClientDep = Annotated[ResourceClient, Depends(get_resource_client)]


async def get_cd_pipeline_service(
    session: SessionDep,
    resources: ResourceClientDep,
    config: PlatformConfigDep,
) -> CDPipelineService:
    """Build the CD pipeline service for a request."""
    return CDPipelineService(
        pipeline_repo=CDPipelineRepository(session),
        codebase_service=CodebaseService(CodebaseRepository(session)),
        resources=resources,
        links=LinkBuilder.from_config(config),
        namespace=config.namespace,
    )


CDPipelineServiceDep = Annotated[CDPipelineService, Depends(get_cd_pipeline_service)]
