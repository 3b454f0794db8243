"""
CD pipeline router.

Endpoints delegate to ``CDPipelineService``; domain errors are mapped to
HTTP responses by the application exception handlers.
"""

from fastapi import APIRouter, Query, status

from edp_console.api.dependencies import CDPipelineServiceDep
from edp_console.exceptions import NOT_FOUND
from edp_console.models import (
    CDPipelineCreateCommand,
    CDPipelineCriteria,
    CDPipelineRead,
    CDPipelineResource,
    CDPipelineSummary,
    StageView,
)

router = APIRouter()


@router.post("", response_model=CDPipelineResource, status_code=status.HTTP_201_CREATED)
async def create_cd_pipeline(
    command: CDPipelineCreateCommand, service: CDPipelineServiceDep
) -> CDPipelineResource:
    """Create a CD pipeline and its stages in the cluster."""
    return await service.create_pipeline(command)


@router.get("", response_model=list[CDPipelineSummary])
async def list_cd_pipelines(
    service: CDPipelineServiceDep,
    status_filter: str | None = Query(None, alias="status", description="Pipeline status"),
) -> list[CDPipelineSummary]:
    """List CD pipelines, optionally filtered by status."""
    return await service.list_pipelines(CDPipelineCriteria(status=status_filter))


@router.get("/{name}", response_model=CDPipelineRead)
async def get_cd_pipeline(name: str, service: CDPipelineServiceDep) -> CDPipelineRead:
    """Get a CD pipeline with its stages and codebase branches."""
    pipeline = await service.get_pipeline_by_name(name)
    if pipeline is None:
        raise NOT_FOUND.with_context(f"CD pipeline {name} not found")
    return pipeline


@router.get("/{pipeline_name}/stage/{stage_name}", response_model=StageView)
async def get_stage(
    pipeline_name: str, stage_name: str, service: CDPipelineServiceDep
) -> StageView:
    """Get a stage of a CD pipeline."""
    stage = await service.get_stage(pipeline_name, stage_name)
    if stage is None:
        raise NOT_FOUND.with_context(f"Stage {stage_name} of CD pipeline {pipeline_name} not found")
    return stage
