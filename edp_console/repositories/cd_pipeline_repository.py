"""Read model queries for CD pipelines and stages."""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlmodel import select

from edp_console.models import (
    ApplicationStage,
    CDPipeline,
    CDPipelineCriteria,
    CDPipelineRead,
    CDPipelineSummary,
    CodebaseBranch,
    CodebaseBranchRead,
    Stage,
    StageCodebaseStream,
    StageRead,
    StageView,
)
from edp_console.repositories.base import BaseRepository


class CDPipelineRepository(BaseRepository[CDPipeline]):
    """Repository returning denormalized pipeline and stage views."""

    def __init__(self, session: AsyncSession):
        """Initialize CD pipeline repository with session."""
        super().__init__(session, CDPipeline)

    async def find_pipeline_by_name(self, name: str) -> CDPipelineRead | None:
        """Get a pipeline with its stages, branches and services.

        Stages come back in storage order; callers sort them.

        Args:
            name: Pipeline name

        Returns:
            Pipeline view or None if there is no such pipeline
        """
        statement = (
            select(CDPipeline)
            .where(CDPipeline.name == name)
            .options(
                selectinload(CDPipeline.stages),  # type: ignore[arg-type]
                selectinload(CDPipeline.codebase_branches).selectinload(  # type: ignore[arg-type]
                    CodebaseBranch.codebase  # type: ignore[arg-type]
                ),
                selectinload(CDPipeline.third_party_services),  # type: ignore[arg-type]
            )
        )
        result = await self._execute(statement, f"lookup of pipeline '{name}'")

        pipeline = result.scalars().first()
        if pipeline is None:
            return None

        return CDPipelineRead(
            name=pipeline.name,
            status=pipeline.status,
            stages=[StageRead.model_validate(stage) for stage in pipeline.stages],
            codebase_branches=[
                CodebaseBranchRead(name=branch.name, codebase_name=branch.codebase.name)
                for branch in pipeline.codebase_branches
            ],
            third_party_services=[service.name for service in pipeline.third_party_services],
        )

    async def find_pipelines(self, criteria: CDPipelineCriteria) -> list[CDPipelineSummary]:
        """List pipelines matching the criteria, ordered by name.

        Args:
            criteria: Filter criteria

        Returns:
            Matching pipelines, possibly empty
        """
        statement = select(CDPipeline)
        if criteria.status:
            statement = statement.where(CDPipeline.status == criteria.status)
        statement = statement.order_by(CDPipeline.name)

        result = await self._execute(statement, "pipeline listing")

        return [
            CDPipelineSummary(name=pipeline.name, status=pipeline.status)
            for pipeline in result.scalars().all()
        ]

    async def find_stage(self, pipeline_name: str, stage_name: str) -> StageView | None:
        """Get a stage by pipeline and stage name.

        Args:
            pipeline_name: Parent pipeline name
            stage_name: Stage name

        Returns:
            Stage view with its applications or None
        """
        statement = (
            select(Stage)
            .join(CDPipeline, Stage.cd_pipeline_id == CDPipeline.id)  # type: ignore[arg-type]
            .where(CDPipeline.name == pipeline_name, Stage.name == stage_name)
            .options(
                selectinload(Stage.streams)  # type: ignore[arg-type]
                .selectinload(StageCodebaseStream.codebase_branch)  # type: ignore[arg-type]
                .selectinload(CodebaseBranch.codebase),  # type: ignore[arg-type]
            )
        )
        result = await self._execute(
            statement, f"lookup of stage '{stage_name}' in pipeline '{pipeline_name}'"
        )

        stage = result.scalars().first()
        if stage is None:
            return None

        return StageView(
            name=stage.name,
            cd_pipeline=pipeline_name,
            description=stage.description,
            quality_gate=stage.quality_gate,
            trigger_type=stage.trigger_type,
            order=stage.order,
            jenkins_step_name=stage.jenkins_step_name,
            applications=[
                ApplicationStage(
                    name=stream.codebase_branch.codebase.name,
                    branch_name=stream.codebase_branch.name,
                    input_is=stream.input_is,
                    output_is=stream.output_is,
                )
                for stream in stage.streams
            ],
        )
