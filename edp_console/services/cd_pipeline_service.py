"""Service layer for CD pipeline creation and reads.

Creation writes one ``CDPipeline`` resource and one ``Stage`` resource per
requested stage to the orchestrator. The relational row is written later by
an external reconciler, so this flow never writes to the database.

Creation is not atomic: if a stage collides after the pipeline resource was
created, the pipeline resource stays in place.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from edp_console.exceptions import (
    CDPipelineAlreadyExistsError,
    ResourceConflictError,
    StageAlreadyExistsError,
    UpstreamError,
)
from edp_console.k8s import CD_PIPELINE_KIND, STAGE_KIND, ResourceClient, ResourceKind
from edp_console.models import (
    INITIALIZED_STATUS,
    CDPipelineCreateCommand,
    CDPipelineCriteria,
    CDPipelineRead,
    CDPipelineResource,
    CDPipelineSpec,
    CDPipelineSummary,
    ObjectMeta,
    ResourceStatus,
    StageCreate,
    StageResource,
    StageSpec,
    StageView,
)
from edp_console.repositories.cd_pipeline_repository import CDPipelineRepository
from edp_console.services.codebase_service import CodebaseService
from edp_console.services.enrichment import (
    associate_branch_applications,
    attach_branch_links,
    attach_project_links,
    sort_stages_by_order,
)
from edp_console.services.links import LinkBuilder, codebase_branch_name, stage_resource_name
from edp_console.utils.logger import logger


class CDPipelineService:
    """Service for CD pipeline business logic."""

    def __init__(
        self,
        pipeline_repo: CDPipelineRepository,
        codebase_service: CodebaseService,
        resources: ResourceClient,
        links: LinkBuilder,
        namespace: str,
    ):
        """Initialize CD pipeline service.

        Args:
            pipeline_repo: Read model repository
            codebase_service: Codebase reference checks
            resources: Orchestrator resource client
            links: Link builder for the tenant
            namespace: Namespace of the pipeline and stage resources
        """
        self.pipeline_repo = pipeline_repo
        self.codebase_service = codebase_service
        self.resources = resources
        self.links = links
        self.namespace = namespace

    # Creation

    async def create_pipeline(self, command: CDPipelineCreateCommand) -> CDPipelineResource:
        """Create the pipeline resource and its stage resources.

        Args:
            command: Validated creation command

        Returns:
            Pipeline resource as stored by the orchestrator

        Raises:
            InvalidReferenceError: If an application branch does not exist
            CDPipelineAlreadyExistsError: If the name is taken in either store
            StageAlreadyExistsError: If a stage resource name is taken
            UpstreamError: If a store fails
        """
        logger.info(f"Start creating CD pipeline {command.name}")

        await self.codebase_service.ensure_branches_exist(command.applications)

        if await self.pipeline_repo.find_pipeline_by_name(command.name) is not None:
            logger.info(f"CD pipeline {command.name} already exists in the database")
            raise CDPipelineAlreadyExistsError(command.name, "database")

        existing = await self._get_resource(CD_PIPELINE_KIND, command.name)
        if existing is not None:
            logger.info(f"CD pipeline {command.name} already exists in the cluster")
            raise CDPipelineAlreadyExistsError(command.name, "cluster")

        resource = self._build_pipeline_resource(command)
        try:
            created = await self._create_resource(CD_PIPELINE_KIND, resource)
        except ResourceConflictError as e:
            raise CDPipelineAlreadyExistsError(command.name, "cluster") from e
        logger.info(f"CD pipeline resource {command.name} is saved into the cluster")

        stages = await self.create_stages(command)
        logger.info(
            f"Stages for CD pipeline {command.name} were created: "
            f"{[stage.metadata.name for stage in stages]}"
        )

        return CDPipelineResource.model_validate(created)

    async def create_stages(self, command: CDPipelineCreateCommand) -> list[StageResource]:
        """Create a stage resource for every requested stage.

        All stage names are checked before the first stage is written.

        Args:
            command: Creation command holding the stages

        Returns:
            Stage resources as stored by the orchestrator, in input order

        Raises:
            StageAlreadyExistsError: If a stage resource already exists
            UpstreamError: If the resource store fails
        """
        for stage in command.stages:
            name = stage_resource_name(command.name, stage.name)
            if await self._get_resource(STAGE_KIND, name) is not None:
                logger.warning(f"Stage resource {name} already exists")
                raise StageAlreadyExistsError(name)

        created = []
        for stage in command.stages:
            resource = self._build_stage_resource(command.name, stage)
            try:
                body = await self._create_resource(STAGE_KIND, resource)
            except ResourceConflictError as e:
                raise StageAlreadyExistsError(resource.metadata.name) from e
            logger.info(f"Stage {resource.metadata.name} is saved into the cluster")
            created.append(StageResource.model_validate(body))
        return created

    def _build_pipeline_resource(self, command: CDPipelineCreateCommand) -> CDPipelineResource:
        return CDPipelineResource(
            api_version=CD_PIPELINE_KIND.api_version,
            kind=CD_PIPELINE_KIND.kind,
            metadata=ObjectMeta(name=command.name, namespace=self.namespace),
            spec=CDPipelineSpec(
                name=command.name,
                codebase_branch=[
                    codebase_branch_name(app.app_name, app.branch_name)
                    for app in command.applications
                ],
                third_party_services=list(command.third_party_services),
            ),
            status=ResourceStatus(status=INITIALIZED_STATUS, last_time_updated=datetime.now(UTC)),
        )

    def _build_stage_resource(self, pipeline_name: str, stage: StageCreate) -> StageResource:
        return StageResource(
            api_version=STAGE_KIND.api_version,
            kind=STAGE_KIND.kind,
            metadata=ObjectMeta(
                name=stage_resource_name(pipeline_name, stage.name), namespace=self.namespace
            ),
            spec=StageSpec(
                name=stage.name,
                description=stage.description,
                quality_gate=stage.quality_gate_type.value,
                jenkins_step=stage.step_name,
                trigger_type=stage.trigger_type.value,
                order=stage.order,
                cd_pipeline=pipeline_name,
            ),
            status=ResourceStatus(status=INITIALIZED_STATUS, last_time_updated=datetime.now(UTC)),
        )

    async def _get_resource(self, kind: ResourceKind, name: str) -> dict[str, Any] | None:
        try:
            return await self.resources.get_optional(kind, self.namespace, name)
        except UpstreamError as e:
            logger.error(f"Failed to look up {kind.kind} {name} in the cluster: {e}")
            raise

    async def _create_resource(self, kind: ResourceKind, resource: BaseModel) -> dict[str, Any]:
        body = resource.model_dump(mode="json", by_alias=True, exclude_none=True)
        try:
            return await self.resources.create(kind, self.namespace, body)
        except ResourceConflictError:
            raise
        except UpstreamError as e:
            logger.error(f"Failed to create {kind.kind} {body['metadata']['name']}: {e}")
            raise

    # Reads

    async def get_pipeline_by_name(self, name: str) -> CDPipelineRead | None:
        """Get an enriched pipeline view.

        Args:
            name: Pipeline name

        Returns:
            Pipeline with sorted stages and derived links, or None if absent
        """
        logger.debug(f"Fetching CD pipeline {name}")
        pipeline = await self.pipeline_repo.find_pipeline_by_name(name)
        if pipeline is None:
            return None

        pipeline.jenkins_link = self.links.pipeline_job_link(pipeline.name)
        attach_branch_links(pipeline.codebase_branches, self.links)
        if pipeline.stages:
            sort_stages_by_order(pipeline.stages)
            attach_project_links(pipeline.stages, pipeline.name, self.links)
            logger.debug(f"Fetched {len(pipeline.stages)} stages of CD pipeline {name}")
        associate_branch_applications(pipeline.codebase_branches)
        return pipeline

    async def list_pipelines(self, criteria: CDPipelineCriteria) -> list[CDPipelineSummary]:
        """List pipelines with their CI links.

        Args:
            criteria: Filter criteria

        Returns:
            Matching pipelines, possibly empty
        """
        pipelines = await self.pipeline_repo.find_pipelines(criteria)
        for pipeline in pipelines:
            pipeline.jenkins_link = self.links.pipeline_job_link(pipeline.name)
        logger.debug(f"Fetched {len(pipelines)} CD pipelines")
        return pipelines

    async def get_stage(self, pipeline_name: str, stage_name: str) -> StageView | None:
        """Get a stage by pipeline and stage name.

        Returns:
            Stage view or None if absent
        """
        logger.debug(f"Fetching stage {stage_name} of CD pipeline {pipeline_name}")
        return await self.pipeline_repo.find_stage(pipeline_name, stage_name)
