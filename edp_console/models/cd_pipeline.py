"""
CD pipeline and stage models.

This module provides the relational read model of CD pipelines and their
stages, the typed views returned by the read model store, and the command
accepted by the pipeline creation flow.
"""

from typing import Self

from pydantic import BaseModel as PydanticModel
from pydantic import ConfigDict, Field as PydanticField, model_validator
from pydantic.alias_generators import to_camel
from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from .base import (
    ApplicationName,
    BranchName,
    QualityGateType,
    ReadView,
    ResourceName,
    StepName,
    TriggerType,
)
from .codebase import CDPipelineCodebaseBranch, CodebaseBranch, CodebaseBranchRead


class CDPipelineThirdPartyService(SQLModel, table=True):
    """Link between a CD pipeline and the third-party services it uses."""

    __tablename__ = "cd_pipeline_third_party_service"

    cd_pipeline_id: int | None = Field(
        default=None, foreign_key="cd_pipeline.id", primary_key=True
    )
    third_party_service_id: int | None = Field(
        default=None, foreign_key="third_party_service.id", primary_key=True
    )


class ThirdPartyService(SQLModel, table=True):
    """A service (database, broker, ...) a pipeline can deploy alongside its applications."""

    __tablename__ = "third_party_service"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(unique=True, max_length=255)
    description: str | None = None
    version: str | None = None

    cd_pipelines: list["CDPipeline"] = Relationship(
        back_populates="third_party_services", link_model=CDPipelineThirdPartyService
    )


class CDPipeline(SQLModel, table=True):
    """CD pipeline row, written by the external reconciler."""

    __tablename__ = "cd_pipeline"

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(index=True, unique=True, max_length=255)
    status: str = "active"

    stages: list["Stage"] = Relationship(
        back_populates="cd_pipeline", sa_relationship_kwargs={"order_by": "Stage.id"}
    )
    codebase_branches: list[CodebaseBranch] = Relationship(
        back_populates="cd_pipelines", link_model=CDPipelineCodebaseBranch
    )
    third_party_services: list[ThirdPartyService] = Relationship(
        back_populates="cd_pipelines", link_model=CDPipelineThirdPartyService
    )


class Stage(SQLModel, table=True):
    """Stage of a CD pipeline."""

    __tablename__ = "cd_stage"
    __table_args__ = (UniqueConstraint("cd_pipeline_id", "name"),)

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    description: str
    trigger_type: str
    quality_gate: str
    jenkins_step_name: str
    order: int = Field(ge=0)
    cd_pipeline_id: int = Field(foreign_key="cd_pipeline.id")

    cd_pipeline: CDPipeline = Relationship(back_populates="stages")
    streams: list["StageCodebaseStream"] = Relationship(back_populates="stage")


class StageCodebaseStream(SQLModel, table=True):
    """Input and output image streams of a codebase branch inside a stage."""

    __tablename__ = "stage_codebase_docker_stream"

    stage_id: int = Field(foreign_key="cd_stage.id", primary_key=True)
    codebase_branch_id: int = Field(foreign_key="codebase_branch.id", primary_key=True)
    input_is: str | None = None
    output_is: str | None = None

    stage: Stage = Relationship(back_populates="streams")
    codebase_branch: CodebaseBranch = Relationship()


# Read views


class StageRead(ReadView):
    """Stage as shown on a pipeline overview."""

    name: str
    description: str
    trigger_type: str
    quality_gate: str
    jenkins_step_name: str
    order: int
    openshift_project_link: str | None = None


class CDPipelineRead(ReadView):
    """Pipeline view with stages, branches and derived links."""

    name: str
    status: str
    jenkins_link: str | None = None
    stages: list[StageRead] = []
    codebase_branches: list[CodebaseBranchRead] = []
    third_party_services: list[str] = []


class CDPipelineSummary(ReadView):
    """Pipeline row of a pipeline listing."""

    name: str
    status: str
    jenkins_link: str | None = None


class ApplicationStage(ReadView):
    """Application branch deployed by a stage."""

    name: str
    branch_name: str
    input_is: str | None = None
    output_is: str | None = None


class StageView(ReadView):
    """Stage looked up by pipeline and stage name."""

    name: str
    cd_pipeline: str
    description: str
    quality_gate: str
    trigger_type: str
    order: int
    jenkins_step_name: str
    applications: list[ApplicationStage] = []


class CDPipelineCriteria(SQLModel):
    """Filter criteria for pipeline listings."""

    status: str | None = None


# Commands


class _Command(PydanticModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApplicationWithBranch(_Command):
    """Application and branch a pipeline deploys."""

    app_name: ApplicationName
    branch_name: BranchName


class StageCreate(_Command):
    """Stage requested as part of pipeline creation."""

    name: ResourceName
    description: str = PydanticField(min_length=1)
    step_name: StepName
    quality_gate_type: QualityGateType
    trigger_type: TriggerType
    order: int = PydanticField(ge=0, le=9)


class CDPipelineCreateCommand(_Command):
    """Request to create a CD pipeline with its stages."""

    name: ResourceName
    applications: list[ApplicationWithBranch] = PydanticField(min_length=1)
    third_party_services: list[str] = PydanticField(default_factory=list, alias="services")
    stages: list[StageCreate] = PydanticField(min_length=1)

    @model_validator(mode="after")
    def check_stages_unique(self) -> Self:
        """Stage names and orders must be unique within a pipeline."""
        names = [stage.name for stage in self.stages]
        if len(set(names)) != len(names):
            raise ValueError("stage names must be unique within a pipeline")
        orders = [stage.order for stage in self.stages]
        if len(set(orders)) != len(orders):
            raise ValueError("stage orders must be unique within a pipeline")
        return self
