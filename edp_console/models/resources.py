"""
Cluster custom resources mirrored by the console.

Pipelines and stages are written to the orchestrator as ``CDPipeline`` and
``Stage`` custom resources; these models are their wire representation.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import INITIALIZED_STATUS

API_VERSION = "edp.epam.com/v1alpha1"


class _Resource(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class ObjectMeta(_Resource):
    """Resource metadata."""

    name: str
    namespace: str


class ResourceStatus(_Resource):
    """Lifecycle status of a resource."""

    status: str = INITIALIZED_STATUS
    last_time_updated: datetime | None = None


class CDPipelineSpec(_Resource):
    """Desired state of a CD pipeline."""

    name: str
    codebase_branch: list[str] = Field(default_factory=list)
    third_party_services: list[str] = Field(default_factory=list)


class StageSpec(_Resource):
    """Desired state of a stage."""

    name: str
    description: str
    quality_gate: str
    jenkins_step: str
    trigger_type: str
    order: int
    cd_pipeline: str


class CDPipelineResource(_Resource):
    """``CDPipeline`` custom resource."""

    api_version: str = API_VERSION
    kind: str = "CDPipeline"
    metadata: ObjectMeta
    spec: CDPipelineSpec
    status: ResourceStatus | None = None


class StageResource(_Resource):
    """``Stage`` custom resource."""

    api_version: str = API_VERSION
    kind: str = "Stage"
    metadata: ObjectMeta
    spec: StageSpec
    status: ResourceStatus | None = None
