"""
EDP admin console data models.

This package contains the SQLModel read model, the typed views built from it,
the creation commands, and the cluster custom resources.
"""

from .base import (
    INITIALIZED_STATUS,
    ApplicationName,
    BranchName,
    QualityGateType,
    ReadView,
    ResourceName,
    StepName,
    TriggerType,
)
from .cd_pipeline import (
    ApplicationStage,
    ApplicationWithBranch,
    CDPipeline,
    CDPipelineCreateCommand,
    CDPipelineCriteria,
    CDPipelineRead,
    CDPipelineSummary,
    CDPipelineThirdPartyService,
    Stage,
    StageCodebaseStream,
    StageCreate,
    StageRead,
    StageView,
    ThirdPartyService,
)
from .codebase import CDPipelineCodebaseBranch, Codebase, CodebaseBranch, CodebaseBranchRead
from .resources import (
    API_VERSION,
    CDPipelineResource,
    CDPipelineSpec,
    ObjectMeta,
    ResourceStatus,
    StageResource,
    StageSpec,
)

__all__ = [
    "API_VERSION",
    "INITIALIZED_STATUS",
    # Base
    "ApplicationName",
    "BranchName",
    "QualityGateType",
    "ReadView",
    "ResourceName",
    "StepName",
    "TriggerType",
    # Codebase
    "CDPipelineCodebaseBranch",
    "Codebase",
    "CodebaseBranch",
    "CodebaseBranchRead",
    # CD pipeline
    "ApplicationStage",
    "ApplicationWithBranch",
    "CDPipeline",
    "CDPipelineCreateCommand",
    "CDPipelineCriteria",
    "CDPipelineRead",
    "CDPipelineSummary",
    "CDPipelineThirdPartyService",
    "Stage",
    "StageCodebaseStream",
    "StageCreate",
    "StageRead",
    "StageView",
    "ThirdPartyService",
    # Resources
    "CDPipelineResource",
    "CDPipelineSpec",
    "ObjectMeta",
    "ResourceStatus",
    "StageResource",
    "StageSpec",
]
