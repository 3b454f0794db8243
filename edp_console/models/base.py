"""
Base models for the EDP admin console.

This module provides the common enumerations, constrained string types and
the read view base shared by the relational models, the commands and the
cluster resources.
"""

import enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

# DNS-label-like names: lowercase alphanumerics and hyphens, no leading/trailing hyphen
ResourceName = Annotated[str, StringConstraints(pattern=r"^[a-z0-9]([-a-z0-9]*[a-z0-9])$")]
ApplicationName = Annotated[str, StringConstraints(pattern=r"^[a-z][a-z0-9-]*[a-z0-9]$")]
BranchName = Annotated[str, StringConstraints(pattern=r"^[a-z0-9][a-z0-9-._]*[a-z0-9]$")]
StepName = Annotated[str, StringConstraints(pattern=r"^[A-Za-z0-9][A-Za-z0-9._-]*$")]

INITIALIZED_STATUS = "initialized"


class TriggerType(str, enum.Enum):
    """How a stage is started once the previous stage completes."""

    manual = "manual"
    auto = "auto"


class QualityGateType(str, enum.Enum):
    """Quality gate a stage must pass before promotion."""

    manual = "manual"
    autotests = "autotests"


class ReadView(BaseModel):
    """Base of the read views returned by the API, serialized in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)
