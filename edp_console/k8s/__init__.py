"""Orchestrator custom-resource access."""

from .client import (
    CD_PIPELINE_KIND,
    STAGE_KIND,
    KubernetesResourceClient,
    ResourceClient,
    ResourceKind,
)

__all__ = [
    "CD_PIPELINE_KIND",
    "STAGE_KIND",
    "KubernetesResourceClient",
    "ResourceClient",
    "ResourceKind",
]
