"""Ordering and link enrichment of pipeline read views."""

from edp_console.models import CodebaseBranchRead, StageRead
from edp_console.services.links import LinkBuilder


def sort_stages_by_order(stages: list[StageRead]) -> None:
    """Sort stages ascending by order, in place.

    The sort is stable: stages sharing an order keep their input order.
    """
    stages.sort(key=lambda stage: stage.order)


def attach_project_links(stages: list[StageRead], pipeline_name: str, links: LinkBuilder) -> None:
    """Set the console project link of every stage, in place."""
    for stage in stages:
        stage.openshift_project_link = links.project_link(pipeline_name, stage.name)


def attach_branch_links(branches: list[CodebaseBranchRead], links: LinkBuilder) -> None:
    """Set the VCS and CI links of every codebase branch, in place."""
    for branch in branches:
        branch.vcs_link = links.branch_vcs_link(branch.codebase_name, branch.name)
        branch.cicd_link = links.branch_cicd_link(branch.codebase_name, branch.name)


def associate_branch_applications(branches: list[CodebaseBranchRead]) -> None:
    """Copy the owning application name onto each branch for display."""
    for branch in branches:
        branch.app_name = branch.codebase_name
