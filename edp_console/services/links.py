"""Derived links to the CI server, the VCS and the cluster console.

All links follow the platform naming conventions; nothing here performs I/O.
"""

from dataclasses import dataclass

from edp_console.settings import PlatformConfig

CD_PIPELINE_JOB_SUFFIX = "cd-pipeline"


def stage_resource_name(pipeline_name: str, stage_name: str) -> str:
    """Name of the stage resource: ``<pipeline>-<stage>``."""
    return f"{pipeline_name}-{stage_name}"


def codebase_branch_name(application_name: str, branch_name: str) -> str:
    """Branch reference stored on a pipeline resource: ``<application>-<branch>``."""
    return f"{application_name}-{branch_name}"


@dataclass(frozen=True)
class LinkBuilder:
    """Builds CI, VCS and console links for a tenant.

    Args:
        tenant: EDP tenant identifier
        dns_wildcard: Wildcard DNS domain of the cluster
    """

    tenant: str
    dns_wildcard: str

    @classmethod
    def from_config(cls, config: PlatformConfig) -> "LinkBuilder":
        return cls(tenant=config.tenant, dns_wildcard=config.dns_wildcard)

    def _tool_url(self, tool: str) -> str:
        return f"https://{tool}-{self.tenant}-edp-cicd.{self.dns_wildcard}"

    @property
    def _project_prefix(self) -> str:
        return f"https://master.{self.dns_wildcard}/console/project/{self.tenant}-"

    def pipeline_job_link(self, pipeline_name: str) -> str:
        """CI job running the CD pipeline."""
        return f"{self._tool_url('jenkins')}/job/{pipeline_name}-{CD_PIPELINE_JOB_SUFFIX}"

    def branch_vcs_link(self, codebase_name: str, branch_name: str) -> str:
        """VCS shortlog of a codebase branch."""
        return (
            f"{self._tool_url('gerrit')}/gitweb?p={codebase_name}.git;a=shortlog;"
            f"h=refs/heads/{branch_name}"
        )

    def branch_cicd_link(self, codebase_name: str, branch_name: str) -> str:
        """CI view of a codebase branch; view names are upper-cased branch names."""
        return f"{self._tool_url('jenkins')}/job/{codebase_name}/view/{branch_name.upper()}"

    def project_link(self, pipeline_name: str, stage_name: str) -> str:
        """Console project the stage deploys into."""
        return f"{self._project_prefix}{pipeline_name}-{stage_name}"

    def parse_pipeline_job_link(self, link: str) -> str:
        """Recover the pipeline name from a pipeline job link.

        Raises:
            ValueError: If the link was not built by ``pipeline_job_link``
        """
        prefix = f"{self._tool_url('jenkins')}/job/"
        suffix = f"-{CD_PIPELINE_JOB_SUFFIX}"
        if not link.startswith(prefix) or not link.endswith(suffix):
            raise ValueError(f"Not a CD pipeline job link: {link}")
        name = link[len(prefix) : -len(suffix)]
        if not name or "/" in name:
            raise ValueError(f"Not a CD pipeline job link: {link}")
        return name

    def parse_project_link(self, link: str, pipeline_name: str) -> str:
        """Recover the stage name from a project link of the given pipeline.

        Pipeline and stage names may both contain hyphens, so the pipeline
        name is needed to split the project name unambiguously.

        Raises:
            ValueError: If the link does not belong to the pipeline
        """
        prefix = f"{self._project_prefix}{pipeline_name}-"
        if not link.startswith(prefix) or len(link) == len(prefix):
            raise ValueError(f"Not a project link of pipeline '{pipeline_name}': {link}")
        return link[len(prefix) :]
