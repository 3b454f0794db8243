"""
Codebase and branch models.

Codebases and their branches are created by the codebase management flow;
the CD pipeline flow only reads them.
"""

from typing import TYPE_CHECKING

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

from .base import ReadView

if TYPE_CHECKING:
    from .cd_pipeline import CDPipeline


class CDPipelineCodebaseBranch(SQLModel, table=True):
    """Link between a CD pipeline and the codebase branches it deploys."""

    __tablename__ = "cd_pipeline_codebase_branch"

    cd_pipeline_id: int | None = Field(
        default=None, foreign_key="cd_pipeline.id", primary_key=True
    )
    codebase_branch_id: int | None = Field(
        default=None, foreign_key="codebase_branch.id", primary_key=True
    )


class CodebaseBase(SQLModel):
    """Base model for codebase data."""

    name: str = Field(index=True, unique=True, max_length=255)
    type: str = "application"
    language: str | None = None
    build_tool: str | None = None
    status: str = "active"


class Codebase(CodebaseBase, table=True):
    """An application or library tracked by the platform."""

    __tablename__ = "codebase"

    id: int | None = Field(default=None, primary_key=True)

    branches: list["CodebaseBranch"] = Relationship(back_populates="codebase")


class CodebaseBranch(SQLModel, table=True):
    """A branch of a codebase."""

    __tablename__ = "codebase_branch"
    __table_args__ = (UniqueConstraint("codebase_id", "name"),)

    id: int | None = Field(default=None, primary_key=True)
    name: str = Field(max_length=255)
    codebase_id: int = Field(foreign_key="codebase.id")
    status: str = "active"

    codebase: Codebase = Relationship(back_populates="branches")
    cd_pipelines: list["CDPipeline"] = Relationship(
        back_populates="codebase_branches", link_model=CDPipelineCodebaseBranch
    )


class CodebaseBranchRead(ReadView):
    """Codebase branch as shown on a pipeline, with derived links."""

    name: str
    codebase_name: str
    app_name: str | None = None
    vcs_link: str | None = None
    cicd_link: str | None = None
