"""Repository layer for data access operations."""

from edp_console.repositories.base import BaseRepository
from edp_console.repositories.cd_pipeline_repository import CDPipelineRepository
from edp_console.repositories.codebase_repository import CodebaseRepository

__all__ = ["BaseRepository", "CDPipelineRepository", "CodebaseRepository"]
