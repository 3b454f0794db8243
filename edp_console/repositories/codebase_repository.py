"""Repository for codebase and branch lookups."""

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from edp_console.models import Codebase, CodebaseBranch
from edp_console.repositories.base import BaseRepository


class CodebaseRepository(BaseRepository[Codebase]):
    """Repository for Codebase model operations."""

    def __init__(self, session: AsyncSession):
        """Initialize codebase repository with session."""
        super().__init__(session, Codebase)

    async def branch_exists(self, codebase_name: str, branch_name: str) -> bool:
        """Check whether a codebase has a branch with the given name.

        Args:
            codebase_name: Codebase (application) name
            branch_name: Branch name

        Returns:
            True if the codebase and branch both exist
        """
        statement = (
            select(func.count())
            .select_from(CodebaseBranch)
            .join(Codebase, CodebaseBranch.codebase_id == Codebase.id)  # type: ignore[arg-type]
            .where(Codebase.name == codebase_name, CodebaseBranch.name == branch_name)
        )
        result = await self._execute(statement, f"branch lookup for {codebase_name}/{branch_name}")
        return (result.scalar() or 0) > 0
