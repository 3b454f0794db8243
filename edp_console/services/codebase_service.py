"""Service layer for codebase reference checks."""

from collections.abc import Iterable

from edp_console.exceptions import InvalidReferenceError
from edp_console.models import ApplicationWithBranch
from edp_console.repositories.codebase_repository import CodebaseRepository
from edp_console.utils.logger import logger


class CodebaseService:
    """Service for codebase-related business logic."""

    def __init__(self, codebase_repo: CodebaseRepository):
        """Initialize codebase service with repository.

        Args:
            codebase_repo: Codebase repository instance
        """
        self.codebase_repo = codebase_repo

    async def ensure_branches_exist(self, applications: Iterable[ApplicationWithBranch]) -> None:
        """Check that every application has the referenced branch.

        Args:
            applications: Application and branch pairs, checked in order

        Raises:
            InvalidReferenceError: On the first pair that does not resolve
        """
        for application in applications:
            if not await self.codebase_repo.branch_exists(
                application.app_name, application.branch_name
            ):
                logger.info(
                    f"Branch {application.branch_name} of {application.app_name} doesn't exist"
                )
                raise InvalidReferenceError(application.app_name, application.branch_name)
