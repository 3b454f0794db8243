"""Base repository wrapping query execution errors."""

from typing import Any, Generic, TypeVar

from sqlalchemy import Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from edp_console.exceptions import DatabaseError
from edp_console.utils.logger import logger

ModelT = TypeVar("ModelT", bound=SQLModel)


class BaseRepository(Generic[ModelT]):
    """Base repository executing read model queries for one model."""

    def __init__(self, session: AsyncSession, model_class: type[ModelT]):
        """Initialize repository with session and model class.

        Args:
            session: Database session
            model_class: SQLModel class this repository operates on
        """
        self.session = session
        self.model_class = model_class

    async def _execute(self, statement: Any, operation: str) -> Result[Any]:
        """Execute a statement, wrapping driver errors.

        Args:
            statement: SQLAlchemy statement
            operation: Description of the query used in the error message

        Returns:
            Query result

        Raises:
            DatabaseError: If the query fails
        """
        try:
            return await self.session.execute(statement)
        except SQLAlchemyError as e:
            message = f"{self.model_class.__name__} {operation} failed: {e}"
            logger.error(message)
            raise DatabaseError(message) from e
