"""
Database manager for the EDP admin console.

This module provides a centralized async database connection manager
that avoids global engine state.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlmodel import SQLModel

from ..settings import DatabaseDriver, Settings, settings
from ..utils.logger import logger


class DatabaseManager:
    """
    Manages database connections and sessions without global state.

    The engine and session factory are created lazily on first use.
    """

    def __init__(self, config: Settings = settings) -> None:
        """Initialize the database manager with empty connections."""
        self.config = config
        self._async_engine: AsyncEngine | None = None
        self._async_session_factory: async_sessionmaker[AsyncSession] | None = None

    def _get_async_database_url(self) -> str:
        """Convert database URL to async version."""
        driver = self.config.database_driver
        if driver == DatabaseDriver.SQLITE:
            return f"sqlite+aiosqlite:///{self.config.database_name}.db"
        if driver == DatabaseDriver.POSTGRESQL:
            return self.config.database_url.replace("postgresql+psycopg2", "postgresql+asyncpg")
        return self.config.database_url

    def _create_async_engine(self) -> AsyncEngine:
        """Create and configure the asynchronous database engine."""
        async_url = self._get_async_database_url()

        if self.config.database_driver == DatabaseDriver.SQLITE:
            engine = create_async_engine(
                async_url,
                connect_args={"check_same_thread": False},
                echo=self.config.debug,
            )
        else:
            engine = create_async_engine(
                async_url,
                echo=self.config.debug,
                pool_size=20,
                max_overflow=0,
            )

        logger.info(f"Async database engine created for {self.config.database_driver.value}")
        return engine

    @property
    def async_engine(self) -> AsyncEngine:
        """Get or create the asynchronous database engine."""
        if self._async_engine is None:
            self._async_engine = self._create_async_engine()
        return self._async_engine

    @property
    def async_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create the async session factory."""
        if self._async_session_factory is None:
            self._async_session_factory = async_sessionmaker(
                self.async_engine,
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._async_session_factory

    async def create_db_and_tables_async(self) -> None:
        """Create database tables asynchronously."""
        # Register every table on the metadata
        from .. import models  # noqa: F401

        logger.info("Creating database tables (async)...")
        async with self.async_engine.begin() as conn:
            await conn.run_sync(SQLModel.metadata.create_all)
        logger.info("Database tables created (async)")

    @asynccontextmanager
    async def get_async_session_context(self) -> AsyncGenerator[AsyncSession]:
        """
        Get an async database session as a context manager.

        Usage:
            async with db_manager.get_async_session_context() as session:
                result = await session.execute(select(CDPipeline))

        Yields:
            AsyncSession: SQLModel async session
        """
        async with self.async_session_factory() as session:
            try:
                yield session
                await session.commit()
            except SQLAlchemyError as e:
                logger.error(f"Database error: {e}")
                await session.rollback()
                raise

    async def get_async_session(self) -> AsyncGenerator[AsyncSession]:
        """
        Get an async database session for FastAPI dependency.

        Yields:
            AsyncSession: SQLModel async session
        """
        async with self.get_async_session_context() as session:
            yield session

    async def close(self) -> None:
        """Close all database connections."""
        if self._async_engine:
            await self._async_engine.dispose()
            self._async_engine = None
            self._async_session_factory = None
            logger.info("Async database engine disposed")

    def __repr__(self) -> str:
        return (
            f"<DatabaseManager("
            f"driver={self.config.database_driver.value}, "
            f"async_initialized={self._async_engine is not None}"
            f")>"
        )


# Create a singleton instance
db_manager = DatabaseManager()
