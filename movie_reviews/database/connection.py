"""
Database connection management using SQLAlchemy's asyncio extension.

This module handles async engine creation, session management,
and provides utilities for database operations.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
)
from sqlalchemy.pool import StaticPool

from movie_reviews.database.models import Base

logger = logging.getLogger(__name__)


# Default database URL
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///data/movie_reviews.db"


def _set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Enable foreign key constraints for SQLite.

    SQLite disables foreign key constraints by default, so the
    ON DELETE CASCADE on reviews.movie_id would be ignored without this.
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for_url(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    Args:
        database_url: SQLAlchemy async URL (e.g. sqlite+aiosqlite:///path.db)
        echo: If True, log all SQL statements

    Returns:
        AsyncEngine instance
    """
    url = make_url(database_url)

    if url.get_backend_name() != "sqlite":
        return create_async_engine(url, echo=echo)

    database = url.database or ""
    if database and database != ":memory:":
        db_dir = os.path.dirname(database)
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)
        engine = create_async_engine(url, echo=echo)
    else:
        # In-memory databases only live as long as their single connection
        engine = create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        )

    event.listen(engine.sync_engine, "connect", _set_sqlite_pragma)
    return engine


class DatabaseManager:
    """
    Database connection manager.

    Handles engine creation, session management, and database initialization.
    """

    def __init__(self, database_url: str = DEFAULT_DATABASE_URL, echo: bool = False):
        """
        Initialize database manager.

        Args:
            database_url: SQLAlchemy async database URL
            echo: If True, log all SQL statements (useful for debugging)
        """
        self.database_url = database_url
        self.engine = create_engine_for_url(database_url, echo=echo)

        # Objects stay usable after commit; lazy refresh is not possible
        # outside the greenlet the session runs in.
        self.SessionLocal = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            autoflush=False,
            expire_on_commit=False
        )

    async def create_tables(self):
        """
        Create all tables defined in the models.

        This creates tables if they don't exist. Existing tables are not modified.
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self):
        """
        Drop all tables defined in the models.

        WARNING: This will delete all data in the database!
        """
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def reset_database(self):
        """
        Drop and recreate all tables.

        WARNING: This will delete all data in the database!
        """
        await self.drop_tables()
        await self.create_tables()

    @asynccontextmanager
    async def session_scope(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions.

        Automatically commits on success and rolls back on failure,
        including when the awaiting task is cancelled.

        Usage:
            async with db_manager.session_scope() as session:
                session.add(movie)

        Yields:
            AsyncSession object
        """
        session = self.SessionLocal()
        try:
            yield session
            await session.commit()
        except BaseException:
            await session.rollback()
            raise
        finally:
            await session.close()

    async def close(self):
        """Close the database engine and all connections."""
        await self.engine.dispose()


# Global database manager instance (singleton pattern)
_db_manager = None


def get_db_manager(database_url: str = DEFAULT_DATABASE_URL, echo: bool = False) -> DatabaseManager:
    """
    Get or create the global database manager instance.

    Args:
        database_url: SQLAlchemy async database URL
        echo: If True, log all SQL statements

    Returns:
        DatabaseManager instance
    """
    global _db_manager
    if _db_manager is None:
        logger.info("Creating database engine for %s", make_url(database_url).render_as_string(hide_password=True))
        _db_manager = DatabaseManager(database_url=database_url, echo=echo)
    return _db_manager


async def close_db_manager():
    """Dispose the global database manager, if one was created."""
    global _db_manager
    if _db_manager is not None:
        await _db_manager.close()
        _db_manager = None
