"""
Database initialization and schema creation.

This module provides functions to initialize the database schema and
check that it is in place.
"""

import logging

from sqlalchemy import inspect

from movie_reviews.database.connection import (
    DEFAULT_DATABASE_URL, DatabaseManager, get_db_manager
)
from movie_reviews.database.models import Base

logger = logging.getLogger(__name__)


async def init_database(database_url: str = DEFAULT_DATABASE_URL, reset: bool = False) -> DatabaseManager:
    """
    Initialize the database and create all tables.

    Args:
        database_url: SQLAlchemy async database URL
        reset: If True, drop existing tables before creating new ones

    Returns:
        DatabaseManager instance
    """
    db_manager = get_db_manager(database_url=database_url)

    if reset:
        logger.warning("Resetting database (dropping all tables)...")
        await db_manager.reset_database()
        logger.info("Database reset complete.")
    else:
        await db_manager.create_tables()
        logger.info("Database tables created.")

    return db_manager


async def verify_schema(db_manager: DatabaseManager) -> bool:
    """
    Verify that all tables exist in the database.

    Args:
        db_manager: DatabaseManager instance

    Returns:
        True if all tables exist, False otherwise
    """
    async with db_manager.engine.connect() as conn:
        existing_tables = set(
            await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        )

    expected_tables = set(Base.metadata.tables)
    missing_tables = expected_tables - existing_tables

    if missing_tables:
        logger.error("Missing tables: %s", sorted(missing_tables))
        return False

    logger.info("All tables exist: %s", sorted(existing_tables))
    return True
