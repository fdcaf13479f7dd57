"""
FastAPI dependency injection for database sessions and services.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from movie_reviews.api.config import get_database_url, get_sql_echo
from movie_reviews.database.connection import get_db_manager
from movie_reviews.database.repositories import MovieRepository, ReviewRepository
from movie_reviews.services import MovieService, ReviewService


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Yield one database session per request."""
    db_manager = get_db_manager(database_url=get_database_url(), echo=get_sql_echo())
    async with db_manager.session_scope() as session:
        yield session


def get_movie_repository(db: AsyncSession = Depends(get_db)) -> MovieRepository:
    return MovieRepository(db)


def get_review_repository(db: AsyncSession = Depends(get_db)) -> ReviewRepository:
    return ReviewRepository(db)


def get_movie_service(
    movie_repo: MovieRepository = Depends(get_movie_repository),
) -> MovieService:
    return MovieService(movie_repo)


def get_review_service(
    review_repo: ReviewRepository = Depends(get_review_repository),
    movie_repo: MovieRepository = Depends(get_movie_repository),
) -> ReviewService:
    return ReviewService(review_repo, movie_repo)
