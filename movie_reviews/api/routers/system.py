"""
System API endpoints (health).
"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_reviews import __version__
from movie_reviews.api.dependencies import get_db
from movie_reviews.database.models import Movie, Review

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    """Health check: database reachable, plus row counts."""
    try:
        movie_count = (await db.execute(select(func.count(Movie.id)))).scalar_one()
        review_count = (await db.execute(select(func.count(Review.id)))).scalar_one()
    except SQLAlchemyError as e:
        logger.error("Health check failed: %s", e)
        return {"status": "unhealthy", "database": str(e), "version": __version__}
    return {
        "status": "healthy",
        "database": "connected",
        "movies": movie_count,
        "reviews": review_count,
        "version": __version__,
    }
