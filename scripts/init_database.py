#!/usr/bin/env python
"""
Database initialization script for the Movie Reviews API.

Creates the schema and, optionally, loads a small demo catalog.

Usage:
    # Create tables (keeps existing data)
    python scripts/init_database.py

    # Drop everything, recreate and load demo data
    python scripts/init_database.py --reset --seed
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import func, select

from movie_reviews.api.config import get_database_url
from movie_reviews.database import init_database, verify_schema
from movie_reviews.database.connection import close_db_manager
from movie_reviews.database.models import Movie, Review
from movie_reviews.utils.logging_config import get_logger, setup_logging

logger = get_logger("init_database")

DEMO_MOVIES = [
    {
        "title": "The Shawshank Redemption",
        "director": "Frank Darabont",
        "release_year": 1994,
        "genre": "Drama",
        "reviews": [("alice", 10, "Timeless."), ("bob", 9, "Great performances.")],
    },
    {
        "title": "Inception",
        "director": "Christopher Nolan",
        "release_year": 2010,
        "genre": "Sci-Fi",
        "reviews": [("alice", 8, "Clever plot."), ("carol", 6, "A bit long.")],
    },
    {
        "title": "Interstellar",
        "director": "Christopher Nolan",
        "release_year": 2014,
        "genre": "Sci-Fi",
        "reviews": [("bob", 9, "")],
    },
    {
        "title": "Spirited Away",
        "director": "Hayao Miyazaki",
        "release_year": 2001,
        "genre": "Animation",
        "reviews": [],
    },
]


def print_section(title):
    """Print a formatted section header."""
    print(f"\n{'='*60}")
    print(f"{title}")
    print('='*60)


async def seed_demo_data(db_manager) -> int:
    """
    Insert the demo catalog unless movies already exist.

    Returns:
        Number of movies inserted
    """
    async with db_manager.session_scope() as session:
        existing = (await session.execute(select(func.count(Movie.id)))).scalar_one()
        if existing:
            logger.info("Database already holds %d movie(s), skipping demo data", existing)
            return 0

        for item in DEMO_MOVIES:
            movie = Movie(
                title=item["title"],
                director=item["director"],
                release_year=item["release_year"],
                genre=item["genre"],
                reviews=[
                    Review(reviewer_name=name, rating=rating, comment=comment)
                    for name, rating, comment in item["reviews"]
                ],
            )
            session.add(movie)
    return len(DEMO_MOVIES)


async def run(database_url: str, reset: bool, seed: bool) -> bool:
    db_manager = await init_database(database_url=database_url, reset=reset)
    try:
        if not await verify_schema(db_manager):
            print("[ERROR] Schema verification failed")
            return False

        if seed:
            inserted = await seed_demo_data(db_manager)
            print(f"Demo movies inserted: {inserted}")

        async with db_manager.session_scope() as session:
            movie_count = (await session.execute(select(func.count(Movie.id)))).scalar_one()
            review_count = (await session.execute(select(func.count(Review.id)))).scalar_one()
        print(f"Movies:  {movie_count}")
        print(f"Reviews: {review_count}")
        return True
    finally:
        await close_db_manager()


def main():
    """Main entry point for database initialization."""
    parser = argparse.ArgumentParser(description="Initialize the Movie Reviews database")
    parser.add_argument(
        '--reset',
        action='store_true',
        help='Drop and recreate database tables (WARNING: deletes all data)'
    )
    parser.add_argument(
        '--seed',
        action='store_true',
        help='Load demo movies and reviews into an empty database'
    )
    parser.add_argument(
        '--database-url',
        type=str,
        default=None,
        help='Async SQLAlchemy URL (default: DATABASE_URL or data/movie_reviews.db)'
    )
    parser.add_argument(
        '--quiet',
        action='store_true',
        help='Only log warnings and errors'
    )
    args = parser.parse_args()

    setup_logging(level="WARNING" if args.quiet else "INFO")
    database_url = args.database_url or get_database_url()

    print_section("Movie Reviews Database Initialization")
    print(f"Mode: {'Reset' if args.reset else 'Keep existing'}")

    try:
        success = asyncio.run(run(database_url, args.reset, args.seed))
    except Exception as e:
        logger.exception("Database initialization failed: %s", e)
        sys.exit(1)

    if not success:
        sys.exit(1)
    print("\n[SUCCESS] Database ready")


if __name__ == "__main__":
    main()
