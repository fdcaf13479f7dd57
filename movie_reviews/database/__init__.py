"""
Database module for the movie reviews API.

This module provides database models, async connection management, and the
repositories used by the application services.
"""

from movie_reviews.database.models import Base, Movie, Review
from movie_reviews.database.connection import DatabaseManager, get_db_manager, close_db_manager
from movie_reviews.database.init_db import init_database, verify_schema
from movie_reviews.database.repositories import MovieRepository, ReviewRepository

__all__ = [
    # Models
    'Base',
    'Movie',
    'Review',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    'close_db_manager',
    # Initialization
    'init_database',
    'verify_schema',
    # Repositories
    'MovieRepository',
    'ReviewRepository',
]
