"""
API route handlers.
"""

from movie_reviews.api.routers import movies, reviews, system

__all__ = ["movies", "reviews", "system"]
