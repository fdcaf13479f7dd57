"""
Pydantic schemas for API request/response validation.
"""

from movie_reviews.api.models.movie import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    MovieWithReviewsResponse,
)
from movie_reviews.api.models.review import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewWithMovieResponse,
)
from movie_reviews.api.models.problem import ProblemDetails, BAD_REQUEST, NOT_FOUND

__all__ = [
    "MovieCreate",
    "MovieUpdate",
    "MovieResponse",
    "MovieWithReviewsResponse",
    "ReviewCreate",
    "ReviewUpdate",
    "ReviewResponse",
    "ReviewWithMovieResponse",
    "ProblemDetails",
    "BAD_REQUEST",
    "NOT_FOUND",
]
