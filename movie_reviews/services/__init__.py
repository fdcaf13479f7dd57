"""
Application services: input rules, orchestration and entity mapping.
"""

from movie_reviews.services.movie_service import MovieService
from movie_reviews.services.review_service import ReviewService

__all__ = ['MovieService', 'ReviewService']
