"""
Review application service.
"""

import logging
from typing import List, Optional

from movie_reviews.api.models import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewWithMovieResponse,
)
from movie_reviews.database.repositories import MovieRepository, ReviewRepository
from movie_reviews.exceptions import InvalidRequestError, NotFoundError
from movie_reviews.services import mappers

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 10


def _require_positive_movie_id(movie_id: int) -> None:
    if movie_id <= 0:
        raise InvalidRequestError("Movie ID must be a positive integer.", field="movie_id")


class ReviewService:
    def __init__(self, review_repo: ReviewRepository, movie_repo: MovieRepository):
        self.review_repo = review_repo
        self.movie_repo = movie_repo

    # --- Review management ---

    async def get_all(self) -> List[ReviewResponse]:
        reviews = await self.review_repo.get_all()
        return [mappers.review_to_response(r) for r in reviews]

    async def get_by_id(self, review_id: int) -> Optional[ReviewResponse]:
        review = await self.review_repo.get_by_id(review_id)
        return mappers.review_to_response(review) if review else None

    async def get_with_movie_by_id(self, review_id: int) -> Optional[ReviewWithMovieResponse]:
        review = await self.review_repo.get_by_id(review_id)
        return mappers.review_to_with_movie_response(review) if review else None

    async def create(self, dto: ReviewCreate) -> ReviewResponse:
        """
        Add a review to an existing movie.

        Raises:
            NotFoundError: If dto.movie_id does not reference a movie
        """
        if await self.movie_repo.get_by_id(dto.movie_id) is None:
            raise NotFoundError("Movie", dto.movie_id)

        review = mappers.review_create_to_entity(dto)
        await self.review_repo.add(review)
        logger.info("Created review %s for movie %s", review.id, review.movie_id)
        return mappers.review_to_response(review)

    async def update(self, review_id: int, dto: ReviewUpdate) -> Optional[ReviewResponse]:
        """
        Replace a review's reviewer, rating and comment.

        Returns:
            Updated review, or None if no review has this id

        Raises:
            InvalidRequestError: If review_id differs from dto.id
        """
        if review_id != dto.id:
            raise InvalidRequestError(
                f"Route id {review_id} does not match body id {dto.id}.", field="id"
            )

        review = await self.review_repo.get_by_id(review_id)
        if review is None:
            return None

        mappers.apply_review_update(review, dto)
        updated = await self.review_repo.update(review)
        logger.info("Updated review %s", review_id)
        return mappers.review_to_response(updated)

    async def delete(self, review_id: int) -> bool:
        review = await self.review_repo.get_by_id(review_id)
        if review is None:
            return False
        await self.review_repo.delete(review)
        logger.info("Deleted review %s", review_id)
        return True

    # --- Queries ---

    async def get_by_movie_id(self, movie_id: int) -> List[ReviewResponse]:
        _require_positive_movie_id(movie_id)
        reviews = await self.review_repo.get_by_movie_id(movie_id)
        return [mappers.review_to_response(r) for r in reviews]

    async def get_by_reviewer(self, reviewer_name: str) -> List[ReviewResponse]:
        normalized = (reviewer_name or "").strip()
        if not normalized:
            return []
        reviews = await self.review_repo.get_by_reviewer_name(normalized)
        return [mappers.review_to_response(r) for r in reviews]

    async def get_by_minimum_rating(self, min_rating: int) -> List[ReviewResponse]:
        """
        Reviews rated min_rating or higher.

        Raises:
            InvalidRequestError: If min_rating is outside 1..10
        """
        if min_rating < MIN_RATING or min_rating > MAX_RATING:
            raise InvalidRequestError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}.", field="min_rating"
            )
        reviews = await self.review_repo.get_by_rating_range(min_rating, MAX_RATING)
        return [mappers.review_to_response(r) for r in reviews]

    async def get_average_rating_by_movie_id(self, movie_id: int) -> float:
        _require_positive_movie_id(movie_id)
        reviews = await self.review_repo.get_by_movie_id(movie_id)
        return mappers.calculate_average_rating(reviews)

    async def count_by_movie_id(self, movie_id: int) -> int:
        _require_positive_movie_id(movie_id)
        return await self.review_repo.count_by_movie_id(movie_id)
