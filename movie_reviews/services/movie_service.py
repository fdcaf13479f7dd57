"""
Movie application service.

Normalizes input, enforces the query rules that field validation cannot
express, and maps entities to API schemas.
"""

import logging
import math
from datetime import datetime, timezone
from typing import List, Optional

from movie_reviews.api.models import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    MovieWithReviewsResponse,
)
from movie_reviews.database.repositories import MovieRepository
from movie_reviews.exceptions import InvalidRequestError
from movie_reviews.services import mappers

logger = logging.getLogger(__name__)

# The first surviving motion picture dates from 1888
EARLIEST_RELEASE_YEAR = 1888


def latest_release_year() -> int:
    """Latest accepted release year: next calendar year (UTC)."""
    return datetime.now(timezone.utc).year + 1


class MovieService:
    def __init__(self, movie_repo: MovieRepository):
        self.movie_repo = movie_repo

    # --- Movie management ---

    async def get_all(self) -> List[MovieResponse]:
        movies = await self.movie_repo.get_all()
        return [mappers.movie_to_response(m) for m in movies]

    async def get_by_id(self, movie_id: int) -> Optional[MovieResponse]:
        movie = await self.movie_repo.get_by_id(movie_id)
        return mappers.movie_to_response(movie) if movie else None

    async def create(self, dto: MovieCreate) -> MovieResponse:
        movie = mappers.movie_create_to_entity(dto)
        await self.movie_repo.add(movie)
        logger.info("Created movie %s (%s)", movie.id, movie.title)
        return mappers.movie_to_response(movie)

    async def update(self, movie_id: int, dto: MovieUpdate) -> Optional[MovieResponse]:
        """
        Replace a movie's fields.

        Returns:
            Updated movie, or None if no movie has this id

        Raises:
            InvalidRequestError: If movie_id differs from dto.id
        """
        if movie_id != dto.id:
            raise InvalidRequestError(
                f"Route id {movie_id} does not match body id {dto.id}.", field="id"
            )

        movie = await self.movie_repo.get_by_id(movie_id)
        if movie is None:
            return None

        mappers.apply_movie_update(movie, dto)
        updated = await self.movie_repo.update(movie)
        logger.info("Updated movie %s", movie_id)
        return mappers.movie_to_response(updated)

    async def delete(self, movie_id: int) -> bool:
        movie = await self.movie_repo.get_by_id(movie_id)
        if movie is None:
            return False
        await self.movie_repo.delete(movie)
        logger.info("Deleted movie %s with %d review(s)", movie_id, len(movie.reviews))
        return True

    # --- Movies with reviews ---

    async def get_movies_with_reviews(self) -> List[MovieWithReviewsResponse]:
        movies = await self.movie_repo.get_with_reviews()
        return [mappers.movie_to_with_reviews_response(m) for m in movies]

    async def get_movie_with_reviews_by_id(self, movie_id: int) -> Optional[MovieWithReviewsResponse]:
        movie = await self.movie_repo.get_by_id(movie_id)
        return mappers.movie_to_with_reviews_response(movie) if movie else None

    # --- Queries ---

    async def get_by_director(self, director: str) -> List[MovieResponse]:
        """Movies by exact director name; a blank name yields no movies."""
        normalized = (director or "").strip()
        if not normalized:
            return []
        movies = await self.movie_repo.get_by_director(normalized)
        return [mappers.movie_to_response(m) for m in movies]

    async def get_by_genre(self, genre: str) -> List[MovieResponse]:
        """
        Movies by exact genre.

        Raises:
            InvalidRequestError: If genre is blank
        """
        normalized = (genre or "").strip()
        if not normalized:
            raise InvalidRequestError("Genre cannot be null or empty.", field="genre")
        movies = await self.movie_repo.get_by_genre(normalized)
        return [mappers.movie_to_response(m) for m in movies]

    async def get_by_release_year(self, year: int) -> List[MovieResponse]:
        """
        Movies released in a given year.

        Raises:
            InvalidRequestError: If year is before 1888 or after next year
        """
        latest = latest_release_year()
        if year < EARLIEST_RELEASE_YEAR or year > latest:
            raise InvalidRequestError(
                f"Release year must be between {EARLIEST_RELEASE_YEAR} and {latest}.",
                field="year",
            )
        movies = await self.movie_repo.get_by_release_year(year)
        return [mappers.movie_to_response(m) for m in movies]

    async def get_by_year_range(self, start_year: int, end_year: int) -> List[MovieResponse]:
        """
        Movies released within [start_year, end_year].

        Raises:
            InvalidRequestError: If start_year is greater than end_year
        """
        if start_year > end_year:
            raise InvalidRequestError(
                "start_year must be less than or equal to end_year.", field="start_year"
            )
        movies = await self.movie_repo.get_by_year_range(start_year, end_year)
        return [mappers.movie_to_response(m) for m in movies]

    async def search_by_title(self, search_term: str) -> List[MovieResponse]:
        normalized = (search_term or "").strip()
        if not normalized:
            return []
        movies = await self.movie_repo.search_by_title(normalized)
        return [mappers.movie_to_response(m) for m in movies]

    async def get_top_rated(self, count: int) -> List[MovieResponse]:
        movies = await self.movie_repo.get_top_rated(count)
        return [mappers.movie_to_response(m) for m in movies]

    async def get_by_min_rating(self, min_rating: float) -> List[MovieResponse]:
        """
        Reviewed movies whose average rating is at least min_rating.

        Raises:
            InvalidRequestError: If min_rating is outside 0..10
        """
        if math.isnan(min_rating) or min_rating < 0 or min_rating > 10:
            raise InvalidRequestError(
                "Minimum rating must be between 0 and 10.", field="min_rating"
            )
        movies = await self.movie_repo.get_by_min_rating(min_rating)
        return [mappers.movie_to_response(m) for m in movies]

    # --- Genres ---

    async def get_all_genres(self) -> List[str]:
        return await self.movie_repo.get_all_genres()

    async def count_by_genre(self, genre: str) -> int:
        normalized = (genre or "").strip()
        if not normalized:
            return 0
        return await self.movie_repo.count_by_genre(normalized)
