"""
Repositories for Movie and Review models.

Each repository wraps an AsyncSession and exposes the queries the services
need. Every write commits its own transaction.
"""

from typing import List, Optional
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from movie_reviews.database.models import Movie, Review
from movie_reviews.exceptions import NotFoundError

# Integer columns hold signed 64-bit values; no stored row has an id outside
MIN_INTEGER = -(2 ** 63)
MAX_INTEGER = 2 ** 63 - 1


def _storable(value: int) -> bool:
    return MIN_INTEGER <= value <= MAX_INTEGER


def _clamp(value: int) -> int:
    return max(MIN_INTEGER, min(value, MAX_INTEGER))


# ==================== MOVIE REPOSITORY ====================

class MovieRepository:
    """Data access for movies. Returned movies always have reviews loaded."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select(self):
        # populate_existing keeps collections loaded earlier in the session current
        return (
            select(Movie)
            .options(selectinload(Movie.reviews))
            .execution_options(populate_existing=True)
        )

    async def _fetch_all(self, stmt) -> List[Movie]:
        result = await self.session.execute(stmt)
        return list(result.scalars().unique().all())

    async def get_all(self) -> List[Movie]:
        """
        Get every movie, ordered by id.

        Returns:
            List of Movie objects
        """
        return await self._fetch_all(self._select().order_by(Movie.id))

    async def get_by_id(self, movie_id: int) -> Optional[Movie]:
        """
        Get a movie by ID.

        Args:
            movie_id: Movie ID

        Returns:
            Movie object or None if not found
        """
        if not _storable(movie_id):
            return None
        result = await self.session.execute(self._select().where(Movie.id == movie_id))
        return result.scalars().first()

    async def add(self, movie: Movie) -> Movie:
        """
        Persist a new movie.

        Args:
            movie: Transient Movie object

        Returns:
            The same Movie, with its generated id populated
        """
        self.session.add(movie)
        await self.session.commit()
        return movie

    async def update(self, movie: Movie) -> Movie:
        """
        Save changes made to a movie loaded from this session.

        Args:
            movie: Movie object with updated fields

        Returns:
            Updated Movie object

        Raises:
            NotFoundError: If the movie no longer exists
        """
        existing = await self.session.get(Movie, movie.id) if _storable(movie.id) else None
        if existing is None:
            raise NotFoundError("Movie", movie.id)
        if existing is not movie:
            existing.title = movie.title
            existing.director = movie.director
            existing.release_year = movie.release_year
            existing.genre = movie.genre
        await self.session.commit()
        return existing

    async def delete(self, movie: Movie) -> None:
        """
        Delete a movie together with all of its reviews.

        Args:
            movie: Movie object to delete

        Raises:
            NotFoundError: If the movie no longer exists
        """
        existing = await self.get_by_id(movie.id)
        if existing is None:
            raise NotFoundError("Movie", movie.id)
        await self.session.delete(existing)
        await self.session.commit()

    async def get_with_reviews(self) -> List[Movie]:
        """
        Get movies that have at least one review.

        Returns:
            List of Movie objects
        """
        stmt = self._select().where(Movie.reviews.any()).order_by(Movie.id)
        return await self._fetch_all(stmt)

    async def get_by_director(self, director: str) -> List[Movie]:
        """
        Get movies by exact director name.

        Args:
            director: Director name; surrounding whitespace is ignored

        Returns:
            List of Movie objects (empty for a blank name)
        """
        if not director or not director.strip():
            return []
        stmt = self._select().where(Movie.director == director.strip()).order_by(Movie.id)
        return await self._fetch_all(stmt)

    async def get_by_genre(self, genre: str) -> List[Movie]:
        """
        Get movies by exact genre.

        Args:
            genre: Genre label

        Returns:
            List of Movie objects (empty for a blank genre)
        """
        if not genre or not genre.strip():
            return []
        stmt = self._select().where(Movie.genre == genre).order_by(Movie.id)
        return await self._fetch_all(stmt)

    async def get_by_release_year(self, year: int) -> List[Movie]:
        """
        Get movies released in a specific year.

        Args:
            year: Release year

        Returns:
            List of Movie objects
        """
        if not _storable(year):
            return []
        stmt = self._select().where(Movie.release_year == year).order_by(Movie.id)
        return await self._fetch_all(stmt)

    async def get_by_year_range(self, start_year: int, end_year: int) -> List[Movie]:
        """
        Get movies released between two years, inclusive.

        Args:
            start_year: First year of the range
            end_year: Last year of the range

        Returns:
            List of Movie objects ordered by release year

        Raises:
            ValueError: If start_year is greater than end_year
        """
        if start_year > end_year:
            raise ValueError("start_year must be less than or equal to end_year")
        stmt = (
            self._select()
            .where(Movie.release_year >= _clamp(start_year), Movie.release_year <= _clamp(end_year))
            .order_by(Movie.release_year, Movie.id)
        )
        return await self._fetch_all(stmt)

    async def search_by_title(self, search_term: str) -> List[Movie]:
        """
        Search movies whose title contains a term (case-insensitive).

        Args:
            search_term: Text to look for in titles

        Returns:
            List of Movie objects (empty for a blank term)
        """
        if not search_term or not search_term.strip():
            return []
        stmt = self._select().where(Movie.title.ilike(f"%{search_term}%")).order_by(Movie.id)
        return await self._fetch_all(stmt)

    async def get_top_rated(self, count: int) -> List[Movie]:
        """
        Get reviewed movies ordered by average rating, highest first.

        Args:
            count: Maximum number of movies to return

        Returns:
            List of Movie objects (empty when count <= 0)
        """
        if count <= 0:
            return []
        average = func.avg(Review.rating)
        stmt = (
            self._select()
            .join(Movie.reviews)
            .group_by(Movie.id)
            .order_by(average.desc(), Movie.id)
            .limit(_clamp(count))
        )
        return await self._fetch_all(stmt)

    async def get_by_min_rating(self, min_rating: float) -> List[Movie]:
        """
        Get reviewed movies whose average rating is at least min_rating.

        Args:
            min_rating: Inclusive average-rating threshold

        Returns:
            List of Movie objects
        """
        stmt = (
            self._select()
            .join(Movie.reviews)
            .group_by(Movie.id)
            .having(func.avg(Review.rating) >= min_rating)
            .order_by(Movie.id)
        )
        return await self._fetch_all(stmt)

    async def get_all_genres(self) -> List[str]:
        """
        Get the distinct, non-empty genres in the catalog.

        Returns:
            Sorted list of genre names
        """
        stmt = (
            select(Movie.genre)
            .where(Movie.genre != "")
            .distinct()
            .order_by(Movie.genre)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_genre(self, genre: str) -> int:
        """
        Count movies in a genre.

        Args:
            genre: Genre label

        Returns:
            Number of movies (0 for a blank genre)
        """
        if not genre or not genre.strip():
            return 0
        result = await self.session.execute(
            select(func.count(Movie.id)).where(Movie.genre == genre)
        )
        return result.scalar_one()


# ==================== REVIEW REPOSITORY ====================

class ReviewRepository:
    """Data access for reviews. Returned reviews have their movie loaded."""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _select(self):
        return (
            select(Review)
            .options(selectinload(Review.movie))
            .execution_options(populate_existing=True)
        )

    async def _fetch_all(self, stmt) -> List[Review]:
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_all(self) -> List[Review]:
        """Get every review, ordered by id."""
        return await self._fetch_all(self._select().order_by(Review.id))

    async def get_by_id(self, review_id: int) -> Optional[Review]:
        """
        Get a review by ID.

        Args:
            review_id: Review ID

        Returns:
            Review object or None if not found
        """
        if not _storable(review_id):
            return None
        result = await self.session.execute(self._select().where(Review.id == review_id))
        return result.scalars().first()

    async def add(self, review: Review) -> Review:
        """
        Persist a new review and return it with its generated id.

        Raises:
            NotFoundError: If the movie is gone by the time the row is written
        """
        self.session.add(review)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            if await self.session.get(Movie, review.movie_id) is None:
                raise NotFoundError("Movie", review.movie_id)
            raise
        return review

    async def update(self, review: Review) -> Review:
        """
        Save changes made to a review.

        Raises:
            NotFoundError: If the review no longer exists
        """
        existing = await self.session.get(Review, review.id) if _storable(review.id) else None
        if existing is None:
            raise NotFoundError("Review", review.id)
        if existing is not review:
            existing.reviewer_name = review.reviewer_name
            existing.rating = review.rating
            existing.comment = review.comment
        await self.session.commit()
        return existing

    async def delete(self, review: Review) -> None:
        """
        Delete a review.

        Raises:
            NotFoundError: If the review no longer exists
        """
        existing = await self.session.get(Review, review.id) if _storable(review.id) else None
        if existing is None:
            raise NotFoundError("Review", review.id)
        await self.session.delete(existing)
        await self.session.commit()

    async def get_by_movie_id(self, movie_id: int) -> List[Review]:
        """
        Get all reviews for a specific movie.

        Args:
            movie_id: Movie ID

        Returns:
            List of Review objects
        """
        if not _storable(movie_id):
            return []
        stmt = self._select().where(Review.movie_id == movie_id).order_by(Review.id)
        return await self._fetch_all(stmt)

    async def get_by_rating_range(self, min_rating: int, max_rating: int) -> List[Review]:
        """
        Get reviews whose rating lies in [min_rating, max_rating].

        Returns:
            List of Review objects
        """
        stmt = (
            self._select()
            .where(Review.rating >= min_rating, Review.rating <= max_rating)
            .order_by(Review.id)
        )
        return await self._fetch_all(stmt)

    async def get_by_reviewer_name(self, reviewer_name: str) -> List[Review]:
        """Get reviews written by a reviewer (exact name match)."""
        stmt = self._select().where(Review.reviewer_name == reviewer_name).order_by(Review.id)
        return await self._fetch_all(stmt)

    async def count_by_movie_id(self, movie_id: int) -> int:
        """Count reviews for a movie."""
        if not _storable(movie_id):
            return 0
        result = await self.session.execute(
            select(func.count(Review.id)).where(Review.movie_id == movie_id)
        )
        return result.scalar_one()

