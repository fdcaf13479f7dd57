"""
Mapping between ORM entities and API schemas.

Mappers are plain functions: they copy fields and compute the average
rating, nothing else. Update mappers merge the request into the loaded
entity so that relations (a movie's reviews, a review's movie) survive a
full-replace update.
"""

from typing import Iterable

from movie_reviews.api.models import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    MovieWithReviewsResponse,
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewWithMovieResponse,
)
from movie_reviews.database.models import Movie, Review


def calculate_average_rating(reviews: Iterable[Review]) -> float:
    """
    Arithmetic mean of review ratings.

    Args:
        reviews: Reviews of a single movie

    Returns:
        Mean rating, or 0.0 when there are no reviews
    """
    ratings = [review.rating for review in reviews]
    if not ratings:
        return 0.0
    return sum(ratings) / len(ratings)


# ==================== MOVIE MAPPERS ====================

def movie_to_response(movie: Movie) -> MovieResponse:
    """Map a Movie (reviews loaded) to MovieResponse."""
    return MovieResponse(
        id=movie.id,
        title=movie.title,
        director=movie.director,
        release_year=movie.release_year,
        genre=movie.genre,
        average_rating=calculate_average_rating(movie.reviews),
    )


def movie_to_with_reviews_response(movie: Movie) -> MovieWithReviewsResponse:
    """Map a Movie (reviews loaded) to MovieWithReviewsResponse."""
    return MovieWithReviewsResponse(
        id=movie.id,
        title=movie.title,
        director=movie.director,
        release_year=movie.release_year,
        genre=movie.genre,
        average_rating=calculate_average_rating(movie.reviews),
        reviews=[review_to_response(review) for review in movie.reviews],
    )


def movie_create_to_entity(dto: MovieCreate) -> Movie:
    """Build a new Movie from a create request."""
    return Movie(
        title=dto.title,
        director=dto.director,
        release_year=dto.release_year,
        genre=dto.genre,
        reviews=[],
    )


def apply_movie_update(movie: Movie, dto: MovieUpdate) -> Movie:
    """
    Overwrite the scalar fields of a loaded movie from an update request.

    The movie keeps its id and its reviews.
    """
    movie.title = dto.title
    movie.director = dto.director
    movie.release_year = dto.release_year
    movie.genre = dto.genre
    return movie


# ==================== REVIEW MAPPERS ====================

def review_to_response(review: Review) -> ReviewResponse:
    """Map a Review to ReviewResponse."""
    return ReviewResponse(
        id=review.id,
        movie_id=review.movie_id,
        reviewer_name=review.reviewer_name,
        rating=review.rating,
        comment=review.comment or "",
    )


def review_to_with_movie_response(review: Review) -> ReviewWithMovieResponse:
    """
    Map a Review to ReviewWithMovieResponse.

    The movie relationship must already be loaded; a missing movie maps to
    an empty title.
    """
    movie = review.movie
    return ReviewWithMovieResponse(
        id=review.id,
        movie_id=review.movie_id,
        movie_title=movie.title if movie is not None else "",
        reviewer_name=review.reviewer_name,
        rating=review.rating,
        comment=review.comment or "",
    )


def review_create_to_entity(dto: ReviewCreate) -> Review:
    """Build a new Review from a create request."""
    return Review(
        movie_id=dto.movie_id,
        reviewer_name=dto.reviewer_name,
        rating=dto.rating,
        comment=dto.comment,
    )


def apply_review_update(review: Review, dto: ReviewUpdate) -> Review:
    """Overwrite reviewer, rating and comment; the movie is preserved."""
    review.reviewer_name = dto.reviewer_name
    review.rating = dto.rating
    review.comment = dto.comment
    return review
