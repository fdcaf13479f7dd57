"""
Movie API endpoints.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from movie_reviews.api.dependencies import get_movie_service
from movie_reviews.api.models import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    MovieWithReviewsResponse,
    BAD_REQUEST,
    NOT_FOUND,
)
from movie_reviews.exceptions import NotFoundError
from movie_reviews.services import MovieService

router = APIRouter(prefix="/movies", tags=["movies"])


@router.get("", response_model=list[MovieResponse])
async def list_movies(service: MovieService = Depends(get_movie_service)):
    """List all movies with their average ratings."""
    return await service.get_all()


@router.post(
    "",
    response_model=MovieResponse,
    status_code=status.HTTP_201_CREATED,
    responses=BAD_REQUEST,
)
async def create_movie(
    movie_in: MovieCreate,
    request: Request,
    response: Response,
    service: MovieService = Depends(get_movie_service),
):
    """Create a new movie."""
    movie = await service.create(movie_in)
    response.headers["Location"] = str(request.url_for("get_movie", movie_id=movie.id))
    return movie


# Fixed paths are registered before /{movie_id} so they are matched first.

@router.get("/with-reviews", response_model=list[MovieWithReviewsResponse])
async def list_movies_with_reviews(service: MovieService = Depends(get_movie_service)):
    """List movies that have at least one review, including the reviews."""
    return await service.get_movies_with_reviews()


@router.get(
    "/with-reviews/{movie_id}",
    response_model=MovieWithReviewsResponse,
    responses=NOT_FOUND,
)
async def get_movie_with_reviews(movie_id: int, service: MovieService = Depends(get_movie_service)):
    """Get a movie and its reviews."""
    movie = await service.get_movie_with_reviews_by_id(movie_id)
    if movie is None:
        raise NotFoundError("Movie", movie_id)
    return movie


@router.get("/genres", response_model=list[str])
async def list_genres(service: MovieService = Depends(get_movie_service)):
    """List distinct genres."""
    return await service.get_all_genres()


@router.get("/count-by-genre/{genre}", response_model=int)
async def count_movies_by_genre(genre: str, service: MovieService = Depends(get_movie_service)):
    """Count movies in a genre (0 for a blank genre)."""
    return await service.count_by_genre(genre)


@router.get("/by-director/{director}", response_model=list[MovieResponse])
async def get_movies_by_director(director: str, service: MovieService = Depends(get_movie_service)):
    """Movies by director (exact name)."""
    return await service.get_by_director(director)


@router.get("/by-genre/{genre}", response_model=list[MovieResponse], responses=BAD_REQUEST)
async def get_movies_by_genre(genre: str, service: MovieService = Depends(get_movie_service)):
    """Movies in a genre (exact match)."""
    return await service.get_by_genre(genre)


@router.get("/by-release-year/{year}", response_model=list[MovieResponse], responses=BAD_REQUEST)
async def get_movies_by_release_year(year: int, service: MovieService = Depends(get_movie_service)):
    """Movies released in a year."""
    return await service.get_by_release_year(year)


@router.get(
    "/by-year-range/{start_year}/{end_year}",
    response_model=list[MovieResponse],
    responses=BAD_REQUEST,
)
async def get_movies_by_year_range(
    start_year: int,
    end_year: int,
    service: MovieService = Depends(get_movie_service),
):
    """Movies released within an inclusive year range."""
    return await service.get_by_year_range(start_year, end_year)


@router.get("/by-title/{keyword}", response_model=list[MovieResponse])
async def search_movies_by_title(keyword: str, service: MovieService = Depends(get_movie_service)):
    """Movies whose title contains the keyword (case-insensitive)."""
    return await service.search_by_title(keyword)


@router.get("/top-rated/{count}", response_model=list[MovieResponse])
async def get_top_rated_movies(count: int, service: MovieService = Depends(get_movie_service)):
    """Up to `count` reviewed movies, best average rating first."""
    return await service.get_top_rated(count)


@router.get("/by-min-rating/{min_rating}", response_model=list[MovieResponse], responses=BAD_REQUEST)
async def get_movies_by_min_rating(min_rating: float, service: MovieService = Depends(get_movie_service)):
    """Reviewed movies with an average rating of at least `min_rating`."""
    return await service.get_by_min_rating(min_rating)


@router.get("/{movie_id}", response_model=MovieResponse, responses=NOT_FOUND)
async def get_movie(movie_id: int, service: MovieService = Depends(get_movie_service)):
    """Get movie details by ID."""
    movie = await service.get_by_id(movie_id)
    if movie is None:
        raise NotFoundError("Movie", movie_id)
    return movie


@router.put(
    "/{movie_id}",
    response_model=MovieResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def update_movie(
    movie_id: int,
    movie_in: MovieUpdate,
    service: MovieService = Depends(get_movie_service),
):
    """Replace every field of a movie; its reviews are kept."""
    movie = await service.update(movie_id, movie_in)
    if movie is None:
        raise NotFoundError("Movie", movie_id)
    return movie


@router.delete("/{movie_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_movie(movie_id: int, service: MovieService = Depends(get_movie_service)):
    """Delete a movie and all of its reviews."""
    if not await service.delete(movie_id):
        raise NotFoundError("Movie", movie_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
