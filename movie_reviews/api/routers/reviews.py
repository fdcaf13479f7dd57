"""
Review API endpoints.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from movie_reviews.api.dependencies import get_review_service
from movie_reviews.api.models import (
    ReviewCreate,
    ReviewUpdate,
    ReviewResponse,
    ReviewWithMovieResponse,
    BAD_REQUEST,
    NOT_FOUND,
)
from movie_reviews.exceptions import NotFoundError
from movie_reviews.services import ReviewService

router = APIRouter(prefix="/reviews", tags=["reviews"])


@router.get("", response_model=list[ReviewResponse])
async def list_reviews(service: ReviewService = Depends(get_review_service)):
    """List all reviews."""
    return await service.get_all()


@router.post(
    "",
    response_model=ReviewResponse,
    status_code=status.HTTP_201_CREATED,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def create_review(
    review_in: ReviewCreate,
    request: Request,
    response: Response,
    service: ReviewService = Depends(get_review_service),
):
    """Add a review to an existing movie."""
    review = await service.create(review_in)
    response.headers["Location"] = str(request.url_for("get_review", review_id=review.id))
    return review


@router.get("/bymovie/{movie_id}", response_model=list[ReviewResponse], responses=BAD_REQUEST)
async def get_reviews_by_movie(movie_id: int, service: ReviewService = Depends(get_review_service)):
    """All reviews of a movie."""
    return await service.get_by_movie_id(movie_id)


@router.get("/bymovie/{movie_id}/count", response_model=int, responses=BAD_REQUEST)
async def count_reviews_by_movie(movie_id: int, service: ReviewService = Depends(get_review_service)):
    """Number of reviews of a movie."""
    return await service.count_by_movie_id(movie_id)


@router.get("/bymovie/{movie_id}/average", response_model=float, responses=BAD_REQUEST)
async def average_rating_by_movie(movie_id: int, service: ReviewService = Depends(get_review_service)):
    """Average rating of a movie (0 when it has no reviews)."""
    return await service.get_average_rating_by_movie_id(movie_id)


@router.get("/by-reviewer/{reviewer_name}", response_model=list[ReviewResponse])
async def get_reviews_by_reviewer(
    reviewer_name: str,
    service: ReviewService = Depends(get_review_service),
):
    """Reviews written by a reviewer (exact name, blank yields none)."""
    return await service.get_by_reviewer(reviewer_name)


@router.get("/by-min-rating/{min_rating}", response_model=list[ReviewResponse], responses=BAD_REQUEST)
async def get_reviews_by_min_rating(min_rating: int, service: ReviewService = Depends(get_review_service)):
    """Reviews rated `min_rating` or higher."""
    return await service.get_by_minimum_rating(min_rating)


@router.get("/with-movie/{review_id}", response_model=ReviewWithMovieResponse, responses=NOT_FOUND)
async def get_review_with_movie(review_id: int, service: ReviewService = Depends(get_review_service)):
    """A review together with the title of its movie."""
    review = await service.get_with_movie_by_id(review_id)
    if review is None:
        raise NotFoundError("Review", review_id)
    return review


@router.get("/{review_id}", response_model=ReviewResponse, responses=NOT_FOUND)
async def get_review(review_id: int, service: ReviewService = Depends(get_review_service)):
    """Get a review by ID."""
    review = await service.get_by_id(review_id)
    if review is None:
        raise NotFoundError("Review", review_id)
    return review


@router.put(
    "/{review_id}",
    response_model=ReviewResponse,
    responses={**BAD_REQUEST, **NOT_FOUND},
)
async def update_review(
    review_id: int,
    review_in: ReviewUpdate,
    service: ReviewService = Depends(get_review_service),
):
    """Replace a review's reviewer, rating and comment."""
    review = await service.update(review_id, review_in)
    if review is None:
        raise NotFoundError("Review", review_id)
    return review


@router.delete("/{review_id}", status_code=status.HTTP_204_NO_CONTENT, responses=NOT_FOUND)
async def delete_review(review_id: int, service: ReviewService = Depends(get_review_service)):
    """Delete a review."""
    if not await service.delete(review_id):
        raise NotFoundError("Review", review_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
