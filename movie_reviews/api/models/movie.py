"""
Pydantic schemas for Movie API.
"""

from pydantic import BaseModel, Field, field_validator

from movie_reviews.api.models.review import ReviewResponse


class MovieCreate(BaseModel):
    """Request body for creating a movie."""

    title: str = Field(..., min_length=1, max_length=200)
    director: str = Field(..., min_length=1, max_length=100)
    release_year: int = Field(..., ge=1888, le=2100)
    genre: str = Field(..., min_length=3, max_length=50)

    @field_validator("title", "director", "genre")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class MovieUpdate(MovieCreate):
    """Request body for replacing a movie; every field is required."""

    id: int = Field(..., gt=0)


class MovieResponse(BaseModel):
    """Response model for a single movie with its average rating."""

    id: int
    title: str
    director: str
    release_year: int
    genre: str
    average_rating: float


class MovieWithReviewsResponse(MovieResponse):
    """Response model for a movie including its reviews."""

    reviews: list[ReviewResponse]
