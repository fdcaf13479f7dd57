"""
Pydantic schemas for Review API.
"""

from pydantic import BaseModel, Field, field_validator


class ReviewCreate(BaseModel):
    """Request body for creating a review."""

    movie_id: int = Field(..., gt=0)
    reviewer_name: str = Field(..., min_length=1, max_length=100)
    rating: int = Field(..., ge=1, le=10)
    comment: str = Field("", max_length=1000)

    @field_validator("reviewer_name")
    @classmethod
    def reviewer_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ReviewUpdate(BaseModel):
    """Request body for replacing a review (the movie cannot change)."""

    id: int = Field(..., gt=0)
    reviewer_name: str = Field(..., min_length=1, max_length=100)
    rating: int = Field(..., ge=1, le=10)
    comment: str = Field("", max_length=1000)

    @field_validator("reviewer_name")
    @classmethod
    def reviewer_name_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class ReviewResponse(BaseModel):
    """Response model for review."""

    id: int
    movie_id: int
    reviewer_name: str
    rating: int
    comment: str


class ReviewWithMovieResponse(ReviewResponse):
    """Response model for review including the reviewed movie's title."""

    movie_title: str
