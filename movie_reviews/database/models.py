"""
SQLAlchemy ORM models for the movie reviews database.

This module defines the Movie and Review tables. A movie owns its reviews:
deleting a movie deletes every review that references it.
"""

from typing import List
from sqlalchemy import (
    Integer, String, ForeignKey, CheckConstraint, Index
)
from sqlalchemy.orm import DeclarativeBase, relationship, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class Movie(Base):
    """
    Movie table storing catalog information.

    Attributes:
        id: Primary key, auto-incremented
        title: Movie title (required, up to 200 characters)
        director: Director name (required, up to 100 characters)
        release_year: Year the movie was released
        genre: Single genre label (e.g. Drama, Comedy)
        reviews: Reviews written for this movie
    """
    __tablename__ = 'movies'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    director: Mapped[str] = mapped_column(String(100), nullable=False)
    release_year: Mapped[int] = mapped_column(Integer, nullable=False)
    genre: Mapped[str] = mapped_column(String(50), nullable=False)

    # Relationships
    reviews: Mapped[List["Review"]] = relationship(
        "Review",
        back_populates="movie",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    # Indexes for the filtered lookups
    __table_args__ = (
        Index('idx_movies_director', 'director'),
        Index('idx_movies_genre', 'genre'),
        Index('idx_movies_year', 'release_year'),
    )

    def __repr__(self) -> str:
        return f"<Movie(id={self.id}, title='{self.title}', year={self.release_year})>"


class Review(Base):
    """
    Review table storing reviewer feedback for movies.

    Attributes:
        id: Primary key, auto-incremented
        movie_id: Foreign key to movies table
        reviewer_name: Name of the reviewer
        rating: Rating value (1 to 10)
        comment: Free-text comment (may be empty)
    """
    __tablename__ = 'reviews'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey('movies.id', ondelete='CASCADE'),
        nullable=False
    )
    reviewer_name: Mapped[str] = mapped_column(String(100), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    comment: Mapped[str] = mapped_column(String(1000), nullable=False, default="")

    # Relationships
    movie: Mapped["Movie"] = relationship("Movie", back_populates="reviews")

    # Constraints and indexes
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 10", name='check_rating_range'),
        Index('idx_reviews_movie', 'movie_id'),
        Index('idx_reviews_reviewer', 'reviewer_name'),
    )

    def __repr__(self) -> str:
        return f"<Review(id={self.id}, movie_id={self.movie_id}, rating={self.rating})>"
