"""
Shared fixtures: an in-memory database per test and an HTTP client bound to it.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from movie_reviews.api.dependencies import get_db
from movie_reviews.api.main import app
from movie_reviews.database.connection import DatabaseManager
from movie_reviews.database.models import Movie, Review

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def db_manager():
    """Fresh in-memory database with all tables created."""
    manager = DatabaseManager(database_url=TEST_DATABASE_URL)
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest_asyncio.fixture
async def session(db_manager):
    """Session on the test database."""
    async with db_manager.session_scope() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_manager):
    """AsyncClient talking to the app, with sessions taken from the test database."""
    async def override_get_db():
        async with db_manager.session_scope() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides = {}


@pytest.fixture
def make_movie(session):
    """Factory inserting a movie with one review per rating."""
    async def _make_movie(
        title,
        director="Christopher Nolan",
        release_year=2010,
        genre="Sci-Fi",
        ratings=(),
    ):
        movie = Movie(
            title=title,
            director=director,
            release_year=release_year,
            genre=genre,
            reviews=[
                Review(reviewer_name=f"reviewer{i}", rating=rating, comment="")
                for i, rating in enumerate(ratings)
            ],
        )
        session.add(movie)
        await session.commit()
        return movie

    return _make_movie
