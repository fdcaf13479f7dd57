"""
Tests for the Movie and Review repositories.

Each test runs against a fresh in-memory SQLite database.
"""

import pytest
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from movie_reviews.database.models import Movie, Review
from movie_reviews.database.repositories import MovieRepository, ReviewRepository
from movie_reviews.exceptions import NotFoundError


@pytest.fixture
def movie_repo(session):
    return MovieRepository(session)


@pytest.fixture
def review_repo(session):
    return ReviewRepository(session)


class TestMovieRepositoryCRUD:
    """Tests for basic movie persistence."""

    @pytest.mark.asyncio
    async def test_add_and_get_by_id(self, movie_repo):
        movie = Movie(
            title="Inception",
            director="Christopher Nolan",
            release_year=2010,
            genre="Sci-Fi",
            reviews=[],
        )
        await movie_repo.add(movie)

        assert movie.id is not None
        loaded = await movie_repo.get_by_id(movie.id)
        assert loaded.title == "Inception"
        assert loaded.director == "Christopher Nolan"
        assert loaded.release_year == 2010
        assert loaded.genre == "Sci-Fi"
        assert loaded.reviews == []

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self, movie_repo):
        assert await movie_repo.get_by_id(999) is None

    @pytest.mark.asyncio
    async def test_get_all_ordered_by_id(self, movie_repo, make_movie):
        first = await make_movie("Memento")
        second = await make_movie("Dunkirk")

        movies = await movie_repo.get_all()
        assert [m.id for m in movies] == [first.id, second.id]

    @pytest.mark.asyncio
    async def test_update(self, movie_repo, make_movie):
        movie = await make_movie("Inception", ratings=[8])
        movie.title = "Inception (Director's Cut)"
        await movie_repo.update(movie)

        loaded = await movie_repo.get_by_id(movie.id)
        assert loaded.title == "Inception (Director's Cut)"
        assert len(loaded.reviews) == 1

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, movie_repo):
        ghost = Movie(id=999, title="Ghost", director="Nobody", release_year=2000, genre="Drama")
        with pytest.raises(NotFoundError):
            await movie_repo.update(ghost)

    @pytest.mark.asyncio
    async def test_delete_removes_reviews(self, movie_repo, review_repo, make_movie):
        movie = await make_movie("Inception", ratings=[8, 6])
        review_ids = [r.id for r in movie.reviews]

        await movie_repo.delete(movie)

        assert await movie_repo.get_by_id(movie.id) is None
        for review_id in review_ids:
            assert await review_repo.get_by_id(review_id) is None

    @pytest.mark.asyncio
    async def test_database_cascade_on_bulk_delete(self, session, make_movie):
        """The foreign key itself removes reviews when a movie row is deleted."""
        movie = await make_movie("Inception", ratings=[8, 6])

        await session.execute(delete(Movie).where(Movie.id == movie.id))
        await session.commit()

        count = (await session.execute(select(func.count(Review.id)))).scalar_one()
        assert count == 0


class TestMovieRepositoryQueries:
    """Tests for filtered movie lookups."""

    @pytest.mark.asyncio
    async def test_get_with_reviews(self, movie_repo, make_movie):
        reviewed = await make_movie("Inception", ratings=[7])
        await make_movie("Tenet")

        movies = await movie_repo.get_with_reviews()
        assert [m.id for m in movies] == [reviewed.id]

    @pytest.mark.asyncio
    async def test_get_by_director_trims_input(self, movie_repo, make_movie):
        await make_movie("Inception")
        await make_movie("Spirited Away", director="Hayao Miyazaki")

        movies = await movie_repo.get_by_director("  Hayao Miyazaki ")
        assert [m.title for m in movies] == ["Spirited Away"]

    @pytest.mark.asyncio
    async def test_get_by_director_blank(self, movie_repo, make_movie):
        await make_movie("Inception")
        assert await movie_repo.get_by_director("   ") == []

    @pytest.mark.asyncio
    async def test_get_by_genre_exact(self, movie_repo, make_movie):
        await make_movie("Inception", genre="Sci-Fi")
        await make_movie("Memento", genre="Thriller")

        movies = await movie_repo.get_by_genre("Thriller")
        assert [m.title for m in movies] == ["Memento"]
        assert await movie_repo.get_by_genre("") == []

    @pytest.mark.asyncio
    async def test_get_by_release_year(self, movie_repo, make_movie):
        await make_movie("Inception", release_year=2010)
        await make_movie("Interstellar", release_year=2014)

        movies = await movie_repo.get_by_release_year(2014)
        assert [m.title for m in movies] == ["Interstellar"]

    @pytest.mark.asyncio
    async def test_get_by_year_range_inclusive(self, movie_repo, make_movie):
        await make_movie("Interstellar", release_year=2014)
        await make_movie("Memento", release_year=2000)
        await make_movie("Inception", release_year=2010)
        await make_movie("Tenet", release_year=2020)

        movies = await movie_repo.get_by_year_range(2000, 2014)
        assert [m.title for m in movies] == ["Memento", "Inception", "Interstellar"]

    @pytest.mark.asyncio
    async def test_get_by_year_range_reversed(self, movie_repo):
        with pytest.raises(ValueError):
            await movie_repo.get_by_year_range(2014, 2000)

    @pytest.mark.asyncio
    async def test_search_by_title_case_insensitive(self, movie_repo, make_movie):
        await make_movie("The Dark Knight")
        await make_movie("Dark City")
        await make_movie("Inception")

        movies = await movie_repo.search_by_title("dark")
        assert [m.title for m in movies] == ["The Dark Knight", "Dark City"]
        assert await movie_repo.search_by_title(" ") == []

    @pytest.mark.asyncio
    async def test_get_top_rated(self, movie_repo, make_movie):
        seven = await make_movie("Inception", ratings=[8, 6])
        nine = await make_movie("Interstellar", ratings=[9])
        five = await make_movie("Tenet", ratings=[5, 5])
        await make_movie("Following")

        top_two = await movie_repo.get_top_rated(2)
        assert [m.id for m in top_two] == [nine.id, seven.id]

        everything = await movie_repo.get_top_rated(10)
        assert [m.id for m in everything] == [nine.id, seven.id, five.id]

    @pytest.mark.asyncio
    async def test_get_top_rated_non_positive_count(self, movie_repo, make_movie):
        await make_movie("Inception", ratings=[8])
        assert await movie_repo.get_top_rated(0) == []
        assert await movie_repo.get_top_rated(-3) == []

    @pytest.mark.asyncio
    async def test_get_by_min_rating(self, movie_repo, make_movie):
        seven = await make_movie("Inception", ratings=[8, 6])
        nine = await make_movie("Interstellar", ratings=[9])
        await make_movie("Tenet", ratings=[5, 5])
        await make_movie("Following")

        movies = await movie_repo.get_by_min_rating(7)
        assert [m.id for m in movies] == [seven.id, nine.id]

    @pytest.mark.asyncio
    async def test_genres_and_counts(self, movie_repo, make_movie):
        await make_movie("Inception", genre="Sci-Fi")
        await make_movie("Interstellar", genre="Sci-Fi")
        await make_movie("Memento", genre="Thriller")

        assert await movie_repo.get_all_genres() == ["Sci-Fi", "Thriller"]
        assert await movie_repo.count_by_genre("Sci-Fi") == 2
        assert await movie_repo.count_by_genre("Western") == 0
        assert await movie_repo.count_by_genre("  ") == 0


class TestReviewRepository:
    """Tests for review persistence and lookups."""

    @pytest.mark.asyncio
    async def test_add_and_get_by_id_loads_movie(self, review_repo, make_movie):
        movie = await make_movie("Inception")
        review = Review(movie_id=movie.id, reviewer_name="alice", rating=9, comment="Great")
        await review_repo.add(review)

        loaded = await review_repo.get_by_id(review.id)
        assert loaded.reviewer_name == "alice"
        assert loaded.rating == 9
        assert loaded.comment == "Great"
        assert loaded.movie.title == "Inception"

    @pytest.mark.asyncio
    async def test_new_review_visible_through_movie(self, movie_repo, review_repo, make_movie):
        movie = await make_movie("Inception", ratings=[8])
        await review_repo.add(Review(movie_id=movie.id, reviewer_name="bob", rating=6, comment=""))

        loaded = await movie_repo.get_by_id(movie.id)
        assert sorted(r.rating for r in loaded.reviews) == [6, 8]

    @pytest.mark.asyncio
    async def test_update_and_delete(self, review_repo, make_movie):
        movie = await make_movie("Inception", ratings=[8])
        review = movie.reviews[0]

        review.rating = 3
        await review_repo.update(review)
        assert (await review_repo.get_by_id(review.id)).rating == 3

        await review_repo.delete(review)
        assert await review_repo.get_by_id(review.id) is None

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, review_repo):
        ghost = Review(id=999, movie_id=1, reviewer_name="ghost", rating=5, comment="")
        with pytest.raises(NotFoundError):
            await review_repo.update(ghost)

    @pytest.mark.asyncio
    async def test_queries(self, review_repo, make_movie):
        inception = await make_movie("Inception", ratings=[8, 6])
        tenet = await make_movie("Tenet", ratings=[3])

        by_movie = await review_repo.get_by_movie_id(inception.id)
        assert sorted(r.rating for r in by_movie) == [6, 8]
        assert await review_repo.count_by_movie_id(tenet.id) == 1
        assert await review_repo.count_by_movie_id(999) == 0

        in_range = await review_repo.get_by_rating_range(6, 10)
        assert sorted(r.rating for r in in_range) == [6, 8]

        by_reviewer = await review_repo.get_by_reviewer_name("reviewer0")
        assert {r.movie_id for r in by_reviewer} == {inception.id, tenet.id}

    @pytest.mark.asyncio
    async def test_rating_out_of_range_rejected(self, session, review_repo, make_movie):
        movie = await make_movie("Inception")
        with pytest.raises(IntegrityError):
            await review_repo.add(Review(movie_id=movie.id, reviewer_name="x", rating=11, comment=""))
        await session.rollback()

    @pytest.mark.asyncio
    async def test_review_for_unknown_movie_rejected(self, review_repo):
        with pytest.raises(NotFoundError) as exc:
            await review_repo.add(Review(movie_id=424242, reviewer_name="x", rating=5, comment=""))
        assert exc.value.resource == "Movie"
        assert exc.value.identifier == 424242

    @pytest.mark.asyncio
    async def test_review_for_deleted_movie_rejected(self, movie_repo, review_repo, make_movie):
        movie = await make_movie("Inception")
        movie_id = movie.id
        await movie_repo.delete(movie)

        with pytest.raises(NotFoundError):
            await review_repo.add(Review(movie_id=movie_id, reviewer_name="x", rating=5, comment=""))
        assert await review_repo.get_all() == []

    @pytest.mark.asyncio
    async def test_out_of_range_ids_are_missing(self, movie_repo, review_repo, make_movie):
        huge = 2 ** 70
        await make_movie("Inception", ratings=[8])

        assert await movie_repo.get_by_id(huge) is None
        assert await movie_repo.get_by_id(-huge) is None
        assert await review_repo.get_by_id(huge) is None
        assert await review_repo.get_by_movie_id(huge) == []
        assert await review_repo.count_by_movie_id(huge) == 0
        assert len(await movie_repo.get_top_rated(huge)) == 1
        assert len(await movie_repo.get_by_year_range(-huge, huge)) == 1

        ghost = Movie(id=huge, title="Ghost", director="Nobody", release_year=2000, genre="Drama")
        with pytest.raises(NotFoundError):
            await movie_repo.update(ghost)
