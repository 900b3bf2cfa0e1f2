from __future__ import annotations

import asyncio

import pytest

from app.models import Movie
from app.services.catalog import SIMILAR_MOVIES_LIMIT, CatalogService
from app.services.movie_store import InMemoryMovieStore, StoreUnavailableError

from conftest import make_movie


class FailingMovieStore(InMemoryMovieStore):
    """Store stub whose queries always fail."""

    async def fetch_movie(self, movie_id: int) -> Movie | None:  # type: ignore[override]
        raise StoreUnavailableError("store offline")

    async def fetch_movies_by_genre(self, genre, *, exclude_id=None, limit, offset=0):  # type: ignore[override]
        raise StoreUnavailableError("store offline")


class RecordingMovieStore(InMemoryMovieStore):
    """In-memory store that remembers the genre queries it received."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.genre_queries: list[tuple[str, int | None, int]] = []

    async def fetch_movies_by_genre(self, genre, *, exclude_id=None, limit, offset=0):  # type: ignore[override]
        self.genre_queries.append((genre, exclude_id, limit))
        return await super().fetch_movies_by_genre(
            genre, exclude_id=exclude_id, limit=limit, offset=offset
        )


def test_get_movie_returns_requested_record(catalog_movies) -> None:
    service = CatalogService(InMemoryMovieStore(catalog_movies))

    for expected in catalog_movies:
        movie = asyncio.run(service.get_movie(expected.id))
        assert movie is not None
        assert movie.id == expected.id


def test_get_movie_returns_none_for_unknown_id(catalog_movies) -> None:
    service = CatalogService(InMemoryMovieStore(catalog_movies))

    assert asyncio.run(service.get_movie(404)) is None


def test_get_movie_propagates_store_failures() -> None:
    """Outages must stay distinguishable from a genuine miss."""

    service = CatalogService(FailingMovieStore())

    with pytest.raises(StoreUnavailableError):
        asyncio.run(service.get_movie(1))


def test_similar_movies_share_first_genre_and_exclude_self(catalog_movies) -> None:
    store = RecordingMovieStore(catalog_movies)
    service = CatalogService(store)
    heat = catalog_movies[0]

    similar = asyncio.run(service.get_similar_movies(heat))

    assert store.genre_queries == [("Action", 1, SIMILAR_MOVIES_LIMIT)]
    assert len(similar) <= 4
    assert heat.id not in {movie.id for movie in similar}
    assert all("Action" in movie.genres for movie in similar)
    ratings = [movie.vote_average for movie in similar]
    assert ratings == sorted(ratings, reverse=True)
    assert [movie.title for movie in similar] == ["Die Hard", "Taken", "Speed", "Ronin"]


def test_similar_movies_empty_when_nothing_matches(catalog_movies) -> None:
    service = CatalogService(InMemoryMovieStore(catalog_movies))
    loner = make_movie(99, genres=["Documentaire"])

    assert asyncio.run(service.get_similar_movies(loner)) == []


def test_similar_movies_empty_without_genres(catalog_movies) -> None:
    store = RecordingMovieStore(catalog_movies)
    service = CatalogService(store)

    assert asyncio.run(service.get_similar_movies(make_movie(99, genres=[]))) == []
    assert store.genre_queries == []


def test_similar_movies_empty_when_store_fails() -> None:
    service = CatalogService(FailingMovieStore())

    assert asyncio.run(service.get_similar_movies(make_movie(1))) == []


def test_category_page_paginates_best_rated_first(catalog_movies) -> None:
    service = CatalogService(InMemoryMovieStore(catalog_movies))

    first = asyncio.run(service.get_category_page("Action", page=1, page_size=4))
    second = asyncio.run(service.get_category_page("Action", page=2, page_size=4))

    assert [movie.id for movie in first.movies] == [1, 6, 4, 2]
    assert [movie.id for movie in second.movies] == [3, 5]
    assert first.pagination.total_pages == 2
    assert second.pagination.current_page == 2
    assert second.pagination.base_url == "/category/Action"


def test_category_page_past_the_end_is_empty(catalog_movies) -> None:
    service = CatalogService(InMemoryMovieStore(catalog_movies))

    listing = asyncio.run(service.get_category_page("Action", page=9, page_size=4))

    assert listing.movies == []
    assert listing.pagination.total_pages == 2
